"""API wrapper for the Google Civic Information representatives endpoint."""

from __future__ import annotations
import logging
from typing import Any, Dict, Optional

import requests

from .errors import UpstreamError


logger = logging.getLogger(__name__)

# National-level legislative offices only
LEVELS = ["country"]
ROLES = ["legislatorUpperBody", "legislatorLowerBody"]


class CivicInfoClient:
    """Looks up the federal legislators for an address or zip code."""

    def __init__(
        self,
        api_key: str,
        base_url: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ):
        self.api_key = api_key
        self.base_url = base_url
        self.session = session or requests.Session()
        self.timeout = timeout

    def fetch_representatives(self, address: str) -> Dict[str, Any]:
        """
        Make a single request to the provider with error handling.

        Args:
            address: Address or 5-digit zip code

        Returns:
            Decoded JSON payload with ``offices`` and ``officials`` lists

        Raises:
            UpstreamError: on transport failure, non-2xx status or malformed body
        """
        params = {
            "address": address,
            "levels": LEVELS,
            "roles": ROLES,
            "key": self.api_key,
        }

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise UpstreamError("Civic data lookup timed out. Please try again.")
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"Civic data lookup failed: {e}")

        if not response.ok:
            if response.status_code == 429:
                raise UpstreamError("Civic data rate limit exceeded. Please wait a few minutes.")
            if response.status_code in (401, 403):
                raise UpstreamError("Civic data API key was rejected.")
            raise UpstreamError(
                f"Civic data API error: {response.status_code} {response.reason}"
            )

        try:
            data = response.json()
        except ValueError:
            raise UpstreamError("Civic data API returned a non-JSON response")

        if not isinstance(data, dict):
            raise UpstreamError("Civic data API returned an unexpected payload")

        for key in ("offices", "officials"):
            if key in data and not isinstance(data[key], list):
                raise UpstreamError(f"Civic data API returned a malformed '{key}' field")

        logger.debug(
            "Civic lookup for %s returned %d offices",
            address, len(data.get("offices") or []),
        )
        return data
