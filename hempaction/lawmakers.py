"""Zip code lookup and lawmaker reconciliation against Supabase."""

from __future__ import annotations
import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional

from postgrest.exceptions import APIError
from supabase import Client

from .civic_api import CivicInfoClient
from .errors import ResolutionError, ValidationError, is_invalid_id, is_unique_violation
from .models import Lawmaker, LookupResult


logger = logging.getLogger(__name__)

ZIP_CODE_RE = re.compile(r"^[0-9]{5}$")
STATE_RE = re.compile(r"state:([a-z]{2})")
DISTRICT_RE = re.compile(r"/cd:(\d+)")
SENATE_RE = re.compile(r"\bsenat(e|or)s?\b")
HOUSE_RE = re.compile(r"\b(house|representatives?)\b")


def utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


def validate_zip_code(zip_code: Any) -> str:
    """Return the zip code unchanged or raise ValidationError."""
    if not isinstance(zip_code, str) or not ZIP_CODE_RE.fullmatch(zip_code):
        raise ValidationError("Invalid zip code. Must be 5 digits.")
    return zip_code


def detect_chamber(office_name: str, roles: Optional[List[str]] = None) -> Optional[str]:
    """
    Map a provider office to 'senate' or 'house' (None if neither).

    The office name decides ("U.S. Senator", "U.S. House of Representatives").
    When the name matches neither chamber, the provider's role list is
    consulted as well, so an office titled e.g. "Member of Congress" is kept
    instead of skipped. Offices with neither signal are skipped.
    """
    name = (office_name or "").lower()
    if SENATE_RE.search(name):
        return "senate"
    if HOUSE_RE.search(name):
        return "house"
    roles = roles or []
    if "legislatorUpperBody" in roles:
        return "senate"
    if "legislatorLowerBody" in roles:
        return "house"
    return None


def normalize_name(name: str) -> str:
    return re.sub(r"\s+", "-", name.strip().lower())


def make_external_id(state: str, chamber: str, name: str) -> str:
    """Stable key for one lawmaker, e.g. 'ca-senate-alex-padilla'."""
    return f"{state.lower()}-{chamber}-{normalize_name(name)}"


def extract_state(payload: Dict[str, Any]) -> Optional[str]:
    """
    Find the two-letter state code for a civic lookup.

    Prefers the provider's normalized address, then any office division id
    (e.g. "ocd-division/country:us/state:ca/cd:36").
    """
    normalized = payload.get("normalizedInput") or {}
    state = (normalized.get("state") or "").strip()
    if len(state) == 2 and state.isalpha():
        return state.upper()

    for office in payload.get("offices") or []:
        match = STATE_RE.search(office.get("divisionId") or "")
        if match:
            return match.group(1).upper()
    return None


def extract_district(division_id: str) -> Optional[str]:
    match = DISTRICT_RE.search(division_id or "")
    if not match:
        return None
    return str(int(match.group(1)))


def _first(values: Optional[List[Any]]) -> Optional[Any]:
    return values[0] if values else None


def build_lawmaker_fields(
    official: Dict[str, Any],
    chamber: str,
    state: str,
    division_id: str,
) -> Dict[str, Any]:
    """Row values for a newly seen lawmaker. Campaign fields keep their defaults."""
    return {
        "name": official["name"].strip(),
        "chamber": chamber,
        "state": state,
        "district": extract_district(division_id) if chamber == "house" else None,
        "party": official.get("party") or None,
        "photo_url": official.get("photoUrl") or None,
        "email": _first(official.get("emails")),
        "phone": _first(official.get("phones")),
        "contact_form_url": _first(official.get("urls")),
        "office_addresses": official.get("address") or None,
    }


class LawmakerStore:
    """Insert-or-refresh of lawmaker rows keyed on external_id."""

    table = "lawmakers"

    def __init__(self, client: Client):
        self.client = client

    def find_id(self, external_id: str) -> Optional[str]:
        response = self.client.table(self.table) \
            .select("id") \
            .eq("external_id", external_id) \
            .limit(1) \
            .execute()
        return response.data[0]["id"] if response.data else None

    def reconcile(self, external_id: str, fields: Dict[str, Any]) -> Optional[str]:
        """
        Refresh an existing lawmaker or insert a new one.

        Existing rows only get ``last_synced_at`` bumped; curated fields
        (stance, funding, contact corrections) are never overwritten.

        Returns:
            Lawmaker id, or None when the row could not be written
        """
        now = utc_now_iso()
        try:
            existing_id = self.find_id(external_id)
        except APIError as e:
            logger.error("Error looking up lawmaker %s: %s", external_id, e)
            return None

        if existing_id:
            try:
                self.client.table(self.table) \
                    .update({"last_synced_at": now}) \
                    .eq("id", existing_id) \
                    .execute()
            except APIError as e:
                # Row is still valid, only the sync timestamp is stale
                logger.warning("Could not refresh last_synced_at for %s: %s", external_id, e)
            return existing_id

        row = dict(fields, external_id=external_id, last_synced_at=now)
        try:
            response = self.client.table(self.table).insert(row).execute()
        except APIError as e:
            error = e
            if is_unique_violation(e):
                # Another lookup inserted the same lawmaker first
                try:
                    return self.find_id(external_id)
                except APIError as retry_error:
                    error = retry_error
            logger.error("Error creating lawmaker %s: %s", external_id, error)
            return None

        if not response.data:
            logger.error("Insert for lawmaker %s returned no row", external_id)
            return None
        logger.info("Created lawmaker %s", external_id)
        return response.data[0]["id"]

    def fetch_many(self, ids: List[str]) -> List[Lawmaker]:
        """Full rows for ``ids``, in the same order."""
        if not ids:
            return []
        response = self.client.table(self.table).select("*").in_("id", ids).execute()
        by_id = {row["id"]: row for row in response.data}
        return [Lawmaker.from_row(by_id[i]) for i in ids if i in by_id]

    def get(self, lawmaker_id: str) -> Optional[Lawmaker]:
        try:
            response = self.client.table(self.table) \
                .select("*") \
                .eq("id", lawmaker_id) \
                .limit(1) \
                .execute()
        except APIError as e:
            # Malformed uuid
            if is_invalid_id(e):
                return None
            raise
        return Lawmaker.from_row(response.data[0]) if response.data else None


def partition(lawmakers: Iterable[Lawmaker]) -> LookupResult:
    """
    Split lawmakers into senators and a single representative.

    When several house members match (at-large or redistricting edge cases)
    the first one wins.
    """
    lawmakers = list(lawmakers)
    senators = [lm for lm in lawmakers if lm.chamber == "senate"]
    house = [lm for lm in lawmakers if lm.chamber == "house"]
    if len(house) > 1:
        logger.warning(
            "Found %d house matches, keeping %s",
            len(house), house[0].external_id or house[0].name,
        )
    return LookupResult(senators=senators, representative=house[0] if house else None)


class LawmakerResolver:
    """Maps a zip code to its federal lawmakers and keeps the lawmakers table in sync."""

    def __init__(self, civic: CivicInfoClient, store: LawmakerStore):
        self.civic = civic
        self.store = store

    def resolve_ids(self, zip_code: str) -> List[str]:
        """Look up ``zip_code`` and reconcile every official found; returns lawmaker ids."""
        validate_zip_code(zip_code)

        payload = self.civic.fetch_representatives(zip_code)

        state = extract_state(payload)
        if not state:
            raise ResolutionError(f"Zip code {zip_code} does not match a recognized address.")

        officials = payload.get("officials") or []
        lawmaker_ids: List[str] = []
        seen = set()

        for office in payload.get("offices") or []:
            indices = office.get("officialIndices") or []
            if not indices:
                continue

            office_name = office.get("name", "")
            chamber = detect_chamber(office_name, office.get("roles"))
            if chamber is None:
                logger.warning("Skipping office %r: not a senate or house seat", office_name)
                continue

            division_id = office.get("divisionId") or ""
            for index in indices:
                if not isinstance(index, int) or not 0 <= index < len(officials):
                    logger.warning("Skipping official index %r for office %r", index, office_name)
                    continue
                official = officials[index]
                if not official.get("name"):
                    logger.warning("Skipping unnamed official in office %r", office_name)
                    continue

                external_id = make_external_id(state, chamber, official["name"])
                if external_id in seen:
                    continue
                seen.add(external_id)

                fields = build_lawmaker_fields(official, chamber, state, division_id)
                lawmaker_id = self.store.reconcile(external_id, fields)
                if lawmaker_id and lawmaker_id not in lawmaker_ids:
                    lawmaker_ids.append(lawmaker_id)

        return lawmaker_ids

    def lookup(self, zip_code: str) -> LookupResult:
        """
        Find the senators and representative for a zip code.

        Args:
            zip_code: Exactly five digits

        Returns:
            LookupResult (possibly empty)

        Raises:
            ValidationError: bad zip code (before any network call)
            ResolutionError: provider couldn't place the zip code in a state
            UpstreamError: provider failure or malformed payload
        """
        ids = self.resolve_ids(zip_code)
        result = partition(self.store.fetch_many(ids))
        logger.info(
            "Lookup %s: %d senators, representative %s",
            zip_code, len(result.senators),
            "found" if result.representative else "not found",
        )
        return result
