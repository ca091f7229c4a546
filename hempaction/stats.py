"""Campaign participation counters."""

from __future__ import annotations
import logging
from datetime import datetime, timezone
from typing import Optional

from supabase import Client

from .models import CampaignStats


logger = logging.getLogger(__name__)


class StatsAggregator:
    """
    Reads the campaign_stats view and remembers the last good snapshot.

    A failed read keeps the previous numbers and records the error, so a
    transient outage never shows the campaign at zero.
    """

    view = "campaign_stats"

    def __init__(self, client: Client):
        self.client = client
        self.stats = CampaignStats()
        self.loading = True
        self.error: Optional[str] = None
        self.updated_at: Optional[datetime] = None

    @property
    def has_data(self) -> bool:
        return self.updated_at is not None

    def fetch(self) -> CampaignStats:
        response = self.client.table(self.view).select("*").limit(1).execute()
        row = response.data[0] if response.data else {}
        return CampaignStats(
            total_users=int(row.get("total_users") or 0),
            total_emails=int(row.get("total_emails") or 0),
        )

    def refresh(self) -> CampaignStats:
        """Re-read the counters; returns whatever should be displayed now."""
        try:
            self.stats = self.fetch()
            self.error = None
            self.updated_at = datetime.now(timezone.utc)
        except Exception as e:
            logger.error("Error fetching campaign stats: %s", e)
            self.error = "Failed to load stats. Please try again later."
        finally:
            self.loading = False
        return self.stats
