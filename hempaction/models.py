"""Data models for the hemp action campaign."""

from __future__ import annotations
from dataclasses import dataclass, field, fields, asdict
from typing import Any, Dict, List, Optional


USER_ROLES = ("business_owner", "employee", "consumer", "medical_user", "veteran")

ROLE_LABELS = {
    "business_owner": "Business Owner",
    "employee": "Employee",
    "consumer": "Consumer",
    "medical_user": "Medical User",
    "veteran": "Veteran",
}

CHAMBERS = ("senate", "house")

HEMP_STANCES = ("champion", "opposed", "ban_supporter", "unknown")

EMAIL_STATUSES = ("sent", "failed", "bounced")

CAMPAIGN_GOAL = 50000


def _known_fields(cls, row: Dict[str, Any]) -> Dict[str, Any]:
    """Drop columns the dataclass doesn't know about."""
    names = {f.name for f in fields(cls)}
    return {k: v for k, v in row.items() if k in names}


@dataclass
class Lawmaker:
    """Represents a federal senator or representative."""
    id: str
    name: str
    chamber: str  # 'senate' or 'house'
    state: str  # two-letter code, e.g. 'CA'
    external_id: Optional[str] = None
    district: Optional[str] = None  # house members only
    party: Optional[str] = None
    photo_url: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    contact_form_url: Optional[str] = None
    office_addresses: Optional[List[Dict[str, Any]]] = None

    # Manually curated campaign fields
    hemp_stance: str = "unknown"
    alcohol_funding_total: Optional[float] = None
    alcohol_funding_cycle: Optional[str] = None
    key_quote: Optional[str] = None
    quote_source_url: Optional[str] = None
    featured: bool = False

    last_synced_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Lawmaker":
        return cls(**_known_fields(cls, row))

    @property
    def is_senator(self) -> bool:
        return self.chamber == "senate"

    @property
    def honorific(self) -> str:
        return "Senator" if self.is_senator else "Representative"

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class User:
    """A visitor who signed up through the action form."""
    id: str
    email: str
    zip_code: str
    role: str
    name: Optional[str] = None
    phone: Optional[str] = None
    business_name: Optional[str] = None
    state: Optional[str] = None
    story_opt_in: bool = False
    weekly_digest_opt_in: bool = False
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "User":
        return cls(**_known_fields(cls, row))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class EmailAction:
    """One email sent from a user to a lawmaker (append-only log)."""
    id: Optional[str]
    user_id: str
    lawmaker_id: str
    email_subject: str
    email_body: str
    status: str = "sent"  # 'sent', 'failed', 'bounced'
    resend_message_id: Optional[str] = None
    sent_at: Optional[str] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "EmailAction":
        return cls(**_known_fields(cls, row))


@dataclass
class CampaignStats:
    """Aggregate participation counters."""
    total_users: int = 0
    total_emails: int = 0

    @property
    def total_actions(self) -> int:
        return self.total_users + self.total_emails

    def progress_percent(self, goal: int = CAMPAIGN_GOAL) -> float:
        if goal <= 0:
            return 100.0
        return min(self.total_actions / goal * 100, 100.0)


@dataclass
class LookupResult:
    """Lawmakers representing a zip code."""
    senators: List[Lawmaker] = field(default_factory=list)
    representative: Optional[Lawmaker] = None

    def all(self) -> List[Lawmaker]:
        found = list(self.senators)
        if self.representative:
            found.append(self.representative)
        return found

    def is_empty(self) -> bool:
        return not self.senators and self.representative is None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "senators": [s.to_dict() for s in self.senators],
            "representative": self.representative.to_dict() if self.representative else None,
        }


@dataclass(frozen=True)
class EmailTemplate:
    subject: str
    body: str
