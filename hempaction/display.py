"""Formatting helpers for the Streamlit page."""

from __future__ import annotations
from typing import Iterable

import pandas as pd

from .models import Lawmaker


URGENCY_COLORS = {
    "calm": "green",
    "warning": "orange",
    "critical": "red",
}

STANCE_BADGES = {
    "champion": "🌿 Hemp Champion",
    "opposed": "✋ Opposes the Ban",
    "ban_supporter": "⚠️ Supports the Ban",
    "unknown": "❔ Stance Unknown",
}

PARTY_ABBREVIATIONS = {
    "democratic party": "D",
    "democrat": "D",
    "democratic": "D",
    "republican party": "R",
    "republican": "R",
    "independent": "I",
}


def party_abbreviation(party: str | None) -> str:
    if not party:
        return "?"
    return PARTY_ABBREVIATIONS.get(party.strip().lower(), party.strip()[:1].upper())


def lawmaker_subtitle(lawmaker: Lawmaker) -> str:
    """e.g. 'Senator · D-CA' or 'Representative · R-TX, District 7'."""
    label = f"{lawmaker.honorific} · {party_abbreviation(lawmaker.party)}-{lawmaker.state}"
    if lawmaker.chamber == "house" and lawmaker.district:
        label += f", District {lawmaker.district}"
    return label


def stance_badge(lawmaker: Lawmaker) -> str:
    return STANCE_BADGES.get(lawmaker.hemp_stance, STANCE_BADGES["unknown"])


def contact_table(lawmakers: Iterable[Lawmaker]) -> pd.DataFrame:
    """One row per lawmaker with the ways to reach them."""
    rows = [
        {
            "Name": lm.name,
            "Office": lm.honorific,
            "State": lm.state,
            "District": lm.district or "",
            "Party": lm.party or "",
            "Phone": lm.phone or "",
            "Email": lm.email or "",
            "Contact Form": lm.contact_form_url or "",
        }
        for lm in lawmakers
    ]
    columns = ["Name", "Office", "State", "District", "Party", "Phone", "Email", "Contact Form"]
    return pd.DataFrame(rows, columns=columns)
