"""Pre-drafted advocacy emails, one per supporter role."""

from __future__ import annotations
from datetime import datetime
from typing import Dict, Optional

from .config import DEFAULT_BAN_EFFECTIVE_DATE
from .errors import ValidationError
from .models import EmailTemplate, Lawmaker, USER_ROLES


NAME_SUFFIXES = {"JR", "SR", "II", "III", "IV", "V"}

DEFAULT_BAN_DATE = datetime.fromisoformat(DEFAULT_BAN_EFFECTIVE_DATE)


def get_last_name(full_name: str) -> str:
    """
    Last name of a lawmaker, ignoring a trailing generational suffix.

    >>> get_last_name("John Smith Jr.")
    'Smith'
    """
    parts = full_name.split()
    if not parts:
        raise ValidationError("Lawmaker name is empty")
    if len(parts) == 1:
        return parts[0]
    if parts[-1].rstrip(".").upper() in NAME_SUFFIXES:
        return parts[-2]
    return parts[-1]


def format_deadline(ban_date: datetime) -> str:
    return f"{ban_date:%B} {ban_date.day}, {ban_date.year}"


SUBJECTS = {
    "business_owner": "Urgent: Protect Hemp Businesses - Oppose the {year} Hemp Ban",
    "employee": "My Job is at Risk - Please Oppose the Hemp Ban",
    "consumer": "Protect Consumer Choice - Oppose the Hemp Ban",
    "medical_user": "This Ban Threatens My Health - Please Help",
    "veteran": "Veteran's Appeal - Don't Take Away Our Hemp Access",
}

BODIES = {
    "business_owner": """{greeting}

I am writing as a hemp business owner in {state} to urge you to oppose the federal hemp ban scheduled to take effect on {deadline}.

This ban will devastate our industry and destroy thousands of American jobs. Our business, like many others, operates legally and responsibly, providing safe products to consumers while contributing to our local economy.

The hemp industry supports over 100,000 jobs nationwide and generates billions in economic activity. A blanket ban ignores the legitimate uses of hemp and punishes law-abiding businesses for the actions of bad actors.

Instead of prohibition, we need:
- Clear, science-based regulations
- Enforcement against illegal products
- Support for legitimate hemp businesses

I urge you to support legislation that protects legal hemp commerce and the livelihoods of American entrepreneurs.

{signature}""",

    "employee": """{greeting}

I am writing as an employee in the hemp industry in {state} to ask for your help in stopping the federal hemp ban set for {deadline}.

My job, and the jobs of thousands of hardworking Americans, will disappear if this ban takes effect. Many of us have families to support and bills to pay. The hemp industry has provided stable employment and career opportunities in our communities.

This ban doesn't just hurt businesses; it hurts working people. We need our representatives to stand up for American workers and find solutions that protect jobs while addressing any legitimate concerns.

Please support legislation that preserves legal hemp commerce and protects American jobs.

{signature}""",

    "consumer": """{greeting}

I am writing as a constituent in {state} to express my strong opposition to the federal hemp ban scheduled for {deadline}.

As an adult consumer, I should have the right to make my own informed choices about legal hemp products. This ban is government overreach that treats responsible adults like children.

Hemp products have been legal and available for years. Many Americans use them safely and responsibly for various purposes. A blanket ban punishes millions of law-abiding citizens for the actions of a few bad actors.

We need smart regulation, not prohibition. Please support policies that:
- Protect consumer freedom
- Ensure product safety through testing and standards
- Target illegal operators without banning an entire industry

I urge you to stand up for personal freedom and oppose this ban.

{signature}""",

    "medical_user": """{greeting}

I am writing as a constituent in {state} who relies on legal hemp products for wellness purposes. The federal hemp ban scheduled for {deadline} will take away products that have genuinely helped me.

Many Americans like me have found relief through legal hemp products when other options have failed or caused unwanted side effects. We are not criminals. We are people seeking natural alternatives for our health and well-being.

This ban will force people back to pharmaceuticals that may not work as well, cost more, or cause adverse effects. It ignores the experiences of thousands who have benefited from hemp products.

Please support legislation that:
- Allows continued access to legal hemp products
- Implements safety standards and testing
- Respects the choices of adults seeking natural wellness options

This is about more than business. It's about people's health and quality of life.

{signature}""",

    "veteran": """{greeting}

I am a veteran in {state} writing to urge you to oppose the federal hemp ban set for {deadline}.

Many veterans have turned to legal hemp products as an alternative for managing stress, sleep issues, and other service-related challenges. After serving our country, we deserve the freedom to choose what works for our wellness, not to have the government take away legal options that have helped us.

Veterans face unique challenges, and hemp products have provided relief for many of us when traditional options fell short. This ban shows a lack of understanding of what veterans need and use.

I ask you to:
- Oppose the blanket ban on hemp products
- Support veterans' access to legal wellness alternatives
- Push for sensible regulation instead of prohibition

We served our country. We're asking you to serve us by protecting our freedom of choice.

{signature}""",
}

CLOSINGS = {
    "business_owner": "Sincerely",
    "employee": "Thank you",
    "consumer": "Respectfully",
    "medical_user": "Sincerely",
    "veteran": "Respectfully",
}


def _signature(role: str, user_name: Optional[str]) -> str:
    closing = CLOSINGS[role]
    name = (user_name or "").strip()
    if role == "veteran":
        return f"{closing},\n{name}\nVeteran" if name else f"{closing},\nA Concerned Veteran"
    return f"{closing},\n{name or 'A Concerned Constituent'}"


def get_email_template(
    role: str,
    lawmaker: Lawmaker,
    user_name: Optional[str] = None,
    ban_date: datetime = DEFAULT_BAN_DATE,
) -> EmailTemplate:
    """
    Build the draft email a supporter sends to one lawmaker.

    Args:
        role: One of USER_ROLES
        lawmaker: Recipient; needs ``name`` and ``state``
        user_name: Signature name (falls back to a generic constituent)
        ban_date: Deadline quoted in the letter

    Returns:
        EmailTemplate with subject and body

    Raises:
        ValidationError: unknown role, or lawmaker missing name/state
    """
    if role not in USER_ROLES:
        raise ValidationError(f"Unknown supporter role: {role!r}")
    if not (lawmaker.name or "").strip() or not (lawmaker.state or "").strip():
        raise ValidationError("Lawmaker name and state are required for email template generation")

    greeting = f"Dear {lawmaker.honorific} {get_last_name(lawmaker.name)},"
    values: Dict[str, str] = {
        "greeting": greeting,
        "state": lawmaker.state,
        "deadline": format_deadline(ban_date),
        "year": str(ban_date.year),
        "signature": _signature(role, user_name),
    }
    return EmailTemplate(
        subject=SUBJECTS[role].format(**values),
        body=BODIES[role].format(**values),
    )
