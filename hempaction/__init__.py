"""Don't Ban Hemp action center."""

from .models import (
    CAMPAIGN_GOAL,
    CampaignStats,
    EmailAction,
    EmailTemplate,
    Lawmaker,
    LookupResult,
    User,
    USER_ROLES,
    ROLE_LABELS,
)
from .errors import HempActionError
from .config import Settings, load_settings, configure_logging
from .lawmakers import LawmakerResolver, LawmakerStore, validate_zip_code
from .templates import get_email_template, get_last_name
from .users import UserStore, validate_signup
from .emails import EmailDispatcher, ResendClient
from .stats import StatsAggregator
from .session import LookupTracker
from .services import Services, build_services
from .handlers import handle_create_user, handle_lookup, handle_send

__all__ = [
    'CAMPAIGN_GOAL',
    'CampaignStats',
    'EmailAction',
    'EmailTemplate',
    'Lawmaker',
    'LookupResult',
    'User',
    'USER_ROLES',
    'ROLE_LABELS',
    'HempActionError',
    'Settings',
    'load_settings',
    'configure_logging',
    'LawmakerResolver',
    'LawmakerStore',
    'validate_zip_code',
    'get_email_template',
    'get_last_name',
    'UserStore',
    'validate_signup',
    'EmailDispatcher',
    'ResendClient',
    'StatsAggregator',
    'LookupTracker',
    'Services',
    'build_services',
    'handle_lookup',
    'handle_send',
    'handle_create_user',
]
