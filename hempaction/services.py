"""Builds every campaign component from one Settings object."""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

import requests
from supabase import Client, create_client

from .civic_api import CivicInfoClient
from .config import Settings
from .emails import EmailDispatcher, ResendClient
from .lawmakers import LawmakerResolver, LawmakerStore
from .users import UserStore


@dataclass
class Services:
    settings: Settings
    supabase: Client
    resolver: LawmakerResolver
    users: UserStore
    dispatcher: EmailDispatcher


def build_supabase(settings: Settings) -> Client:
    settings.require("supabase_url", "supabase_key")
    return create_client(settings.supabase_url, settings.supabase_key)


def build_resolver(
    settings: Settings,
    supabase: Client,
    session: Optional[requests.Session] = None,
) -> LawmakerResolver:
    settings.require("civic_api_key")
    civic = CivicInfoClient(
        settings.civic_api_key,
        settings.civic_api_url,
        session=session,
        timeout=settings.http_timeout,
    )
    return LawmakerResolver(civic, LawmakerStore(supabase))


def build_services(settings: Settings) -> Services:
    """
    Construct the shared clients and the components that use them.

    Raises:
        ConfigurationError: a credential needed by any component is missing
    """
    settings.require("supabase_url", "supabase_key", "civic_api_key", "resend_api_key")

    supabase = build_supabase(settings)
    session = requests.Session()

    resend = ResendClient(
        settings.resend_api_key,
        settings.email_sender,
        session=session,
        timeout=settings.http_timeout,
    )

    return Services(
        settings=settings,
        supabase=supabase,
        resolver=build_resolver(settings, supabase, session=session),
        users=UserStore(supabase),
        dispatcher=EmailDispatcher(supabase, resend),
    )
