"""Sending supporter emails through Resend and logging them."""

from __future__ import annotations
import logging
from typing import Optional

import requests
from postgrest.exceptions import APIError
from supabase import Client

from .errors import NotFoundError, PersistenceError, PreconditionError, UpstreamError, ValidationError
from .lawmakers import LawmakerStore, utc_now_iso
from .models import EmailAction
from .users import UserStore


logger = logging.getLogger(__name__)

RESEND_URL = "https://api.resend.com/emails"


class ResendClient:
    """Thin wrapper around the Resend send-email endpoint."""

    def __init__(
        self,
        api_key: str,
        sender: str,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
        url: str = RESEND_URL,
    ):
        self.api_key = api_key
        self.sender = sender
        self.session = session or requests.Session()
        self.timeout = timeout
        self.url = url

    def send(self, to: str, reply_to: str, subject: str, text: str) -> str:
        """Send one plain-text email and return the provider's message id."""
        try:
            response = self.session.post(
                self.url,
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Content-Type": "application/json",
                },
                json={
                    "from": self.sender,
                    "to": [to],
                    "reply_to": [reply_to],
                    "subject": subject,
                    "text": text,
                },
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise UpstreamError(f"Email provider request failed: {e}")

        try:
            data = response.json()
        except ValueError:
            data = {}

        if not response.ok:
            detail = data.get("message") if isinstance(data, dict) else None
            raise UpstreamError(
                f"Resend API error ({response.status_code}): {detail or response.text or response.reason}"
            )

        message_id = data.get("id") if isinstance(data, dict) else None
        if not message_id:
            raise UpstreamError("Resend API response did not include a message id")
        return message_id


class EmailDispatcher:
    """Sends a finalized email to a lawmaker and appends it to email_actions."""

    table = "email_actions"

    def __init__(self, client: Client, resend: ResendClient):
        self.client = client
        self.resend = resend
        self.users = UserStore(client)
        self.lawmakers = LawmakerStore(client)

    def send_email(self, user_id: str, lawmaker_id: str, subject: str, body: str) -> EmailAction:
        """
        Send one email on behalf of a supporter.

        The email goes out first; the log row is written afterwards and a
        failed write is only reported, so a retry never sends a duplicate.

        Raises:
            ValidationError: a required field is blank
            NotFoundError: unknown user or lawmaker
            PreconditionError: lawmaker has no email address
            UpstreamError: Resend rejected the email
        """
        if not all(v and str(v).strip() for v in (user_id, lawmaker_id, subject, body)):
            raise ValidationError("Missing required fields")

        try:
            user = self.users.get(user_id)
            lawmaker = self.lawmakers.get(lawmaker_id)
        except APIError as e:
            raise PersistenceError(f"Failed to load email recipients: {e.message}") from e

        if user is None:
            raise NotFoundError("User not found")
        if lawmaker is None:
            raise NotFoundError("Lawmaker not found")
        if not lawmaker.email:
            raise PreconditionError("Lawmaker does not have an email address on file")

        message_id = self.resend.send(
            to=lawmaker.email,
            reply_to=user.email,
            subject=subject,
            text=body,
        )
        logger.info("Sent email %s from user %s to lawmaker %s", message_id, user.id, lawmaker.id)

        action = EmailAction(
            id=None,
            user_id=user.id,
            lawmaker_id=lawmaker.id,
            email_subject=subject,
            email_body=body,
            status="sent",
            resend_message_id=message_id,
            sent_at=utc_now_iso(),
        )
        try:
            response = self.client.table(self.table).insert({
                "user_id": action.user_id,
                "lawmaker_id": action.lawmaker_id,
                "email_subject": action.email_subject,
                "email_body": action.email_body,
                "status": action.status,
                "resend_message_id": action.resend_message_id,
                "sent_at": action.sent_at,
            }).execute()
        except APIError as e:
            logger.error("Failed to log email action for message %s: %s", message_id, e)
            return action

        if response.data:
            action.id = response.data[0].get("id")
        return action
