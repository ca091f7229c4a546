"""Supporter registration."""

from __future__ import annotations
import logging
import re
from typing import Dict, Optional

from postgrest.exceptions import APIError
from supabase import Client

from .errors import PersistenceError, ValidationError, is_invalid_id, is_unique_violation
from .lawmakers import ZIP_CODE_RE
from .models import User, USER_ROLES


logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def validate_email(email: str) -> bool:
    return bool(EMAIL_RE.match(email or ""))


def validate_signup(email: str, zip_code: str, role: Optional[str]) -> Dict[str, str]:
    """Field name -> message for every invalid form field (empty when valid)."""
    errors: Dict[str, str] = {}

    if not email:
        errors["email"] = "Email is required"
    elif not validate_email(email):
        errors["email"] = "Please enter a valid email address"

    if not zip_code:
        errors["zip_code"] = "Zip code is required"
    elif not ZIP_CODE_RE.fullmatch(zip_code):
        errors["zip_code"] = "Please enter a valid 5-digit zip code"

    if not role or role not in USER_ROLES:
        errors["role"] = "Please select your role"

    return errors


class UserStore:
    """Creates and reads rows in the users table."""

    table = "users"

    def __init__(self, client: Client):
        self.client = client

    def create_user(self, email: str, zip_code: str, role: str) -> User:
        """
        Register a supporter, or return the existing row for this email.

        Raises:
            ValidationError: invalid email, zip code or role
            PersistenceError: storage failure other than a duplicate email
        """
        errors = validate_signup(email, zip_code, role)
        if errors:
            raise ValidationError("; ".join(errors.values()))

        try:
            response = self.client.table(self.table).insert({
                "email": email,
                "zip_code": zip_code,
                "role": role,
            }).execute()
        except APIError as e:
            if not is_unique_violation(e):
                raise PersistenceError(f"Failed to create user: {e.message}") from e
            existing = self.get_by_email(email)
            if existing is None:
                raise PersistenceError("User already exists but could not be loaded") from e
            logger.info("Returning existing user %s", existing.id)
            return existing

        if not response.data:
            raise PersistenceError("User insert returned no row")
        return User.from_row(response.data[0])

    def get_by_email(self, email: str) -> Optional[User]:
        try:
            response = self.client.table(self.table) \
                .select("*") \
                .eq("email", email) \
                .limit(1) \
                .execute()
        except APIError as e:
            raise PersistenceError(f"Failed to load user: {e.message}") from e
        return User.from_row(response.data[0]) if response.data else None

    def get(self, user_id: str) -> Optional[User]:
        try:
            response = self.client.table(self.table) \
                .select("*") \
                .eq("id", user_id) \
                .limit(1) \
                .execute()
        except APIError as e:
            if is_invalid_id(e):
                return None
            raise PersistenceError(f"Failed to load user: {e.message}") from e
        return User.from_row(response.data[0]) if response.data else None
