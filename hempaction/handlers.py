"""JSON request handlers for lookup, send and signup.

Each handler takes the decoded request body and returns ``(body, status)``.
"""

from __future__ import annotations
import logging
from typing import Any, Dict, Tuple

from .emails import EmailDispatcher
from .errors import HempActionError, ValidationError
from .lawmakers import LawmakerResolver
from .users import UserStore


logger = logging.getLogger(__name__)

Response = Tuple[Dict[str, Any], int]


def _error(message: str, status: int) -> Response:
    return {"error": message}, status


def handle_lookup(payload: Dict[str, Any], resolver: LawmakerResolver) -> Response:
    try:
        result = resolver.lookup(payload.get("zipCode"))
    except ValidationError as e:
        return _error(str(e), 400)
    except HempActionError as e:
        logger.error("Error in lookup: %s", e)
        return _error(str(e), 500)
    except Exception:
        logger.exception("Unexpected error in lookup")
        return _error("Unknown error", 500)
    return result.to_dict(), 200


def handle_send(payload: Dict[str, Any], dispatcher: EmailDispatcher) -> Response:
    required = ("userId", "lawmakerId", "emailSubject", "emailBody")
    if not all(payload.get(k) for k in required):
        return _error("Missing required fields", 400)

    try:
        action = dispatcher.send_email(
            payload["userId"],
            payload["lawmakerId"],
            payload["emailSubject"],
            payload["emailBody"],
        )
    except ValidationError as e:
        return _error(str(e), 400)
    except HempActionError as e:
        logger.error("Error sending email: %s", e)
        return _error(str(e), 500)
    except Exception:
        logger.exception("Unexpected error sending email")
        return _error("Unknown error", 500)
    return {"success": True, "message_id": action.resend_message_id}, 200


def handle_create_user(payload: Dict[str, Any], users: UserStore) -> Response:
    try:
        user = users.create_user(
            payload.get("email") or "",
            payload.get("zipCode") or "",
            payload.get("role") or "",
        )
    except ValidationError as e:
        return _error(str(e), 400)
    except HempActionError as e:
        logger.error("Error creating user: %s", e)
        return _error(str(e), 500)
    return user.to_dict(), 200
