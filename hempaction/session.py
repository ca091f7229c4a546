"""Per-visitor lookup state kept in st.session_state."""

from __future__ import annotations
from typing import Optional

from .models import LookupResult


class LookupTracker:
    """
    Holds the lookup result shown to one visitor.

    Every lookup gets a token from ``begin()``; a response is applied only
    while its token is the newest one and the view is still open.
    """

    def __init__(self):
        self.token = 0
        self.result: Optional[LookupResult] = None
        self.error: Optional[str] = None
        self.loading = False
        self.closed = False

    def begin(self) -> int:
        self.token += 1
        self.result = None
        self.error = None
        self.loading = True
        return self.token

    def is_current(self, token: int) -> bool:
        return not self.closed and token == self.token

    def apply(self, token: int, result: LookupResult) -> bool:
        if not self.is_current(token):
            return False
        self.result = result
        self.error = None
        self.loading = False
        return True

    def fail(self, token: int, message: str) -> bool:
        if not self.is_current(token):
            return False
        self.result = None
        self.error = message
        self.loading = False
        return True

    def close(self) -> None:
        self.closed = True
        self.loading = False
