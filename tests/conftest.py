"""Shared pytest fixtures for the action center test suite.

``FakeSupabase`` mimics the slice of the supabase-py query builder the
services use (select/insert/update, eq/in_/limit, execute) over in-memory
tables, enforcing the same unique constraints as schema.sql.

``FakeSession`` stands in for ``requests.Session``: responses are queued per
HTTP method and every call is recorded so tests can assert on what went out.
"""

from __future__ import annotations

import copy
from typing import Any, Callable, Dict, List, Optional

import pytest
from postgrest.exceptions import APIError

from hempaction.civic_api import CivicInfoClient
from hempaction.emails import EmailDispatcher, ResendClient
from hempaction.lawmakers import LawmakerResolver, LawmakerStore


# ---------------------------------------------------------------------------
# Supabase fake
# ---------------------------------------------------------------------------

UNIQUE_COLUMNS = {
    "users": ["email"],
    "lawmakers": ["external_id"],
}

LAWMAKER_DEFAULTS = {
    "hemp_stance": "unknown",
    "featured": False,
}


class FakeResponse:
    def __init__(self, data: List[Dict[str, Any]]):
        self.data = data


class FakeQuery:
    def __init__(self, db: "FakeSupabase", table: str):
        self.db = db
        self.table = table
        self.op = "select"
        self.payload: Optional[Dict[str, Any]] = None
        self.filters: List[Callable[[Dict[str, Any]], bool]] = []
        self.row_limit: Optional[int] = None

    def select(self, columns: str = "*"):
        self.op = "select"
        return self

    def insert(self, row: Dict[str, Any]):
        self.op = "insert"
        self.payload = row
        return self

    def update(self, values: Dict[str, Any]):
        self.op = "update"
        self.payload = values
        return self

    def eq(self, column: str, value: Any):
        self.filters.append(lambda row: row.get(column) == value)
        return self

    def in_(self, column: str, values: List[Any]):
        self.filters.append(lambda row: row.get(column) in values)
        return self

    def limit(self, n: int):
        self.row_limit = n
        return self

    def _matching(self) -> List[Dict[str, Any]]:
        return [row for row in self.db.rows(self.table) if all(f(row) for f in self.filters)]

    def execute(self) -> FakeResponse:
        self.db.calls.append((self.table, self.op))
        self.db.maybe_fail(self.table, self.op, self.payload)

        if self.op == "insert":
            return FakeResponse([self.db.insert(self.table, self.payload)])

        if self.op == "update":
            updated = []
            for row in self._matching():
                row.update(self.payload)
                updated.append(copy.deepcopy(row))
            return FakeResponse(updated)

        rows = self._matching()
        if self.row_limit is not None:
            rows = rows[:self.row_limit]
        return FakeResponse(copy.deepcopy(rows))


class FakeSupabase:
    def __init__(self):
        self.tables: Dict[str, List[Dict[str, Any]]] = {
            "users": [],
            "lawmakers": [],
            "email_actions": [],
        }
        self.calls: List[tuple] = []
        self._failures: List[tuple] = []
        self._next_id = 0

    def table(self, name: str) -> FakeQuery:
        return FakeQuery(self, name)

    def rows(self, table: str) -> List[Dict[str, Any]]:
        if table == "campaign_stats":
            return [{
                "total_users": len(self.tables["users"]),
                "total_emails": len(self.tables["email_actions"]),
            }]
        return self.tables.setdefault(table, [])

    def insert(self, table: str, row: Dict[str, Any]) -> Dict[str, Any]:
        for column in UNIQUE_COLUMNS.get(table, []):
            if any(existing.get(column) == row.get(column) for existing in self.rows(table)):
                raise api_error("23505", f'duplicate key value violates unique constraint "{table}_{column}_key"')

        self._next_id += 1
        stored = dict(LAWMAKER_DEFAULTS) if table == "lawmakers" else {}
        stored.update(copy.deepcopy(row))
        stored.setdefault("id", f"{table}-{self._next_id}")
        self.rows(table).append(stored)
        return copy.deepcopy(stored)

    def fail(self, table: str, op: str, code: str = "XX000", when: Optional[Callable] = None, times: Optional[int] = None):
        """Make the next matching ``execute()`` raise APIError."""
        self._failures.append([table, op, code, when, times])

    def maybe_fail(self, table: str, op: str, payload: Optional[Dict[str, Any]]):
        for failure in self._failures:
            f_table, f_op, code, when, times = failure
            if f_table != table or f_op != op:
                continue
            if when is not None and not when(payload):
                continue
            if times is not None:
                if times <= 0:
                    continue
                failure[4] = times - 1
            raise api_error(code, f"simulated {op} failure on {table}")

    def count(self, table: str, op: str) -> int:
        return sum(1 for call in self.calls if call == (table, op))


def api_error(code: str, message: str) -> APIError:
    return APIError({"message": message, "code": code, "hint": None, "details": None})


# ---------------------------------------------------------------------------
# requests fake
# ---------------------------------------------------------------------------

NOT_JSON = object()


class FakeHTTPResponse:
    def __init__(self, status_code: int = 200, payload: Any = None, reason: str = "OK", text: str = ""):
        self.status_code = status_code
        self.payload = payload
        self.reason = reason
        self.text = text

    @property
    def ok(self) -> bool:
        return 200 <= self.status_code < 400

    def json(self):
        if self.payload is NOT_JSON:
            raise ValueError("No JSON object could be decoded")
        return self.payload


class FakeSession:
    def __init__(self):
        self.queued: Dict[str, List[Any]] = {"get": [], "post": []}
        self.calls: List[Dict[str, Any]] = []

    def queue(self, method: str, response: Any):
        """Queue a FakeHTTPResponse, or an exception instance to raise."""
        self.queued[method].append(response)

    def _respond(self, method: str, url: str, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        if not self.queued[method]:
            raise AssertionError(f"unexpected {method.upper()} {url}")
        response = self.queued[method].pop(0)
        if isinstance(response, Exception):
            raise response
        return response

    def get(self, url: str, **kwargs):
        return self._respond("get", url, **kwargs)

    def post(self, url: str, **kwargs):
        return self._respond("post", url, **kwargs)


# ---------------------------------------------------------------------------
# Civic payloads
# ---------------------------------------------------------------------------

def civic_payload_90210() -> Dict[str, Any]:
    return {
        "normalizedInput": {"city": "Beverly Hills", "state": "CA", "zip": "90210"},
        "divisions": {},
        "offices": [
            {
                "name": "U.S. Senator",
                "divisionId": "ocd-division/country:us/state:ca",
                "levels": ["country"],
                "roles": ["legislatorUpperBody"],
                "officialIndices": [0, 1],
            },
            {
                "name": "U.S. Representative",
                "divisionId": "ocd-division/country:us/state:ca/cd:36",
                "levels": ["country"],
                "roles": ["legislatorLowerBody"],
                "officialIndices": [2],
            },
        ],
        "officials": [
            {
                "name": "Alex Padilla",
                "party": "Democratic Party",
                "phones": ["(202) 224-3553"],
                "urls": ["https://www.padilla.senate.gov/"],
                "emails": ["senator@padilla.senate.gov"],
                "address": [{"line1": "112 Hart Senate Office Building", "city": "Washington", "state": "DC", "zip": "20510"}],
            },
            {
                "name": "Adam B. Schiff",
                "party": "Democratic Party",
                "phones": ["(202) 224-3841"],
                "urls": ["https://www.schiff.senate.gov/"],
            },
            {
                "name": "Ted Lieu",
                "party": "Democratic Party",
                "phones": ["(202) 225-3976"],
                "urls": ["https://lieu.house.gov/"],
                "emails": ["rep@lieu.house.gov"],
                "photoUrl": "https://example.org/lieu.jpg",
            },
        ],
    }


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def db():
    return FakeSupabase()


@pytest.fixture
def session():
    return FakeSession()


@pytest.fixture
def civic(session):
    return CivicInfoClient("test-civic-key", "https://civic.example/representatives", session=session, timeout=5)


@pytest.fixture
def resolver(db, civic):
    return LawmakerResolver(civic, LawmakerStore(db))


@pytest.fixture
def resend(session):
    return ResendClient("re_test", "Hemp Action Campaign <action@dontbanhemp.org>", session=session, url="https://resend.example/emails")


@pytest.fixture
def dispatcher(db, resend):
    return EmailDispatcher(db, resend)


@pytest.fixture
def payload_90210():
    return civic_payload_90210()


@pytest.fixture
def user_row(db):
    return db.insert("users", {"email": "fan@example.com", "zip_code": "90210", "role": "consumer"})


@pytest.fixture
def senator_row(db):
    return db.insert("lawmakers", {
        "external_id": "ca-senate-alex-padilla",
        "name": "Alex Padilla",
        "chamber": "senate",
        "state": "CA",
        "email": "senator@padilla.senate.gov",
    })
