from __future__ import annotations

import pytest

import hempaction
from hempaction.handlers import handle_create_user, handle_lookup, handle_send
from hempaction.users import UserStore

from conftest import FakeHTTPResponse


def test_lookup_success_shape(resolver, session, payload_90210):
    session.queue("get", FakeHTTPResponse(payload=payload_90210))

    body, status = handle_lookup({"zipCode": "90210"}, resolver)

    assert status == 200
    assert set(body) == {"senators", "representative"}
    assert [s["name"] for s in body["senators"]] == ["Alex Padilla", "Adam B. Schiff"]
    assert body["representative"]["state"] == "CA"


@pytest.mark.parametrize("payload", [{}, {"zipCode": "9021"}, {"zipCode": 90210}])
def test_lookup_invalid_zip_is_400(resolver, session, payload):
    body, status = handle_lookup(payload, resolver)
    assert status == 400
    assert body == {"error": "Invalid zip code. Must be 5 digits."}
    assert session.calls == []


def test_lookup_unresolvable_zip_is_400(resolver, session):
    session.queue("get", FakeHTTPResponse(payload={"offices": [], "officials": []}))
    body, status = handle_lookup({"zipCode": "00000"}, resolver)
    assert status == 400
    assert "00000" in body["error"]


def test_lookup_upstream_failure_is_500(resolver, session):
    session.queue("get", FakeHTTPResponse(status_code=503, payload={}, reason="Service Unavailable"))
    body, status = handle_lookup({"zipCode": "90210"}, resolver)
    assert status == 500
    assert "error" in body


def test_lookup_unexpected_exception_is_500(resolver, session):
    session.queue("get", RuntimeError("kaboom"))
    body, status = handle_lookup({"zipCode": "90210"}, resolver)
    assert (body, status) == ({"error": "Unknown error"}, 500)


def test_send_success(dispatcher, session, user_row, senator_row):
    session.queue("post", FakeHTTPResponse(payload={"id": "msg_1"}))

    body, status = handle_send({
        "userId": user_row["id"],
        "lawmakerId": senator_row["id"],
        "emailSubject": "Subject",
        "emailBody": "Body",
    }, dispatcher)

    assert (body, status) == ({"success": True, "message_id": "msg_1"}, 200)


def test_send_missing_fields_is_400(dispatcher):
    body, status = handle_send({"userId": "u", "lawmakerId": "l", "emailSubject": "s"}, dispatcher)
    assert (body, status) == ({"error": "Missing required fields"}, 400)


def test_send_blank_subject_is_400(dispatcher, session, user_row, senator_row):
    body, status = handle_send({
        "userId": user_row["id"],
        "lawmakerId": senator_row["id"],
        "emailSubject": "   ",
        "emailBody": "Body",
    }, dispatcher)

    assert (body, status) == ({"error": "Missing required fields"}, 400)
    assert session.calls == []


def test_send_without_lawmaker_email_is_500(db, dispatcher, session, user_row):
    lawmaker = db.insert("lawmakers", {"external_id": "x", "name": "No Email", "chamber": "house", "state": "CA"})

    body, status = handle_send({
        "userId": user_row["id"],
        "lawmakerId": lawmaker["id"],
        "emailSubject": "Subject",
        "emailBody": "Body",
    }, dispatcher)

    assert status == 500
    assert body == {"error": "Lawmaker does not have an email address on file"}
    assert db.tables["email_actions"] == []


def test_create_user_returns_existing_row(db):
    users = UserStore(db)
    first, status = handle_create_user({"email": "fan@example.com", "zipCode": "90210", "role": "consumer"}, users)
    again, status_again = handle_create_user({"email": "fan@example.com", "zipCode": "90210", "role": "consumer"}, users)

    assert status == status_again == 200
    assert again["id"] == first["id"]


def test_create_user_invalid_is_400(db):
    body, status = handle_create_user({"email": "fan@example.com", "zipCode": "abc", "role": "consumer"}, UserStore(db))
    assert status == 400
    assert "zip code" in body["error"]


def test_create_user_storage_failure_is_500(db):
    db.fail("users", "insert")
    body, status = handle_create_user({"email": "fan@example.com", "zipCode": "90210", "role": "consumer"}, UserStore(db))
    assert status == 500


def test_handlers_are_exported_from_package():
    assert hempaction.handle_lookup is handle_lookup
    assert hempaction.handle_send is handle_send
    assert hempaction.handle_create_user is handle_create_user
