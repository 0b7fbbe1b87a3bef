"""Tests for the public submission, contact and quote forms."""

from __future__ import annotations

from unittest.mock import patch

from tests.conftest import make_supabase

VALID_SUBMISSION = {
    "name": "Crate Hire Ltd",
    "category_id": "equipment",
    "website": "https://cratehire.example.co.uk",
    "description": "Plastic crate hire for office and home moves.",
    "discount": "10% off first order",
}

VALID_CONTACT = {
    "name": "Sam Mover",
    "email": "sam@example.com",
    "message": "I'd like to list my storage company.",
}


def test_submission_queued_locally_when_unconfigured(client):
    response = client.post("/v1/submissions", json=VALID_SUBMISSION)
    assert response.status_code == 202
    body = response.json()
    assert body["data"] == {"status": "queued"}
    assert body["meta"]["source"] == "local"

    drafts = client.get("/v1/me/drafts").json()["data"]
    assert len(drafts) == 1
    assert drafts[0]["kind"] == "submission"
    assert drafts[0]["record"]["company_name"] == "Crate Hire Ltd"
    assert drafts[0]["record"]["status"] == "new"


def test_submission_inserted_when_configured(client, configured):
    mock = make_supabase()
    with patch("appylink_api.services.form_service.get_supabase_client", return_value=mock):
        response = client.post("/v1/submissions", json=VALID_SUBMISSION)

    assert response.status_code == 201
    assert response.json()["meta"]["source"] == "live"
    mock.table.assert_called_once_with("listing_submissions")
    record = mock.table("listing_submissions").insert.call_args[0][0]
    assert record["company_name"] == "Crate Hire Ltd"
    assert record["status"] == "new"
    assert record["discount"] == "10% off first order"


def test_honeypot_drops_silently_and_stores_nothing(client, configured):
    mock = make_supabase()
    bot = {**VALID_SUBMISSION, "company_website_confirm": "https://spam.example"}
    with patch("appylink_api.services.form_service.get_supabase_client", return_value=mock):
        response = client.post("/v1/submissions", json=bot)
        assert response.status_code == 204
        assert response.content == b""
        mock.table.assert_not_called()

        # No cooldown was started either.
        response = client.post("/v1/submissions", json=VALID_SUBMISSION)
        assert response.status_code == 201


def test_honeypot_on_contact_form(client):
    response = client.post("/v1/contact", json={**VALID_CONTACT, "nickname": "bot"})
    assert response.status_code == 204
    assert client.get("/v1/me/drafts").json()["data"] == []


def test_validation_errors_are_reported_per_field(client):
    response = client.post("/v1/submissions", json={"name": "A", "description": "short"})
    assert response.status_code == 422
    error = response.json()["error"]
    assert error["code"] == "VALIDATION_FAILED"
    assert set(error["details"]["fields"]) == {"name", "description"}


def test_cooldown_blocks_then_allows_after_window(client, clock):
    assert client.post("/v1/contact", json=VALID_CONTACT).status_code == 202

    clock.advance(10)
    response = client.post("/v1/contact", json=VALID_CONTACT)
    assert response.status_code == 429
    assert response.json()["error"]["message"] == "Please wait 20 seconds before submitting again."
    assert response.headers["Retry-After"] == "20"

    clock.advance(20)
    assert client.post("/v1/contact", json=VALID_CONTACT).status_code == 202


def test_cooldown_is_per_form(client):
    assert client.post("/v1/contact", json=VALID_CONTACT).status_code == 202
    assert client.post("/v1/submissions", json=VALID_SUBMISSION).status_code == 202


def test_cooldown_is_per_client(client):
    assert client.post("/v1/contact", json=VALID_CONTACT, headers={"X-Client-Id": "a"}).status_code == 202
    assert client.post("/v1/contact", json=VALID_CONTACT, headers={"X-Client-Id": "b"}).status_code == 202
    assert client.post("/v1/contact", json=VALID_CONTACT, headers={"X-Client-Id": "a"}).status_code == 429


def test_failed_insert_does_not_start_cooldown(client, configured):
    from postgrest.exceptions import APIError

    mock = make_supabase()
    mock.table("contact_messages").execute.side_effect = APIError(
        {"message": "relation does not exist", "code": "42P01", "hint": None, "details": None}
    )
    with patch("appylink_api.services.form_service.get_supabase_client", return_value=mock):
        response = client.post("/v1/contact", json=VALID_CONTACT)
        assert response.status_code == 502
        assert response.json()["error"]["code"] == "BACKEND_ERROR"

        mock.table("contact_messages").execute.side_effect = None
        assert client.post("/v1/contact", json=VALID_CONTACT).status_code == 201


def test_quote_request_for_known_provider(client):
    response = client.post(
        "/v1/providers/moveman/leads",
        json={"name": "Sam", "email": "sam@example.com", "phone": "01234 567890"},
    )
    assert response.status_code == 202
    drafts = client.get("/v1/me/drafts").json()["data"]
    assert drafts[0]["kind"] == "lead"
    assert drafts[0]["record"]["provider_id"] == "moveman"


def test_quote_request_for_unknown_provider(client):
    response = client.post(
        "/v1/providers/nope/leads",
        json={"name": "Sam", "email": "sam@example.com"},
    )
    assert response.status_code == 404
