"""Tests for form and admin field validation."""

from __future__ import annotations

import pytest

from appylink_shared.validation import (
    is_valid_email,
    is_valid_url,
    validate_category,
    validate_contact,
    validate_lead,
    validate_provider,
    validate_submission,
)

GOOD_DESCRIPTION = "We hire plastic crates to removal firms."


@pytest.mark.parametrize(
    ("length", "ok"),
    [(1, False), (2, True), (100, True), (101, False)],
)
def test_company_name_length_bounds(length, ok):
    errors = validate_submission({"name": "n" * length, "description": GOOD_DESCRIPTION})
    assert ("name" not in errors) is ok


@pytest.mark.parametrize(
    ("length", "ok"),
    [(9, False), (10, True), (500, True), (501, False)],
)
def test_description_length_bounds(length, ok):
    errors = validate_submission({"name": "Acme", "description": "d" * length})
    assert ("description" not in errors) is ok


def test_lengths_ignore_surrounding_whitespace():
    errors = validate_submission({"name": "  A  ", "description": "   short    "})
    assert set(errors) == {"name", "description"}


def test_missing_fields_are_all_reported():
    errors = validate_submission({})
    assert errors == {
        "name": "Company name is required",
        "description": "Description is required",
    }


def test_submission_website_is_optional_but_must_be_http():
    base = {"name": "Acme", "description": GOOD_DESCRIPTION}
    assert validate_submission({**base, "website": ""}) == {}
    assert validate_submission({**base, "website": "https://acme.co.uk"}) == {}
    assert "website" in validate_submission({**base, "website": "acme.co.uk"})
    assert "website" in validate_submission({**base, "website": "ftp://acme.co.uk"})


def test_submission_discount_limit():
    base = {"name": "Acme", "description": GOOD_DESCRIPTION}
    assert validate_submission({**base, "discount": "x" * 100}) == {}
    assert "discount" in validate_submission({**base, "discount": "x" * 101})


@pytest.mark.parametrize(
    ("email", "ok"),
    [
        ("sam@example.com", True),
        ("sam.smith+moves@example.co.uk", True),
        ("sam@example", False),
        ("sam example@example.com", False),
        ("@example.com", False),
        ("", False),
        (None, False),
    ],
)
def test_email_format(email, ok):
    assert is_valid_email(email) is ok


def test_url_format():
    assert is_valid_url("http://example.com/path?x=1")
    assert not is_valid_url("javascript:alert(1)")
    assert not is_valid_url("https://")
    assert not is_valid_url(None)
    assert not is_valid_url("http://exa mple.com")
    assert not is_valid_url("https://example .co.uk/path")


def test_contact_message_bounds():
    base = {"name": "Sam", "email": "sam@example.com"}
    assert "message" in validate_contact({**base, "message": "m" * 9})
    assert validate_contact({**base, "message": "m" * 10}) == {}
    assert validate_contact({**base, "message": "m" * 1000}) == {}
    assert "message" in validate_contact({**base, "message": "m" * 1001})


def test_contact_requires_valid_email():
    errors = validate_contact({"name": "Sam", "email": "nope", "message": "Hello there, movers"})
    assert errors == {"email": "Please enter a valid email address"}


def test_lead_optional_fields():
    base = {"name": "Sam", "email": "sam@example.com"}
    assert validate_lead(base) == {}
    assert "phone" in validate_lead({**base, "phone": "0" * 41})


def test_provider_partial_only_checks_present_fields():
    assert validate_provider({"summary": "New summary"}, partial=True) == {}
    assert "name" in validate_provider({"name": " "}, partial=True)
    assert set(validate_provider({})) == {"name", "category_id"}


def test_provider_logo_and_website_urls():
    values = {"name": "Acme", "category_id": "software", "website": "acme", "logo": "logo.png"}
    assert set(validate_provider(values)) == {"website", "logo"}


@pytest.mark.parametrize(
    ("category_id", "ok"),
    [
        ("removals", True),
        ("van_hire2", True),
        ("Removals", False),
        ("2vans", False),
        ("van-hire", False),
        ("v" * 50, True),
        ("v" * 51, False),
    ],
)
def test_category_id_format(category_id, ok):
    errors = validate_category({"id": category_id, "label": "Label"})
    assert ("id" not in errors) is ok


def test_category_relabel_skips_id():
    assert validate_category({"label": "Storage"}, check_id=False) == {}
    assert "label" in validate_category({"label": "x" * 101}, check_id=False)
