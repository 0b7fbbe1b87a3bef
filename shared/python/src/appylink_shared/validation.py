"""
validation.py — field-level validation for the public forms and admin edits.

Every validator takes a mapping of raw form values and returns a dict of
field name -> message. An empty dict means the values are acceptable; all
failing fields are reported together so a form can show them inline.

Usage:
    from appylink_shared.validation import validate_submission

    errors = validate_submission({"name": "Acme", "description": "Too short"})
    # {"description": "Description must be at least 10 characters"}
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any
from urllib.parse import urlparse

from appylink_shared.constants import (
    CATEGORY_ID_MAX,
    CATEGORY_ID_RE,
    CATEGORY_LABEL_MAX,
    COMPANY_NAME_MAX,
    COMPANY_NAME_MIN,
    CONTACT_NAME_MAX,
    DESCRIPTION_MAX,
    DESCRIPTION_MIN,
    DISCOUNT_MAX,
    EMAIL_RE,
    MESSAGE_MAX,
    MESSAGE_MIN,
    PHONE_MAX,
)


def _text(values: Mapping[str, Any], key: str) -> str:
    value = values.get(key)
    return value.strip() if isinstance(value, str) else ""


def is_valid_email(email: str | None) -> bool:
    return bool(email) and EMAIL_RE.match(email) is not None


def is_valid_url(url: str | None) -> bool:
    """Accept absolute http(s) URLs only."""
    if not url:
        return False
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        return False
    return not any(ch.isspace() for ch in parsed.netloc)


def validate_submission(values: Mapping[str, Any]) -> dict[str, str]:
    """Public "submit a listing" form."""
    errors: dict[str, str] = {}

    name = _text(values, "name")
    if not name:
        errors["name"] = "Company name is required"
    elif len(name) < COMPANY_NAME_MIN:
        errors["name"] = f"Company name must be at least {COMPANY_NAME_MIN} characters"
    elif len(name) > COMPANY_NAME_MAX:
        errors["name"] = f"Company name must be at most {COMPANY_NAME_MAX} characters"

    website = _text(values, "website")
    if website and not is_valid_url(website):
        errors["website"] = "Please enter a valid URL starting with http:// or https://"

    description = _text(values, "description")
    if not description:
        errors["description"] = "Description is required"
    elif len(description) < DESCRIPTION_MIN:
        errors["description"] = f"Description must be at least {DESCRIPTION_MIN} characters"
    elif len(description) > DESCRIPTION_MAX:
        errors["description"] = f"Description must be at most {DESCRIPTION_MAX} characters"

    discount = _text(values, "discount")
    if len(discount) > DISCOUNT_MAX:
        errors["discount"] = f"Discount description must be at most {DISCOUNT_MAX} characters"

    return errors


def validate_contact(values: Mapping[str, Any]) -> dict[str, str]:
    """Public contact form."""
    errors: dict[str, str] = {}

    name = _text(values, "name")
    if not name:
        errors["name"] = "Name is required"
    elif len(name) > CONTACT_NAME_MAX:
        errors["name"] = f"Name must be at most {CONTACT_NAME_MAX} characters"

    email = _text(values, "email")
    if not email:
        errors["email"] = "Email is required"
    elif not is_valid_email(email):
        errors["email"] = "Please enter a valid email address"

    message = _text(values, "message")
    if not message:
        errors["message"] = "Message is required"
    elif len(message) < MESSAGE_MIN:
        errors["message"] = f"Message must be at least {MESSAGE_MIN} characters"
    elif len(message) > MESSAGE_MAX:
        errors["message"] = f"Message must be at most {MESSAGE_MAX} characters"

    return errors


def validate_lead(values: Mapping[str, Any]) -> dict[str, str]:
    """Quote request sent from a provider profile."""
    errors: dict[str, str] = {}

    name = _text(values, "name")
    if not name:
        errors["name"] = "Name is required"
    elif len(name) > CONTACT_NAME_MAX:
        errors["name"] = f"Name must be at most {CONTACT_NAME_MAX} characters"

    email = _text(values, "email")
    if not email:
        errors["email"] = "Email is required"
    elif not is_valid_email(email):
        errors["email"] = "Please enter a valid email address"

    if len(_text(values, "phone")) > PHONE_MAX:
        errors["phone"] = f"Phone must be at most {PHONE_MAX} characters"
    if len(_text(values, "details")) > MESSAGE_MAX:
        errors["details"] = f"Details must be at most {MESSAGE_MAX} characters"

    return errors


def validate_provider(values: Mapping[str, Any], *, partial: bool = False) -> dict[str, str]:
    """
    Admin provider create/edit.

    With partial=True only the keys present in `values` are checked, which is
    how an edit form submits.
    """
    errors: dict[str, str] = {}

    if not partial or "name" in values:
        if not _text(values, "name"):
            errors["name"] = "Provider name is required"

    if not partial or "category_id" in values:
        if not _text(values, "category_id"):
            errors["category_id"] = "Category is required"

    website = _text(values, "website")
    if website and not is_valid_url(website):
        errors["website"] = "Invalid URL format"

    logo = _text(values, "logo")
    if logo and not is_valid_url(logo):
        errors["logo"] = "Invalid logo URL"

    return errors


def validate_category(values: Mapping[str, Any], *, check_id: bool = True) -> dict[str, str]:
    """Admin category create/relabel."""
    errors: dict[str, str] = {}

    if check_id:
        category_id = _text(values, "id")
        if not category_id:
            errors["id"] = "Category ID is required"
        elif len(category_id) > CATEGORY_ID_MAX:
            errors["id"] = f"Category ID must be at most {CATEGORY_ID_MAX} characters"
        elif not CATEGORY_ID_RE.match(category_id):
            errors["id"] = (
                "Category ID must start with a letter and contain only lowercase "
                "letters, numbers, and underscores"
            )

    label = _text(values, "label")
    if not label:
        errors["label"] = "Category label is required"
    elif len(label) > CATEGORY_LABEL_MAX:
        errors["label"] = f"Category label must be at most {CATEGORY_LABEL_MAX} characters"

    return errors
