"""Shared test fixtures for appylink-api."""

from __future__ import annotations

from unittest.mock import MagicMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from appylink_shared.config import settings

CHAIN_METHODS = (
    "select", "eq", "neq", "gt", "gte", "lt", "lte",
    "ilike", "order", "limit", "range",
    "insert", "update", "upsert", "delete",
)


def make_chain(data=None, count=0):
    """Create a chainable mock that returns given data on execute()."""
    chain = MagicMock()
    chain.execute.return_value = MagicMock(data=data or [], count=count)
    for method in CHAIN_METHODS:
        getattr(chain, method).return_value = chain
    return chain


def make_supabase(table_data=None, rpc_data=None):
    """Create a mock Supabase client.

    table_data: optional dict mapping table name -> (data, count).
    All unmapped tables return empty results. The same chain is returned
    for every call with a given table name, so tests can assert on it.
    """
    client = MagicMock()
    td = table_data or {}
    tables: dict[str, MagicMock] = {}

    def _table(name):
        if name not in tables:
            data, count = td.get(name, ([], 0))
            tables[name] = make_chain(data, count)
        return tables[name]

    client.table.side_effect = _table
    client.rpc.return_value = make_chain(rpc_data)
    return client


def with_role(role, table_data=None, **kwargs):
    """Mock user-scoped client whose profiles row carries `role`."""
    data = dict(table_data or {})
    if role is None:
        data["profiles"] = ([], 0)
    else:
        data["profiles"] = ([{"id": "user-1", "email": f"{role}@example.com", "role": role}], 1)
    return make_supabase(data, **kwargs)


def make_token(email="someone@example.com", sub=None):
    return jwt.encode(
        {"sub": sub or str(uuid4()), "email": email, "aud": "authenticated"},
        settings.jwt_secret,
        algorithm="HS256",
    )


def bearer(email="someone@example.com"):
    return {"Authorization": f"Bearer {make_token(email)}"}


class FakeClock:
    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now += seconds


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch):
    """Start every test unconfigured, whatever the local .env says."""
    monkeypatch.setattr(settings, "supabase_url", "")
    monkeypatch.setattr(settings, "supabase_anon_key", "")
    monkeypatch.setattr(settings, "supabase_service_key", "")
    monkeypatch.setattr(settings, "bootstrap_admin_email", "")
    monkeypatch.setattr(settings, "site_url", "http://localhost:3000")
    monkeypatch.setattr(settings, "admin_redirect_path", "/#admin")
    monkeypatch.setattr(settings, "form_cooldown_seconds", 30.0)
    monkeypatch.setattr(settings, "directory_page_size", 12)


@pytest.fixture(autouse=True)
def _clear_caches():
    """Clear in-memory caches and client singletons between tests."""
    from appylink_api.utils.cache import directory_cache
    from appylink_shared.db import reset_supabase_clients

    yield
    directory_cache.clear()
    reset_supabase_clients()


@pytest.fixture()
def configured(monkeypatch):
    """Pretend a Supabase project is configured."""
    monkeypatch.setattr(settings, "supabase_url", "https://project.supabase.co")
    monkeypatch.setattr(settings, "supabase_anon_key", "anon-key")
    monkeypatch.setattr(settings, "supabase_service_key", "service-key")


@pytest.fixture()
def clock():
    return FakeClock()


@pytest.fixture()
def app(clock):
    """Create test FastAPI app with a fake clock and fresh client storage."""
    from appylink_api.app import create_app
    return create_app(clock=clock)


@pytest.fixture()
def client(app):
    """HTTP test client."""
    return TestClient(app)


@pytest.fixture()
def sample_provider_row():
    return {
        "id": "acme-removals-crm",
        "name": "Acme CRM",
        "category_id": "software",
        "tags": ["crm"],
        "website": "https://acme.example.co.uk",
        "summary": "CRM for movers",
        "details": "Everything a removals office needs.",
        "discount": None,
        "is_active": True,
        "is_featured": False,
        "tier": "free",
    }


@pytest.fixture()
def sample_submission_row():
    return {
        "id": "sub-1",
        "company_name": "Crate Hire Ltd",
        "category_id": "equipment",
        "website": "https://cratehire.example.co.uk",
        "description": "Plastic crate hire for office moves.",
        "discount": None,
        "status": "new",
    }
