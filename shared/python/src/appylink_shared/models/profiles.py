"""
models/profiles.py — Pydantic model for the profiles table (user → role).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel

from appylink_shared.constants import ROLES, Role


class AdminProfile(BaseModel):
    """Matches the profiles table row."""

    id: str
    email: str | None = None
    role: Role | None = None

    @classmethod
    def from_db_row(cls, row: dict[str, Any]) -> "AdminProfile":
        data = dict(row)
        data["id"] = str(data.get("id", ""))
        if data.get("role") not in ROLES:
            data["role"] = None
        return cls(**data)
