from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from flask_login import UserMixin


@dataclass
class AdminSession(UserMixin):
    """An auth provider session held for the signed-in admin."""

    user_id: str
    email: str
    access_token: str
    refresh_token: str | None = None
    expires_at: int | None = None

    def get_id(self) -> str:  # Flask-Login compatibility
        return self.user_id

    def to_dict(self) -> dict[str, Any]:
        return {
            "user_id": self.user_id,
            "email": self.email,
            "access_token": self.access_token,
            "refresh_token": self.refresh_token,
            "expires_at": self.expires_at,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "AdminSession | None":
        if not data or not data.get("user_id") or not data.get("access_token"):
            return None
        return cls(
            user_id=str(data["user_id"]),
            email=data.get("email") or "",
            access_token=data["access_token"],
            refresh_token=data.get("refresh_token"),
            expires_at=data.get("expires_at"),
        )

    @classmethod
    def from_token_response(cls, payload: dict[str, Any]) -> "AdminSession":
        """Build a session from the auth gateway's token grant response."""
        user = payload.get("user") or {}
        return cls(
            user_id=str(user.get("id", "")),
            email=user.get("email") or "",
            access_token=payload["access_token"],
            refresh_token=payload.get("refresh_token"),
            expires_at=payload.get("expires_at"),
        )
