# accounts/models.py

from dataclasses import dataclass
from typing import Optional


@dataclass
class User:
    """
    User as returned by the backend's /api/users endpoints.
    Nothing is stored locally; the backend is the source of truth.
    """
    id: Optional[str]
    name: str
    email: str
    role: Optional[str]
    lastLogin: Optional[str] = None
    createdAt: Optional[str] = None

    @classmethod
    def from_api(cls, payload):
        """
        Build a User from a login or /me payload.
        Accepts both `{"user": {...}}` and a bare user object.
        Returns None when the payload carries no user.
        """
        if not isinstance(payload, dict):
            return None
        data = payload["user"] if "user" in payload else payload
        if not isinstance(data, dict) or not data:
            return None
        return cls(
            id=str(data["id"]) if data.get("id") is not None else None,
            name=data.get("name") or "",
            email=data.get("email") or "",
            role=data.get("role"),
            lastLogin=data.get("lastLogin"),
            createdAt=data.get("createdAt"),
        )
