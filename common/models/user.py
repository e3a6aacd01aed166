from dataclasses import dataclass
from typing import Any, Dict, Optional

ROLE_USER = "user"
ROLE_ADMIN = "admin"


@dataclass
class User:
    id: int
    username: str
    email: str
    password: str
    role: str = ROLE_USER
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "password": self.password,
            "role": self.role,
            "createdAt": self.created_at,
        }
        if self.updated_at:
            data["updatedAt"] = self.updated_at
        return data

    def public_dict(self) -> Dict[str, Any]:
        """User view safe to send to clients (no password hash)."""
        return {"id": self.id, "username": self.username, "email": self.email, "role": self.role}

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "User":
        return cls(
            id=raw["id"],
            username=raw.get("username", ""),
            email=raw.get("email", ""),
            password=raw.get("password", ""),
            role=raw.get("role", ROLE_USER),
            created_at=raw.get("createdAt"),
            updated_at=raw.get("updatedAt"),
        )


@dataclass(frozen=True)
class CurrentUser:
    """Identity attached to an authenticated request."""

    id: int
    username: str
    role: str
    sid: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN
