from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    """Domain entity: a registered account.

    Plain data object; no DB access here.
    """

    user_id: int
    name: str
    email: str
    password_hash: str

    def profile(self) -> "UserProfile":
        return UserProfile(user_id=str(self.user_id), name=self.name, email=self.email)


@dataclass(frozen=True)
class UserProfile:
    """Public identity of the signed-in user (what clients get to see)."""

    user_id: str
    name: str
    email: str
