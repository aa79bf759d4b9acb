from __future__ import annotations

import importlib
from dataclasses import dataclass, replace
from typing import Optional

from ..core.constants import DEFAULT_HTTP_TIMEOUT
from ..users.model import UserProfile


@dataclass(frozen=True)
class ClientContext:
    """Credentials and identity passed explicitly to the HTTP collaborators.

    Replaces ambient token/user storage: signing in or out produces a new context.
    """

    base_url: str
    token: Optional[str] = None
    user: Optional[UserProfile] = None
    timeout: float = DEFAULT_HTTP_TIMEOUT

    @property
    def authenticated(self) -> bool:
        return bool(self.token)

    def signed_in(self, token: str, user: UserProfile) -> "ClientContext":
        return replace(self, token=token, user=user)

    def signed_out(self) -> "ClientContext":
        return replace(self, token=None, user=None)

    def with_user(self, user: UserProfile) -> "ClientContext":
        return replace(self, user=user)

    def auth_headers(self) -> dict[str, str]:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


def load_client_context(settings_module: Optional[str] = None) -> ClientContext:
    """Anonymous context built from the active settings module (API_BASE_URL, HTTP_TIMEOUT)."""
    from config import get_settings_module

    settings = importlib.import_module(settings_module or get_settings_module())
    return ClientContext(
        base_url=str(getattr(settings, "API_BASE_URL", "http://localhost:5000")),
        timeout=float(getattr(settings, "HTTP_TIMEOUT", DEFAULT_HTTP_TIMEOUT)),
    )
