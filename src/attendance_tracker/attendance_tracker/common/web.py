from __future__ import annotations

from functools import wraps
from typing import Callable

from flask import g, request

from ..core.exceptions import AuthError, ValidationError


def bearer_token() -> str:
    header = request.headers.get("Authorization", "")
    scheme, _, token = header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise AuthError("Not authorized, no token")
    return token.strip()


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def make_token_required(authenticate: Callable[[str], object]):
    """Build a decorator that resolves the bearer token into ``g.current_user``."""

    def token_required(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            g.current_user = authenticate(bearer_token())
            return view(*args, **kwargs)

        return wrapper

    return token_required


def current_user_id() -> int:
    return int(g.current_user.user_id)
