from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.exceptions import AuthError, NotFoundError, ValidationError
from .model import User, UserProfile
from .repository import UserRepository
from .tokens import TokenService


@dataclass(frozen=True)
class AuthResult:
    token: str
    user: UserProfile


def _normalize_email(email: str) -> str:
    email = require_non_empty(email, "Email is required").lower()
    if "@" not in email:
        raise ValidationError("Email is invalid")
    return email


class AuthService:
    """Use case: register and log in, returning a bearer token."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def register(self, *, name: str, email: str, password: str) -> AuthResult:
        name = require_non_empty(name, "Name is required")
        email = _normalize_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._users.get_by_email(email):
            raise ValidationError("User already exists")

        user_id = self._users.create_user(name=name, email=email, password_hash=generate_password_hash(password))
        return AuthResult(token=self._tokens.issue(user_id), user=UserProfile(str(user_id), name, email))

    def login(self, *, email: str, password: str) -> AuthResult:
        user = self._users.get_by_email((email or "").strip().lower())
        if not user or not self._password_ok(user, password):
            raise AuthError("Invalid email or password")
        return AuthResult(token=self._tokens.issue(user.user_id), user=user.profile())

    def authenticate_token(self, token: str) -> User:
        user = self._users.get_by_id(self._tokens.verify(token))
        if not user:
            raise AuthError("Not authorized, user not found")
        return user

    @staticmethod
    def _password_ok(user: User, password: str) -> bool:
        try:
            return check_password_hash(user.password_hash, password or "")
        except ValueError:
            # e.g. placeholder or corrupted hashes
            return False


class ProfileService:
    """Use case: read and update the signed-in user's profile."""

    def __init__(self, users: UserRepository):
        self._users = users

    def get_profile(self, user_id: int) -> UserProfile:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user.profile()

    def update_profile(
        self,
        *,
        user_id: int,
        name: Optional[str] = None,
        email: Optional[str] = None,
        current_password: Optional[str] = None,
        new_password: Optional[str] = None,
    ) -> UserProfile:
        user = self._users.get_by_id(user_id)
        if not user:
            raise NotFoundError("User not found")

        new_name = require_non_empty(name, "Name is required") if name is not None else user.name
        new_email = _normalize_email(email) if email is not None else user.email
        if new_email != user.email:
            other = self._users.get_by_email(new_email)
            if other and other.user_id != user.user_id:
                raise ValidationError("Email is already in use")

        password_hash = user.password_hash
        if new_password:
            if not current_password:
                raise ValidationError("Current password is required to set new password")
            if not AuthService._password_ok(user, current_password):
                raise ValidationError("Current password is incorrect")
            require_min_length(new_password, "Password", MIN_PASSWORD_LENGTH)
            password_hash = generate_password_hash(new_password)

        self._users.update_user(user_id=user.user_id, name=new_name, email=new_email, password_hash=password_hash)
        return UserProfile(user_id=str(user.user_id), name=new_name, email=new_email)
