from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Subject


class SubjectRepository(Protocol):
    """Backend persistence for subjects, always scoped to the owning user."""

    def list_for_user(self, user_id: int) -> Sequence[Subject]:
        raise NotImplementedError

    def get_for_user(self, subject_id: int, user_id: int) -> Optional[Subject]:
        raise NotImplementedError

    def create(self, *, user_id: int, name: str) -> int:
        raise NotImplementedError

    def delete(self, subject_id: int) -> bool:
        """Delete the subject together with its attendance records."""

        raise NotImplementedError
