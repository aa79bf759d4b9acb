from __future__ import annotations

from typing import Protocol, Sequence

from .model import Subject


class SubjectStore(Protocol):
    """Async collaborator the client core uses to read and mutate subjects.

    Implementations raise AuthError when the caller is not authenticated.
    """

    async def list_subjects(self) -> Sequence[Subject]:
        raise NotImplementedError

    async def create_subject(self, name: str) -> Subject:
        raise NotImplementedError

    async def delete_subject(self, subject_id: str) -> None:
        """Delete the subject and, server side, all of its attendance records."""

        raise NotImplementedError
