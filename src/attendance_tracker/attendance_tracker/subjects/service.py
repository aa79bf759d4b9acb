from __future__ import annotations

from ..common.validators import require_non_empty
from ..core.exceptions import NotFoundError
from .model import Subject
from .repository import SubjectRepository


class SubjectService:
    """Backend use cases for subjects."""

    def __init__(self, subjects: SubjectRepository):
        self._subjects = subjects

    def list_subjects(self, user_id: int) -> list[Subject]:
        return list(self._subjects.list_for_user(user_id))

    def get_subject(self, *, user_id: int, subject_id: int) -> Subject:
        subject = self._subjects.get_for_user(subject_id, user_id)
        if not subject:
            raise NotFoundError("Subject not found")
        return subject

    def create_subject(self, *, user_id: int, name: str) -> Subject:
        name = require_non_empty(name, "Subject name is required")
        subject_id = self._subjects.create(user_id=user_id, name=name)
        return self.get_subject(user_id=user_id, subject_id=subject_id)

    def delete_subject(self, *, user_id: int, subject_id: int) -> None:
        self.get_subject(user_id=user_id, subject_id=subject_id)
        if not self._subjects.delete(subject_id):
            raise NotFoundError("Subject not found")
