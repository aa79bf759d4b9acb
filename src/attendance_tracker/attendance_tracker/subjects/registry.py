from __future__ import annotations

import logging
from typing import Optional

from ..common.validators import require_non_empty
from .model import Subject
from .store import SubjectStore

logger = logging.getLogger(__name__)


class SubjectRegistry:
    """Holds the last server-confirmed subject list.

    The list is always replaced by a full refresh after a mutation, never
    patched locally.
    """

    def __init__(self, store: SubjectStore):
        self._store = store
        self._subjects: list[Subject] = []

    @property
    def subjects(self) -> list[Subject]:
        return list(self._subjects)

    def get(self, subject_id: str) -> Optional[Subject]:
        return next((s for s in self._subjects if s.subject_id == subject_id), None)

    async def refresh(self) -> list[Subject]:
        self._subjects = list(await self._store.list_subjects())
        logger.debug("subject list refreshed (%d subjects)", len(self._subjects))
        return self.subjects

    async def create(self, name: str) -> Subject:
        name = require_non_empty(name, "Subject name is required")
        subject = await self._store.create_subject(name)
        await self.refresh()
        return subject

    async def delete(self, subject_id: str) -> None:
        await self._store.delete_subject(subject_id)
        await self.refresh()
