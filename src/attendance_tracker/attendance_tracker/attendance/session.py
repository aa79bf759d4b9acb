from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from datetime import date
from typing import Awaitable, Callable, Optional

from ..common.datetime_utils import today_local
from ..core.constants import SUCCESS_NOTICE_MS
from ..core.enums import AttendanceStatus, ErrorKind, SessionState
from ..core.exceptions import AuthError, ConflictError, DomainError, NotFoundError, SessionBusyError, ValidationError
from ..subjects.model import Subject
from .model import AttendanceRecord
from .notices import TimedNotice
from .store import AttendanceStore

logger = logging.getLogger(__name__)

DUPLICATE_DATE_MESSAGE = "Attendance already marked for this date"
SUBJECT_NOT_FOUND_MESSAGE = "Subject not found"
RECORD_NOT_FOUND_MESSAGE = "Attendance record not found"
MARK_FAILED_MESSAGE = "Error marking attendance. Please try again."
DELETE_FAILED_MESSAGE = "Error deleting attendance record. Please try again."
MISSING_DATE_MESSAGE = "Please select a date"


@dataclass(frozen=True)
class SessionError:
    kind: ErrorKind
    message: str

    @property
    def retryable(self) -> bool:
        return self.kind == ErrorKind.TRANSIENT


HISTORY_ERROR = SessionError(ErrorKind.TRANSIENT, "Error fetching attendance history. Please try again.")

_ACTION_STATES = {SessionState.READY, SessionState.SUCCESS, SessionState.FAILED}


class AttendanceSession:
    """Marking workflow for one subject: pick a date, mark, review/delete history.

    Every open()/close() starts a new generation. Async results are applied only
    if their generation is still current, so a slow response never lands in a
    session that was closed or reopened for another subject meanwhile.

    AuthError is never turned into a message: it resets the session to IDLE and
    propagates so the caller can redirect to login.
    """

    def __init__(
        self,
        store: AttendanceStore,
        *,
        on_close: Optional[Callable[[], Awaitable[object]]] = None,
        clock: Callable[[], float] = time.monotonic,
        today: Callable[[], date] = today_local,
        notice_ms: int = SUCCESS_NOTICE_MS,
    ):
        self._store = store
        self._on_close = on_close
        self._clock = clock
        self._today = today
        self._notice_ms = int(notice_ms)

        self._generation = 0
        self._in_flight: Optional[int] = None
        self._reset()

    def _reset(self) -> None:
        self._state = SessionState.IDLE
        self._subject: Optional[Subject] = None
        self._history: list[AttendanceRecord] = []
        self._pending_date: Optional[date] = None
        self._error: Optional[SessionError] = None
        self._notice: Optional[TimedNotice] = None

    # Read-only view for the presentation layer

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def subject(self) -> Optional[Subject]:
        return self._subject

    @property
    def history(self) -> list[AttendanceRecord]:
        return list(self._history)

    @property
    def pending_date(self) -> Optional[date]:
        return self._pending_date

    @property
    def error(self) -> Optional[SessionError]:
        return self._error

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def busy(self) -> bool:
        return self._in_flight == self._generation or self._state == SessionState.LOADING_HISTORY

    def active_notice(self, now: Optional[float] = None) -> Optional[TimedNotice]:
        now = self._clock() if now is None else now
        if self._notice and not self._notice.is_active(now):
            self._notice = None
        return self._notice

    def dismiss_error(self) -> None:
        self._error = None

    # Transitions

    async def open(self, subject: Subject) -> None:
        self._generation += 1
        self._reset()
        self._subject = subject
        self._pending_date = self._today()
        self._state = SessionState.LOADING_HISTORY

        generation = self._generation
        await self._load_history(generation, subject.subject_id)
        if generation == self._generation:
            self._state = SessionState.READY

    async def refresh_history(self) -> bool:
        """Retry loading the history (e.g. after a failed open)."""

        subject_id = self._require_ready()
        generation = self._generation
        previous = self._state
        self._state = SessionState.LOADING_HISTORY

        ok = await self._load_history(generation, subject_id)
        if generation != self._generation:
            return False
        self._state = SessionState.READY if ok else previous
        if ok and self._error is HISTORY_ERROR:
            self._error = None
        return ok

    def select_date(self, value: Optional[date]) -> None:
        self._pending_date = value

    async def mark(self, status: AttendanceStatus) -> bool:
        """Create a record for the pending date.

        Returns True when the record was created and applied to this session.
        Store failures end in FAILED with ``error`` set; nothing is raised except
        AuthError and local rejections (SessionBusyError, closed session).
        """

        subject_id = self._require_ready()
        if self._pending_date is None:
            self._notice = None
            self._error = SessionError(ErrorKind.VALIDATION, MISSING_DATE_MESSAGE)
            return False

        status = AttendanceStatus(status)
        class_date = self._pending_date
        generation = self._begin(SessionState.MARKING)
        try:
            try:
                await self._store.create_attendance(subject_id, class_date, status)
            except AuthError:
                self._terminate(generation)
                raise
            except ConflictError as e:
                return self._fail(generation, ErrorKind.CONFLICT, str(e) or DUPLICATE_DATE_MESSAGE)
            except NotFoundError:
                return self._fail(generation, ErrorKind.NOT_FOUND, SUBJECT_NOT_FOUND_MESSAGE)
            except DomainError as e:
                logger.warning("marking attendance for subject %s on %s failed: %s", subject_id, class_date, e)
                return self._fail(generation, ErrorKind.TRANSIENT, MARK_FAILED_MESSAGE)

            if not self._is_current(generation, "mark"):
                return False

            self._error = None
            await self._load_history(generation, subject_id)
            if not self._is_current(generation, "mark"):
                return False

            self._pending_date = None
            self._acknowledge(f"Attendance marked as {status.value} successfully")
            self._state = SessionState.SUCCESS
            return True
        finally:
            self._end(generation)

    async def delete(self, record_id: str) -> bool:
        subject_id = self._require_ready()
        generation = self._begin(SessionState.DELETING)
        try:
            try:
                await self._store.delete_attendance(record_id)
            except AuthError:
                self._terminate(generation)
                raise
            except NotFoundError as e:
                return self._fail(generation, ErrorKind.NOT_FOUND, str(e) or RECORD_NOT_FOUND_MESSAGE, state=SessionState.READY)
            except DomainError as e:
                logger.warning("deleting attendance record %s failed: %s", record_id, e)
                return self._fail(generation, ErrorKind.TRANSIENT, DELETE_FAILED_MESSAGE, state=SessionState.READY)

            if not self._is_current(generation, "delete"):
                return False

            self._error = None
            await self._load_history(generation, subject_id)
            if not self._is_current(generation, "delete"):
                return False

            self._acknowledge("Attendance record deleted successfully")
            self._state = SessionState.READY
            return True
        finally:
            self._end(generation)

    async def close(self) -> None:
        """Return to IDLE and ask the owner to refresh subject counts.

        A failing refresh is logged and never raised; it must not block navigation.
        """

        self._generation += 1
        self._reset()
        if self._on_close is None:
            return
        try:
            await self._on_close()
        except Exception:
            logger.warning("subject refresh after closing attendance session failed", exc_info=True)

    # Internals

    def _require_ready(self) -> str:
        if self._state == SessionState.IDLE or self._subject is None:
            raise ValidationError("Attendance session is not open")
        if self.busy:
            raise SessionBusyError("Another attendance action is still in progress")
        if self._state not in _ACTION_STATES:
            raise SessionBusyError(f"Cannot act while session is {self._state.value}")
        return self._subject.subject_id

    def _begin(self, state: SessionState) -> int:
        # A new action supersedes the previous acknowledgment.
        self._notice = None
        self._in_flight = self._generation
        self._state = state
        return self._generation

    def _end(self, generation: int) -> None:
        if self._in_flight == generation:
            self._in_flight = None

    def _is_current(self, generation: int, action: str) -> bool:
        if generation == self._generation:
            return True
        logger.debug("discarding %s result from stale session generation %d", action, generation)
        return False

    def _fail(self, generation: int, kind: ErrorKind, message: str, *, state: SessionState = SessionState.FAILED) -> bool:
        if self._is_current(generation, kind.value):
            self._error = SessionError(kind, message)
            self._state = state
        return False

    def _acknowledge(self, message: str) -> None:
        self._notice = TimedNotice.start(message, duration_ms=self._notice_ms, now=self._clock())

    def _terminate(self, generation: int) -> None:
        if generation == self._generation:
            self._generation += 1
            self._reset()

    async def _load_history(self, generation: int, subject_id: str) -> bool:
        try:
            records = await self._store.list_attendance(subject_id)
        except AuthError:
            self._terminate(generation)
            raise
        except DomainError as e:
            if self._is_current(generation, "history"):
                logger.warning("loading attendance history for subject %s failed: %s", subject_id, e)
                self._error = HISTORY_ERROR
            return False

        if not self._is_current(generation, "history"):
            return False
        self._history = sorted(records, key=lambda r: r.class_date, reverse=True)
        return True
