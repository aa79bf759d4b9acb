from __future__ import annotations

import logging
from typing import Optional

import httpx

from ..attendance.session import AttendanceSession
from ..stats.service import AnalyticsReport, AnalyticsService, DashboardSummary
from ..subjects.registry import SubjectRegistry
from .context import ClientContext
from .http_api import HttpTrackerApi

logger = logging.getLogger(__name__)


class TrackerClient:
    """Wires the async core to the HTTP collaborators for one signed-in user.

    The registry refresh is an explicit operation: sessions created here call it
    when they close, and callers call it after subject mutations.
    """

    def __init__(
        self,
        context: ClientContext,
        *,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        analytics: Optional[AnalyticsService] = None,
    ):
        self.api = HttpTrackerApi(context, transport=transport)
        self.registry = SubjectRegistry(self.api)
        self._analytics = analytics or AnalyticsService()

    @property
    def context(self) -> ClientContext:
        return self.api.context

    async def login(self, *, email: str, password: str) -> ClientContext:
        context = await self.api.login(email=email, password=password)
        await self.registry.refresh()
        return context

    async def register(self, *, name: str, email: str, password: str) -> ClientContext:
        context = await self.api.register(name=name, email=email, password=password)
        await self.registry.refresh()
        return context

    def logout(self) -> ClientContext:
        logger.info("signing out %s", self.context.user.email if self.context.user else "anonymous user")
        return self.api.logout()

    def new_session(self, **kwargs) -> AttendanceSession:
        return AttendanceSession(self.api, on_close=self.registry.refresh, **kwargs)

    async def dashboard(self, *, refresh: bool = True) -> DashboardSummary:
        if refresh:
            await self.registry.refresh()
        return self._analytics.dashboard(self.registry.subjects)

    async def analytics(self, *, refresh: bool = True) -> AnalyticsReport:
        if refresh:
            await self.registry.refresh()
        return self._analytics.analytics(self.registry.subjects)
