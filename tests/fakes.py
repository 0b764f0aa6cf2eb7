# tests/fakes.py

from __future__ import annotations

import asyncio
from collections.abc import Coroutine
from dataclasses import dataclass, field
from typing import Any, TypeVar

from study_buddy.core.ports import OutboundMessenger
from study_buddy.errors import NotificationError

T = TypeVar("T")


@dataclass(slots=True)
class ScheduledRequest:
    request_id: str
    title: str
    body: str
    interval_seconds: float
    repeats: bool


class FakeNotificationScheduler:
    """
    Deterministic NotificationScheduler for unit tests.

    - Captures permission requests, registrations and cancellations
    - `granted=False` simulates a denied consent prompt
    - `fail=True` makes registration raise like an unavailable backend
    - `permission_error=True` makes the consent request itself raise
    """

    def __init__(
        self, *, granted: bool = True, fail: bool = False, permission_error: bool = False
    ) -> None:
        self.granted = granted
        self.fail = fail
        self.permission_error = permission_error
        self.permission_requests = 0
        self.scheduled: list[ScheduledRequest] = []
        self.cancelled: list[str] = []

    async def request_permission(self) -> bool:
        self.permission_requests += 1
        if self.permission_error:
            raise NotificationError("consent prompt unavailable")
        return self.granted

    async def schedule_repeating(
        self,
        *,
        title: str,
        body: str,
        interval_seconds: float = 7200,
        repeats: bool = True,
    ) -> str:
        if self.fail:
            raise NotificationError("notification backend unavailable")
        request_id = f"req-{len(self.scheduled) + 1}"
        self.scheduled.append(
            ScheduledRequest(
                request_id=request_id,
                title=title,
                body=body,
                interval_seconds=interval_seconds,
                repeats=repeats,
            )
        )
        return request_id

    def cancel(self, request_id: str) -> None:
        self.cancelled.append(request_id)


class InlineRunner:
    """CoroutineRunner for sync tests: runs each coroutine on a fresh loop."""

    def run(self, coro: Coroutine[Any, Any, T], timeout: float | None = None) -> T:
        return asyncio.run(coro)


@dataclass(slots=True)
class FakeMessenger(OutboundMessenger):
    """
    Fake OutboundMessenger used by notification center tests.
    """

    sent: list[str] = field(default_factory=list)
    fail: bool = False

    async def send_text(self, *, text: str) -> None:
        if self.fail:
            raise RuntimeError("transport down")
        self.sent.append(text)
