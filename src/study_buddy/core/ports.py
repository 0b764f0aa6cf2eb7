# src/study_buddy/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations, so the
notification backend and the delivery transport stay swappable in tests.
"""

from collections.abc import Coroutine
from typing import Any, Awaitable, Protocol, TypeVar

T = TypeVar("T")


class NotificationScheduler(Protocol):
    """
    The service that fires time-based alerts outside the app's control.

    Once a repeating trigger is registered the app cannot observe it firing;
    the only handle it keeps is the request id, which is enough to cancel.
    """

    def request_permission(self) -> Awaitable[bool]: ...

    def schedule_repeating(
            self,
            *,
            title: str,
            body: str,
            interval_seconds: float = 7200,
            repeats: bool = True,
    ) -> Awaitable[str]: ...

    def cancel(self, request_id: str) -> None: ...


class OutboundMessenger(Protocol):
    """Where fired notifications end up (console, desktop, test fake)."""

    def send_text(self, *, text: str) -> Awaitable[None]: ...


class CoroutineRunner(Protocol):
    """Runs a coroutine to completion from synchronous UI code."""

    def run(self, coro: Coroutine[Any, Any, T], timeout: float | None = None) -> T: ...
