# src/study_buddy/reminders/notification_center.py

from __future__ import annotations

"""
In-process notification service.

Plays the part of the operating system's notification scheduler: the app
submits "fire every N seconds" requests and gets back a request id; firing
happens on this service's own event loop and is invisible to the app.

The console REPL is blocking (input()), so the loop lives in a background
thread (BackgroundLoop) and synchronous UI code hands coroutines to it.
"""

import asyncio
import contextlib
import logging
import threading
import uuid
from collections.abc import Callable, Coroutine
from typing import Any, Literal, TypeVar

from ..config import CONSENT_CHOICES
from ..core.ports import OutboundMessenger
from ..errors import NotificationError

logger = logging.getLogger(__name__)

T = TypeVar("T")

ConsentPolicy = Literal["ask", "allow", "deny"]

PERMISSION_QUESTION = "Allow {app} to send you reminder notifications? [y/N] "


class LocalNotificationCenter:
    """
    NotificationScheduler implementation backed by asyncio tasks.

    Consent:
    - "allow" / "deny": fixed answer (useful for headless runs and tests)
    - "ask": call `prompt(question)` once, off-loop; the answer is remembered
      for the rest of the process, like an OS consent dialog.
    """

    def __init__(
        self,
        messenger: OutboundMessenger,
        *,
        consent: ConsentPolicy = "ask",
        prompt: Callable[[str], bool] | None = None,
        app_name: str = "StudyBuddy",
    ) -> None:
        if consent not in CONSENT_CHOICES:
            raise ValueError(f"Unknown consent policy: {consent!r}")
        self._messenger = messenger
        self._consent = consent
        self._prompt = prompt
        self._app_name = app_name
        self._granted: bool | None = None
        self._triggers: dict[str, asyncio.Task[None]] = {}
        self._loop: asyncio.AbstractEventLoop | None = None

    # ---- permission ----

    async def request_permission(self) -> bool:
        if self._granted is not None:
            return self._granted

        if self._consent == "allow":
            granted = True
        elif self._consent == "deny":
            granted = False
        elif self._prompt is None:
            logger.warning("Consent policy is 'ask' but no prompt is configured; denying.")
            granted = False
        else:
            question = PERMISSION_QUESTION.format(app=self._app_name)
            granted = bool(await asyncio.to_thread(self._prompt, question))

        self._granted = granted
        logger.info("Notification permission %s", "granted" if granted else "denied")
        return granted

    # ---- scheduling ----

    async def schedule_repeating(
        self,
        *,
        title: str,
        body: str,
        interval_seconds: float = 7200,
        repeats: bool = True,
    ) -> str:
        if not self._granted:
            raise NotificationError("Notifications are not permitted.")
        try:
            interval = float(interval_seconds)
        except (TypeError, ValueError) as e:
            raise NotificationError(f"Invalid interval: {interval_seconds!r}") from e
        if interval <= 0:
            raise NotificationError(f"Interval must be positive, got {interval_seconds!r}")

        self._loop = asyncio.get_running_loop()
        request_id = uuid.uuid4().hex
        task = asyncio.create_task(
            self._fire(request_id, title=title, body=body, interval=interval, repeats=repeats),
            name=f"notification-{request_id}",
        )
        self._triggers[request_id] = task
        task.add_done_callback(lambda _t: self._triggers.pop(request_id, None))

        logger.info(
            "Notification scheduled id=%s every=%ss repeats=%s body=%r",
            request_id,
            interval,
            repeats,
            body,
        )
        return request_id

    async def _fire(
        self,
        request_id: str,
        *,
        title: str,
        body: str,
        interval: float,
        repeats: bool,
    ) -> None:
        while True:
            await asyncio.sleep(interval)
            try:
                await self._messenger.send_text(text=f"{title}: {body}")
                logger.debug("Notification fired id=%s", request_id)
            except Exception:
                logger.exception("Notification delivery failed id=%s", request_id)
            if not repeats:
                return

    def cancel(self, request_id: str) -> None:
        """Cancel a trigger. Safe to call from any thread; unknown ids are ignored."""
        loop = self._loop
        if loop is None:
            return

        try:
            running = asyncio.get_running_loop()
        except RuntimeError:
            running = None

        if running is loop:
            self._cancel_now(request_id)
        elif loop.is_running():
            loop.call_soon_threadsafe(self._cancel_now, request_id)
        else:
            self._cancel_now(request_id)

    def _cancel_now(self, request_id: str) -> None:
        task = self._triggers.pop(request_id, None)
        if task is None:
            return
        task.cancel()
        logger.info("Notification cancelled id=%s", request_id)

    def pending_request_ids(self) -> list[str]:
        return list(self._triggers)

    async def shutdown(self) -> None:
        tasks = list(self._triggers.values())
        self._triggers.clear()
        for task in tasks:
            task.cancel()
        for task in tasks:
            with contextlib.suppress(asyncio.CancelledError):
                await task
        if tasks:
            logger.info("Notification center stopped (%d trigger(s) cancelled).", len(tasks))


class BackgroundLoop:
    """
    An asyncio event loop running in a daemon thread.

    `run()` blocks the caller until the coroutine finishes on that loop, so
    the caller's thread and the loop never mutate shared state concurrently.
    """

    def __init__(self, name: str = "study-buddy-loop") -> None:
        self._name = name
        self._thread: threading.Thread | None = None
        self._loop: asyncio.AbstractEventLoop | None = None

    @property
    def loop(self) -> asyncio.AbstractEventLoop | None:
        return self._loop

    def start(self) -> BackgroundLoop:
        if self._thread is not None:
            return self

        ready = threading.Event()
        holder: dict[str, asyncio.AbstractEventLoop] = {}

        def runner() -> None:
            loop = asyncio.new_event_loop()
            asyncio.set_event_loop(loop)
            holder["loop"] = loop
            ready.set()
            try:
                loop.run_forever()
            finally:
                with contextlib.suppress(Exception):
                    loop.run_until_complete(loop.shutdown_asyncgens())
                loop.close()

        t = threading.Thread(target=runner, name=self._name, daemon=True)
        t.start()

        if not ready.wait(timeout=5.0) or "loop" not in holder:
            raise RuntimeError("Background event loop did not start.")

        self._thread = t
        self._loop = holder["loop"]
        logger.debug("Background loop started (%s).", self._name)
        return self

    def run(self, coro: Coroutine[Any, Any, T], timeout: float | None = None) -> T:
        if self._loop is None:
            coro.close()
            raise RuntimeError("Background loop is not running; call start() first.")
        future = asyncio.run_coroutine_threadsafe(coro, self._loop)
        return future.result(timeout=timeout)

    def stop(self, timeout: float | None = 5.0) -> None:
        loop, thread = self._loop, self._thread
        if loop is None or thread is None:
            return
        with contextlib.suppress(RuntimeError):
            loop.call_soon_threadsafe(loop.stop)
        thread.join(timeout=timeout)
        self._loop = None
        self._thread = None
        logger.debug("Background loop stopped (%s).", self._name)
