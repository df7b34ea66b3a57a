"""
Dispatch gate and scheduler.

Intents only run for a signed-in user. Before the action fires, every open
modal/overlay is closed; the action itself is deferred so it does not race
that teardown:

- close_all_active_elements returns None: wait a fixed delay (0.5s)
- close_all_active_elements returns an awaitable: run once it completes

Nothing is tracked after scheduling. There is no cancellation, and two links
inside the delay window produce two dispatches in submission order.
"""

import asyncio
import inspect
import logging
from typing import Any, Awaitable, Callable, Optional, Union

from bsky_intents.capabilities import AppCapabilities

logger = logging.getLogger(__name__)

DEFAULT_DELAY_S = 0.5

Scheduled = Union[asyncio.TimerHandle, "asyncio.Task[None]"]


class IntentDispatcher:
    def __init__(self, capabilities: AppCapabilities, delay_s: float = DEFAULT_DELAY_S):
        if delay_s < 0:
            raise ValueError("delay_s must be >= 0")
        self._caps = capabilities
        self._delay_s = delay_s

    @property
    def delay_s(self) -> float:
        return self._delay_s

    def dispatch(self, action: Callable[[], None]) -> Optional[Scheduled]:
        """Gate on the session, tear down open UI, then schedule ``action``.

        Returns None when the intent was dropped, otherwise the scheduled
        timer or task. Must be called with a running event loop.
        """
        if not self._caps.has_session():
            logger.debug("No session, dropping intent")
            return None

        loop = asyncio.get_running_loop()
        teardown = self._caps.close_all_active_elements()
        if inspect.isawaitable(teardown):
            return loop.create_task(self._after(teardown, action))
        return loop.call_later(self._delay_s, self._fire, action)

    async def _after(self, teardown: Awaitable[Any], action: Callable[[], None]) -> None:
        try:
            await teardown
        except Exception as e:
            logger.error(f"Closing active elements failed, intent not dispatched: {e}")
            return
        self._fire(action)

    @staticmethod
    def _fire(action: Callable[[], None]) -> None:
        # Fire-and-forget: nobody awaits the result, so failures are logged here.
        try:
            action()
        except Exception as e:
            logger.error(f"Intent dispatch failed: {e}")
