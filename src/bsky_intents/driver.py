"""
Incoming link source and the driver that feeds it into an IntentHandler.

The platform reports the link the app was opened or resumed with. The driver
runs the pipeline once per distinct value: re-emitting the same link does
nothing, and None/empty values are skipped.
"""

import logging
from typing import Callable, Optional

from bsky_intents.handler import IntentHandler

logger = logging.getLogger(__name__)

LinkListener = Callable[[Optional[str]], None]
StateCallback = Callable[[str, str], None]


class IncomingLinkSource:
    """Holds the current incoming link and notifies listeners on every set()."""

    def __init__(self, initial: Optional[str] = None) -> None:
        self._current = initial
        self._listeners: list[LinkListener] = []

    @property
    def current(self) -> Optional[str]:
        return self._current

    def add_listener(self, listener: LinkListener) -> Callable[[], None]:
        """Add a listener. Returns a cleanup function."""
        self._listeners.append(listener)
        def remove() -> None:
            try:
                self._listeners.remove(listener)
            except ValueError:
                pass
        return remove

    def set(self, url: Optional[str]) -> None:
        self._current = url
        for listener in list(self._listeners):
            listener(url)


class SubscriptionDriver:
    def __init__(
        self,
        source: IncomingLinkSource,
        handler: IntentHandler,
        on_state: Optional[StateCallback] = None,
    ):
        self._source = source
        self._handler = handler
        self._on_state = on_state
        self._remove: Optional[Callable[[], None]] = None
        self._last_url: Optional[str] = None

    @property
    def last_url(self) -> Optional[str]:
        return self._last_url

    @property
    def running(self) -> bool:
        return self._remove is not None

    def start(self) -> None:
        """Subscribe and handle the link the app was launched with, if any."""
        if self._remove is not None:
            return
        self._remove = self._source.add_listener(self.on_link)
        self.on_link(self._source.current)

    def stop(self) -> None:
        if self._remove is not None:
            self._remove()
            self._remove = None

    def on_link(self, url: Optional[str]) -> Optional[str]:
        """Run the pipeline if ``url`` differs from the last one seen.

        Returns the terminal pipeline state, or None when nothing ran.
        """
        if url == self._last_url:
            return None
        self._last_url = url
        if not url:
            return None
        state = self._handler.handle_url(url)
        logger.debug("Incoming link handled: %s -> %s", url, state)
        if self._on_state is not None:
            self._on_state(url, state)
        return state
