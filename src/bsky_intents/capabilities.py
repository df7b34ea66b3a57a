"""
Outbound capabilities the intent pipeline depends on.

The pipeline only reads session state and calls two UI triggers; all of them
are supplied by the host application as plain callables.
"""

from typing import Any, Awaitable, Callable, Optional, Union

from bsky_intents.models.compose import ComposerOpts

CloseAllResult = Optional[Awaitable[Any]]


class AppCapabilities:
    __slots__ = ("has_session", "close_all_active_elements", "open_composer", "is_native")

    def __init__(
        self,
        has_session: Callable[[], bool],
        close_all_active_elements: Callable[[], CloseAllResult],
        open_composer: Callable[[ComposerOpts], None],
        is_native: Union[bool, Callable[[], bool]] = True,
    ):
        self.has_session = has_session
        self.close_all_active_elements = close_all_active_elements
        self.open_composer = open_composer
        if isinstance(is_native, bool):
            native = is_native
            self.is_native = lambda: native
        else:
            self.is_native = is_native
