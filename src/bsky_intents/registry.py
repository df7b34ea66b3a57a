"""
Intent registry: maps each IntentKind to its validator and handler.

Adding an intent kind means registering one more pair; nothing else in the
pipeline changes.
"""

from typing import Any, Callable, Iterator, NamedTuple, Optional

from bsky_intents.capabilities import AppCapabilities
from bsky_intents.compose import open_composer, validate_compose_params
from bsky_intents.errors import RegistryError
from bsky_intents.models.intent import IntentKind

Validator = Callable[[dict[str, str]], Any]
Handler = Callable[[Any, AppCapabilities], None]


class IntentEntry(NamedTuple):
    validator: Validator
    handler: Handler


class IntentRegistry:
    def __init__(self) -> None:
        self._entries: dict[IntentKind, IntentEntry] = {}

    def register(self, kind: IntentKind, validator: Validator, handler: Handler) -> None:
        if kind in self._entries:
            raise RegistryError(f"Intent kind already registered: {kind.value}")
        self._entries[kind] = IntentEntry(validator, handler)

    def get(self, kind: IntentKind) -> Optional[IntentEntry]:
        return self._entries.get(kind)

    def kinds(self) -> list[IntentKind]:
        return sorted(self._entries, key=lambda k: k.value)

    def __contains__(self, kind: object) -> bool:
        return kind in self._entries

    def __iter__(self) -> Iterator[IntentKind]:
        return iter(self.kinds())

    def __len__(self) -> int:
        return len(self._entries)


def default_registry() -> IntentRegistry:
    """Registry with every intent kind the app ships with."""
    registry = IntentRegistry()
    registry.register(IntentKind.COMPOSE, validate_compose_params, open_composer)
    return registry
