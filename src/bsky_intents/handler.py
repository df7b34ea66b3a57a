"""
IntentHandler: runs one incoming link through the whole pipeline.

normalize → extract → validate → gate → schedule
"""

import functools
import logging
from typing import Any, Optional

from bsky_intents.capabilities import AppCapabilities
from bsky_intents.config import IntentSettings
from bsky_intents.dispatch import DEFAULT_DELAY_S, IntentDispatcher
from bsky_intents.links import DEFAULT_SCHEME, extract_intent, normalize_url
from bsky_intents.models.intent import ParsedIntent, PipelineState
from bsky_intents.registry import Handler, IntentRegistry, default_registry

logger = logging.getLogger(__name__)


class IntentHandler:
    def __init__(
        self,
        capabilities: AppCapabilities,
        *,
        registry: Optional[IntentRegistry] = None,
        scheme: str = DEFAULT_SCHEME,
        delay_s: float = DEFAULT_DELAY_S,
    ):
        self._caps = capabilities
        self._registry = registry if registry is not None else default_registry()
        self._scheme = scheme
        self._dispatcher = IntentDispatcher(capabilities, delay_s=delay_s)

    @classmethod
    def from_settings(
        cls,
        capabilities: AppCapabilities,
        settings: IntentSettings,
        registry: Optional[IntentRegistry] = None,
    ) -> "IntentHandler":
        return cls(capabilities, registry=registry, scheme=settings.scheme, delay_s=settings.delay_s)

    @property
    def registry(self) -> IntentRegistry:
        return self._registry

    @property
    def dispatcher(self) -> IntentDispatcher:
        return self._dispatcher

    def parse(self, url: str) -> Optional[ParsedIntent]:
        """Normalize and extract without validating or dispatching."""
        return extract_intent(normalize_url(url, self._scheme), self._registry)

    def handle_url(self, url: str) -> str:
        """Run ``url`` through the pipeline and return the terminal state reached.

        Returns PipelineState.NO_INTENT, DROPPED or SCHEDULED. The scheduled
        handler runs later on the event loop. LinkParseError propagates for
        strings that are not URLs.
        """
        logger.debug("%s: %s", PipelineState.NORMALIZING, url)
        normalized = normalize_url(url, self._scheme)

        logger.debug("%s: %s", PipelineState.EXTRACTING, normalized)
        intent = extract_intent(normalized, self._registry)
        if intent is None:
            logger.debug("%s: %s", PipelineState.NO_INTENT, url)
            return PipelineState.NO_INTENT

        logger.debug("%s: %s", PipelineState.VALIDATING, intent.kind.value)
        entry = self._registry.get(intent.kind)
        payload = entry.validator(intent.raw_params)  # type: ignore[union-attr]

        action = functools.partial(self._run_handler, entry.handler, payload)  # type: ignore[union-attr]
        if self._dispatcher.dispatch(action) is None:
            logger.debug("%s: %s", PipelineState.DROPPED, intent.kind.value)
            return PipelineState.DROPPED

        logger.debug("%s: %s", PipelineState.SCHEDULED, intent.kind.value)
        return PipelineState.SCHEDULED

    def _run_handler(self, handler: Handler, payload: Any) -> None:
        handler(payload, self._caps)
        logger.debug("%s", PipelineState.DISPATCHED)
