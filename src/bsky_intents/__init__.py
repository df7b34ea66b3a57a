"""
bsky-intents: deep-link intent dispatch for the Bluesky app.

Turns incoming ``bluesky://intent/...`` and ``https://bsky.app/intent/...``
links into validated, session-gated actions.
"""

from bsky_intents.capabilities import AppCapabilities
from bsky_intents.compose import parse_image_uris, validate_compose_params
from bsky_intents.config import IntentSettings, load_settings
from bsky_intents.dispatch import IntentDispatcher
from bsky_intents.driver import IncomingLinkSource, SubscriptionDriver
from bsky_intents.errors import IntentsError, LinkParseError, RegistryError, ConfigError
from bsky_intents.handler import IntentHandler
from bsky_intents.links import extract_intent, normalize_url
from bsky_intents.models.compose import ComposeIntentPayload, ComposerOpts, ImageRef
from bsky_intents.models.intent import IntentKind, ParsedIntent, PipelineState
from bsky_intents.registry import IntentRegistry, default_registry

__version__ = "0.1.0"
__all__ = [
    "AppCapabilities",
    "ComposeIntentPayload",
    "ComposerOpts",
    "ConfigError",
    "ImageRef",
    "IncomingLinkSource",
    "IntentDispatcher",
    "IntentHandler",
    "IntentKind",
    "IntentRegistry",
    "IntentSettings",
    "IntentsError",
    "LinkParseError",
    "ParsedIntent",
    "PipelineState",
    "RegistryError",
    "SubscriptionDriver",
    "default_registry",
    "extract_intent",
    "load_settings",
    "normalize_url",
    "parse_image_uris",
    "validate_compose_params",
]
