"""
Link normalization and intent extraction.

Native deep links look like ``bluesky://intent/compose``, where a generic
URL parser would treat ``intent`` as the host. Rewriting to three slashes
puts the marker in the path, so native and web links
(``https://bsky.app/intent/compose``) go through one parsing branch.
"""

import logging
from typing import TYPE_CHECKING, Optional
from urllib.parse import parse_qsl, urlsplit

from bsky_intents.errors import LinkParseError
from bsky_intents.models.intent import IntentKind, ParsedIntent

if TYPE_CHECKING:
    from bsky_intents.registry import IntentRegistry

logger = logging.getLogger(__name__)

DEFAULT_SCHEME = "bluesky"
INTENT_MARKER = "intent"


def normalize_url(url: str, scheme: str = DEFAULT_SCHEME) -> str:
    """Force ``scheme://x`` into ``scheme:///x``. Idempotent."""
    two = f"{scheme}://"
    if url.startswith(two) and not url.startswith(f"{scheme}:///"):
        return f"{scheme}:///" + url[len(two):]
    return url


def query_params(query: str) -> dict[str, str]:
    """Flatten a query string, keeping the first value of each key."""
    params: dict[str, str] = {}
    for key, value in parse_qsl(query, keep_blank_values=True):
        params.setdefault(key, value)
    return params


def extract_intent(url: str, registry: Optional["IntentRegistry"] = None) -> Optional[ParsedIntent]:
    """Return the intent encoded in a normalized URL, or None.

    Raises LinkParseError when the string is not a URL at all.
    """
    try:
        parts = urlsplit(url)
    except ValueError as e:
        raise LinkParseError(f"Invalid link: {e}", url=url) from e
    if not parts.scheme:
        raise LinkParseError("Invalid link: missing scheme", url=url)

    segments = [s for s in parts.path.split("/") if s]
    if len(segments) < 2 or segments[0] != INTENT_MARKER:
        return None

    try:
        kind = IntentKind(segments[1])
    except ValueError:
        logger.debug("Ignoring unknown intent kind %r", segments[1])
        return None
    if registry is not None and kind not in registry:
        logger.debug("Ignoring unregistered intent kind %r", kind.value)
        return None

    return ParsedIntent(kind=kind, raw_params=query_params(parts.query))
