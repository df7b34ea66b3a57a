"""
Compose intent: parameter validation and the open-composer handler.

imageUris is a comma-separated list of ``path|width|height`` entries. Only
local references are accepted; anything naming a remote http(s) location is
dropped so a crafted link cannot make the app fetch an attacker's image.
Each entry is judged on its own and a bad one never sinks the rest.
"""

import logging
import re
from typing import Optional

from bsky_intents.capabilities import AppCapabilities
from bsky_intents.models.compose import ComposeIntentPayload, ComposerOpts, ImageRef

logger = logging.getLogger(__name__)

VALID_IMAGE_ENTRY = re.compile(r"[\w.\-/]+\|\d+(\.\d+)?\|\d+(\.\d+)?", re.ASCII)
REMOTE_MARKERS = ("https://", "http://")


def is_allowed_image_entry(entry: str) -> bool:
    if any(marker in entry for marker in REMOTE_MARKERS):
        logger.debug("Dropping remote image entry %r", entry)
        return False
    if not VALID_IMAGE_ENTRY.fullmatch(entry):
        logger.debug("Dropping malformed image entry %r", entry)
        return False
    return True


def parse_image_uris(value: Optional[str]) -> list[ImageRef]:
    if value is None:
        return []
    images = []
    for entry in value.split(","):
        if not is_allowed_image_entry(entry):
            continue
        uri, width, height = entry.split("|")
        images.append(ImageRef(uri=uri, width=float(width), height=float(height)))
    return images


def validate_compose_params(params: dict[str, str]) -> ComposeIntentPayload:
    return ComposeIntentPayload(
        text=params.get("text"),
        images=parse_image_uris(params.get("imageUris")),
    )


def build_composer_opts(payload: ComposeIntentPayload, native: bool) -> ComposerOpts:
    """Images are withheld on platforms without native attachment support."""
    return ComposerOpts(text=payload.text, image_uris=list(payload.images) if native else None)


def open_composer(payload: ComposeIntentPayload, capabilities: AppCapabilities) -> None:
    opts = build_composer_opts(payload, capabilities.is_native())
    logger.debug("Opening composer with %s", opts.to_dict())
    capabilities.open_composer(opts)
