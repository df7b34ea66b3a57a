"""
Error types for bsky-intents.

Not-an-intent links, malformed image entries and missing sessions are
expected outcomes and never raise. These types cover the failures that do.
"""

from typing import Any, Optional


class IntentsError(Exception):
    def __init__(self, code: str, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message)
        self.code = code
        self.details = details


class LinkParseError(IntentsError):
    """The incoming link is not a structurally valid URL."""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__("link_parse_error", message, {"url": url} if url is not None else None)
        self.url = url


class RegistryError(IntentsError):
    def __init__(self, message: str, code: str = "registry_error"):
        super().__init__(code, message)


class ConfigError(IntentsError):
    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__("config_error", message, {"path": path} if path is not None else None)
