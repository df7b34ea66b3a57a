"""
Settings for the intent pipeline and the ``bsky-intents`` CLI.

The CLI keeps them in ``~/.bsky-intents/config.json``; library users pass the
same values to IntentHandler directly.
"""

import json
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field, ValidationError

from bsky_intents.errors import ConfigError

CONFIG_FILE = Path.home() / ".bsky-intents" / "config.json"


class IntentSettings(BaseModel):
    scheme: str = Field(default="bluesky", min_length=1)
    delay_ms: int = Field(default=500, ge=0)
    native: bool = True
    handle: Optional[str] = None    # signed-in account; None means no session

    @property
    def delay_s(self) -> float:
        return self.delay_ms / 1000


def load_raw_config(path: Path = CONFIG_FILE) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}
    return data if isinstance(data, dict) else {}


def save_raw_config(cfg: dict[str, Any], path: Path = CONFIG_FILE) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(cfg, indent=2))


def load_settings(path: Path = CONFIG_FILE, **overrides: Any) -> IntentSettings:
    """Read settings from ``path``; non-None overrides win over the file."""
    cfg = load_raw_config(path)
    cfg.update({k: v for k, v in overrides.items() if v is not None})
    try:
        return IntentSettings.model_validate(cfg)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}", path=str(path)) from e
