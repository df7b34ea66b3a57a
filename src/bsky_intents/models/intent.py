"""
Intent models: kinds, parsed intents and pipeline states.
"""

from enum import Enum

from pydantic import BaseModel, Field


class IntentKind(str, Enum):
    COMPOSE = "compose"


class PipelineState:
    """States a single incoming link moves through."""
    IDLE = "idle"
    NORMALIZING = "normalizing"
    EXTRACTING = "extracting"
    NO_INTENT = "no_intent"        # terminal
    VALIDATING = "validating"
    DROPPED = "dropped"            # terminal, no session
    SCHEDULED = "scheduled"
    DISPATCHED = "dispatched"      # terminal


class ParsedIntent(BaseModel):
    kind: IntentKind
    raw_params: dict[str, str] = Field(default_factory=dict)

    model_config = {"frozen": True}
