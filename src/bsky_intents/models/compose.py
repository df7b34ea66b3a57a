"""
Compose intent models: validated payload and the composer's open options.
"""

from typing import Optional

from pydantic import BaseModel, Field


class ImageRef(BaseModel):
    """A local image reference taken from the imageUris parameter."""
    uri: str
    width: float
    height: float

    model_config = {"frozen": True}


class ComposeIntentPayload(BaseModel):
    text: Optional[str] = None
    images: list[ImageRef] = Field(default_factory=list)


class ComposerOpts(BaseModel):
    """Argument handed to the open-composer capability.

    Serializes as ``{text?, imageUris?}``; absent fields are omitted.
    """
    text: Optional[str] = None
    image_uris: Optional[list[ImageRef]] = Field(default=None, alias="imageUris")

    model_config = {"populate_by_name": True}

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)
