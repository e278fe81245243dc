"""Schema for generated-images-manifest.json, written by the image generator."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field


class GeneratedImagesManifest(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    # Left loose: the provenance check compares these against the required values
    generator_model: Optional[Any] = Field(default=None, alias="model")
    prompt_source: Optional[Any] = Field(default=None, alias="promptSource")
    images: list[dict[str, Any]] = Field(default_factory=list)
