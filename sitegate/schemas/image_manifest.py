"""Schema for image-manifest.json (custom builder)."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ImageEntry(BaseModel):
    path: str = Field(min_length=1)
    source: str = Field(min_length=1)
    alt: Optional[str] = None


class ImageSet(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    logo: ImageEntry
    favicon: ImageEntry
    og_image: ImageEntry = Field(alias="ogImage")
    heroes: dict[str, ImageEntry]
    owner_headshot: Optional[ImageEntry] = Field(default=None, alias="ownerHeadshot")
    services: Optional[dict[str, ImageEntry]] = None
    gallery: Optional[list[ImageEntry]] = None

    @field_validator("heroes")
    @classmethod
    def _at_least_one_hero(cls, value: dict[str, ImageEntry]) -> dict[str, ImageEntry]:
        if not value:
            raise ValueError("At least one hero image required")
        return value

    def labelled_entries(self) -> list[tuple[str, ImageEntry]]:
        """Every entry paired with its manifest label, in manifest order."""
        entries = [("logo", self.logo), ("favicon", self.favicon), ("ogImage", self.og_image)]
        if self.owner_headshot:
            entries.append(("ownerHeadshot", self.owner_headshot))
        entries += [(f"heroes.{key}", entry) for key, entry in self.heroes.items()]
        entries += [(f"services.{key}", entry) for key, entry in (self.services or {}).items()]
        entries += [(f"gallery[{i}]", entry) for i, entry in enumerate(self.gallery or [])]
        return entries


class ImageManifest(BaseModel):
    images: ImageSet
