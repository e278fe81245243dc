"""Schema for page-registry.json (custom builder)."""

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class PageEntry(BaseModel):
    path: str
    title: str = Field(min_length=1)
    type: Literal["static", "service", "location"]

    @field_validator("path")
    @classmethod
    def _slash_delimited(cls, value: str) -> str:
        if value != "/" and not (value.startswith("/") and value.endswith("/")):
            raise ValueError(f"Page path '{value}' must start and end with '/'")
        return value


class NavItem(BaseModel):
    name: str = Field(min_length=1)
    path: str

    @field_validator("path")
    @classmethod
    def _rooted(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError(f"Navigation path '{value}' must start with '/'")
        return value


class Navigation(BaseModel):
    main: list[NavItem]


class PageRegistry(BaseModel):
    pages: list[PageEntry]
    navigation: Navigation

    @field_validator("pages")
    @classmethod
    def _has_homepage(cls, value: list[PageEntry]) -> list[PageEntry]:
        if not any(page.path == "/" for page in value):
            raise ValueError('Homepage (path: "/") is required')
        return value
