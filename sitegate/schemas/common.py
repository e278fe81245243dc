"""Helpers for turning pydantic validation failures into issue strings."""

from pydantic import ValidationError


def format_validation_error(exc: ValidationError) -> list[str]:
    """Render each pydantic error as ``dotted.path: message``."""
    messages = []
    for err in exc.errors():
        loc = ".".join(str(part) for part in err["loc"])
        messages.append(f"{loc}: {err['msg']}" if loc else err["msg"])
    return messages
