"""Site config validators for src/site.config.ts.

``validate_site_config`` is the prebuild check: no template placeholders may
remain. ``validate_site_config_schema`` is stricter and guards completion of
the content phase: no template defaults, and the exported ``site`` object must
match the SiteConfig schema.
"""

import json
import re
from pathlib import Path

from pydantic import ValidationError

from sitegate.config import get_config
from sitegate.schemas.common import format_validation_error
from sitegate.schemas.site_config import SiteConfig
from sitegate.utils.results import ErrorKind, ValidationResult

SITE_CONFIG = Path("src") / "site.config.ts"

_SLUG_RE = re.compile(r"""slug:\s*["']([^"']+)["']""")
_EXPORT_RE = re.compile(
    r"export\s+const\s+\w+\s*:\s*SiteConfig\s*=\s*(\{.*\})\s*;?\s*$", re.MULTILINE | re.DOTALL
)
_BARE_KEY_RE = re.compile(r"(\s)([a-zA-Z_$][a-zA-Z0-9_$]*)(\s*:)")
_TRAILING_COMMA_RE = re.compile(r",(\s*[}\]])")


def read_site_config(project_path: Path | str) -> str | None:
    """Return the raw site config source, or None if it is absent or unreadable."""
    path = Path(project_path) / SITE_CONFIG
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def extract_string_field(content: str, field: str) -> str | None:
    """Pull ``field: "value"`` out of the TypeScript config source."""
    match = re.search(rf"""{field}:\s*["']([^"']+)["']""", content)
    return match.group(1) if match else None


def extract_service_slugs(content: str) -> list[str]:
    return _SLUG_RE.findall(content)


def extract_site_object(content: str) -> dict | None:
    """Best-effort conversion of the exported SiteConfig literal to a dict.

    Handles bare keys, single quotes and trailing commas. Returns None for
    literals that use template strings, expressions or comments.
    """
    match = _EXPORT_RE.search(content)
    if not match:
        return None
    text = _BARE_KEY_RE.sub(r'\1"\2"\3', match.group(1))
    text = _TRAILING_COMMA_RE.sub(r"\1", text.replace("'", '"'))
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def validate_site_config(project_path: Path | str) -> ValidationResult:
    result = ValidationResult("site.config.ts")
    content = read_site_config(project_path)
    if content is None:
        result.add(ErrorKind.MISSING_ARTIFACT, f"{SITE_CONFIG.as_posix()} does not exist")
        return result

    for token in get_config()["placeholders"]:
        if token in content:
            result.add(ErrorKind.PLACEHOLDER_FOUND, f'site.config.ts contains placeholder: "{token}"')

    return result


def validate_site_config_schema(project_path: Path | str) -> ValidationResult:
    result = ValidationResult("site.config.ts")
    content = read_site_config(project_path)
    if content is None:
        result.add(ErrorKind.MISSING_ARTIFACT, f"{SITE_CONFIG.as_posix()} does not exist")
        return result

    for default in get_config()["template_defaults"]:
        if default in content:
            result.add(ErrorKind.PLACEHOLDER_FOUND, f'Template default still present: "{default}"')

    if not _EXPORT_RE.search(content):
        result.add(ErrorKind.MISSING_ARTIFACT, "Could not extract SiteConfig object from site.config.ts")
        return result

    data = extract_site_object(content)
    if data is None:
        # Literal too complex to convert; the string-level checks above still apply
        return result

    try:
        SiteConfig.model_validate(data)
    except ValidationError as exc:
        for message in format_validation_error(exc):
            result.add(ErrorKind.MISSING_ARTIFACT, message)

    return result
