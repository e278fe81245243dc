"""Font validator — every font named in the site config needs a woff2 file in public/fonts/."""

import re
from pathlib import Path

from sitegate.utils.results import ErrorKind, ValidationResult
from sitegate.validators.site_config import SITE_CONFIG, extract_string_field, read_site_config

FONT_ROLES = ("displayFont", "bodyFont", "accentFont")
FONTS_DIR = Path("public") / "fonts"


def font_slug(name: str) -> str:
    """'Barlow Condensed' -> 'barlow-condensed'."""
    return re.sub(r"[^a-z0-9]+", "-", name.lower()).strip("-")


def configured_fonts(content: str) -> list[tuple[str, str]]:
    """Return (role, font name) pairs present in the site config source."""
    fonts = []
    for role in FONT_ROLES:
        name = extract_string_field(content, role)
        if name:
            fonts.append((role, name))
    return fonts


def validate_fonts(project_path: Path | str) -> ValidationResult:
    result = ValidationResult("fonts")
    content = read_site_config(project_path)
    if content is None:
        result.add(
            ErrorKind.MISSING_ARTIFACT,
            f"{SITE_CONFIG.as_posix()} does not exist — cannot check fonts",
        )
        return result

    fonts = configured_fonts(content)
    if not fonts:
        result.add(ErrorKind.MISSING_ARTIFACT, "No displayFont or bodyFont found in site.config.ts theme")
        return result

    fonts_dir = Path(project_path) / FONTS_DIR
    if not fonts_dir.is_dir():
        result.add(ErrorKind.MISSING_ASSET, f"{FONTS_DIR.as_posix()}/ directory does not exist")
        return result

    try:
        files = [p.name for p in fonts_dir.iterdir() if p.suffix == ".woff2"]
    except OSError as exc:
        result.add(ErrorKind.MISSING_ASSET, f"Cannot read {FONTS_DIR.as_posix()}/: {exc}")
        return result
    for role, name in fonts:
        slug = font_slug(name)
        if not any(slug in filename for filename in files):
            result.add(
                ErrorKind.MISSING_ASSET,
                f'{role} "{name}" — no woff2 file found in {FONTS_DIR.as_posix()}/ matching '
                f'"{slug}". Run: sitegate-fonts --project .',
            )

    return result
