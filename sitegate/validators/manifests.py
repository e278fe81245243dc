"""Structural validators for the custom builder's JSON manifests and the template's images.ts."""

import json
from pathlib import Path

from pydantic import BaseModel, ValidationError

from sitegate.schemas.common import format_validation_error
from sitegate.schemas.image_manifest import ImageManifest
from sitegate.schemas.page_registry import PageRegistry
from sitegate.utils.results import ErrorKind, ValidationResult

IMAGES_TS = Path("src") / "images.ts"
GLOB_MARKER = "import.meta.glob"


def _parse_json_artifact(
    path: Path, schema: type[BaseModel], result: ValidationResult
) -> BaseModel | None:
    """Load ``path`` and validate it against ``schema``, recording issues on failure."""
    if not path.exists():
        result.add(ErrorKind.MISSING_ARTIFACT, f"{path.name} does not exist")
        return None

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        result.add(ErrorKind.MISSING_ARTIFACT, f"Invalid JSON: {exc}")
        return None
    except OSError as exc:
        result.add(ErrorKind.MISSING_ARTIFACT, f"{path.name} could not be read: {exc}")
        return None

    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        for message in format_validation_error(exc):
            result.add(ErrorKind.MISSING_ARTIFACT, message)
        return None


def validate_image_manifest(project_path: Path | str) -> ValidationResult:
    """Check image-manifest.json structure, then that every referenced file exists."""
    project = Path(project_path)
    result = ValidationResult("image-manifest")
    manifest = _parse_json_artifact(project / "image-manifest.json", ImageManifest, result)
    if manifest is None:
        return result

    for label, entry in manifest.images.labelled_entries():
        if not (project / entry.path).exists():
            result.add(ErrorKind.MISSING_ASSET, f"{label}: file missing at {entry.path}")

    return result


def validate_page_registry(project_path: Path | str) -> ValidationResult:
    result = ValidationResult("page-registry")
    _parse_json_artifact(Path(project_path) / "page-registry.json", PageRegistry, result)
    return result


def validate_images_ts(project_path: Path | str) -> ValidationResult:
    """The image registry must discover files by folder convention, not hardcoded imports."""
    result = ValidationResult("images.ts")
    path = Path(project_path) / IMAGES_TS
    if not path.exists():
        result.add(ErrorKind.MISSING_ARTIFACT, f"{IMAGES_TS.as_posix()} does not exist")
        return result

    try:
        content = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        result.add(ErrorKind.MISSING_ARTIFACT, f"{IMAGES_TS.as_posix()} could not be read: {exc}")
        return result

    if GLOB_MARKER not in content:
        result.add(
            ErrorKind.MISSING_ARTIFACT,
            f"{IMAGES_TS.as_posix()} does not use {GLOB_MARKER}() — it must use "
            "glob-based discovery, no hardcoded imports",
        )
    return result
