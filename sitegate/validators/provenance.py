"""Generated-image provenance — images must come from the required model and prompt file."""

import json
from pathlib import Path

from pydantic import ValidationError

from sitegate.config import get_config
from sitegate.schemas.common import format_validation_error
from sitegate.schemas.generated_images import GeneratedImagesManifest
from sitegate.utils.results import ErrorKind, ValidationResult

MANIFEST_NAME = "generated-images-manifest.json"


def _shown(value) -> str:
    return "missing" if value is None else str(value)


def validate_provenance(project_path: Path | str) -> ValidationResult:
    """Check the generator model and prompt source recorded in the manifest.

    Both values are compared independently, so a manifest with a wrong model
    and no prompt source reports two mismatches.
    """
    required = get_config()["provenance"]
    result = ValidationResult("provenance")
    path = Path(project_path) / MANIFEST_NAME

    if not path.exists():
        result.add(
            ErrorKind.MISSING_ARTIFACT,
            f"{MANIFEST_NAME} not found. Images must be generated by the image generator.",
        )
        return result

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        result.add(ErrorKind.PROVENANCE_MISMATCH, f"{MANIFEST_NAME} is invalid JSON: {exc}")
        return result
    except OSError as exc:
        result.add(ErrorKind.MISSING_ARTIFACT, f"{MANIFEST_NAME} could not be read: {exc}")
        return result

    if not isinstance(data, dict):
        result.add(ErrorKind.PROVENANCE_MISMATCH, f"{MANIFEST_NAME} must contain a JSON object")
        return result

    try:
        manifest = GeneratedImagesManifest.model_validate(data)
    except ValidationError as exc:
        for message in format_validation_error(exc):
            result.add(ErrorKind.PROVENANCE_MISMATCH, f"{MANIFEST_NAME} {message}")
        manifest = GeneratedImagesManifest.model_construct(
            generator_model=data.get("model"), prompt_source=data.get("promptSource")
        )

    if manifest.generator_model != required["model"]:
        result.add(
            ErrorKind.PROVENANCE_MISMATCH,
            f'Wrong image model in manifest: "{_shown(manifest.generator_model)}". '
            f'Required: "{required["model"]}". Re-generate the images.',
        )
    if manifest.prompt_source != required["prompt_source"]:
        result.add(
            ErrorKind.PROVENANCE_MISMATCH,
            f'Images not generated from {required["prompt_source"]} '
            f'(promptSource: "{_shown(manifest.prompt_source)}"). Re-generate the images.',
        )

    return result
