"""Context documents the content and image phases depend on."""

from pathlib import Path

from sitegate.config import get_config
from sitegate.utils.results import ErrorKind, ValidationResult


def validate_context_docs(project_path: Path | str) -> ValidationResult:
    result = ValidationResult("context")
    for doc in get_config()["context_docs"]:
        if not (Path(project_path) / doc["name"]).is_file():
            result.add(ErrorKind.MISSING_ARTIFACT, f"{doc['name']} not found. {doc['hint']}")
    return result
