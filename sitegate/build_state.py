"""Build-State Store — reads and writes build-state.json for a project."""

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Literal, Optional

from pydantic import ValidationError

from sitegate.config import get_config
from sitegate.schemas.build_state import BuildState
from sitegate.schemas.common import format_validation_error
from sitegate.utils.results import BuildStateError


@dataclass(frozen=True)
class StateLoad:
    status: Literal["ok", "missing", "invalid"]
    state: Optional[BuildState] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.status == "ok"


def state_path(project_path: Path | str) -> Path:
    return Path(project_path) / get_config()["state_file"]


def load(project_path: Path | str) -> StateLoad:
    """Read and validate the project's build state.

    Returns a StateLoad with status "missing" when the file does not exist and
    "invalid" when it is not JSON or does not match the schema. Never raises
    for either case.
    """
    path = state_path(project_path)
    if not path.exists():
        return StateLoad("missing", error=f"{path.name} not found at {path}")

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
        return StateLoad("invalid", error=f"{path.name} is not valid JSON: {exc}")

    if not isinstance(raw, dict):
        return StateLoad("invalid", error=f"{path.name} must contain a JSON object")

    try:
        state = BuildState.model_validate(raw)
    except ValidationError as exc:
        details = "; ".join(format_validation_error(exc))
        return StateLoad("invalid", error=f"Invalid {path.name}: {details}")

    return StateLoad("ok", state=state)


def require(project_path: Path | str) -> BuildState:
    """Load the build state for a write operation, raising if it is unusable."""
    result = load(project_path)
    if not result.ok:
        raise BuildStateError(result.error)
    return result.state


def save(project_path: Path | str, state: BuildState) -> Path:
    path = state_path(project_path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(state.to_json_dict(), indent=2) + "\n", encoding="utf-8")
    return path
