"""Schema for build-state.json.

The JSON file uses camelCase keys; the models expose snake_case attributes
and serialize back with aliases.
"""

from datetime import datetime, timezone
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

PHASE_IDS = (
    "phase-0",  # Health Check
    "phase-1",  # Data Gathering
    "phase-2",  # Design Direction
    "phase-3",  # Project Scaffold
    "phase-4",  # Content / Config
    "phase-5",  # Theme & Locations
    "phase-6",  # Images / Components & Pages
)

PHASE_LABELS = {
    "phase-0": "Health Check",
    "phase-1": "Data Gathering",
    "phase-2": "Design Direction",
    "phase-3": "Project Scaffold",
    "phase-4": "Content/Config",
    "phase-5": "Theme/Locations",
    "phase-6": "Images/Components",
}

PhaseStatus = Literal["pending", "in_progress", "completed", "failed"]
BuilderType = Literal["template", "custom"]


class PhaseEntry(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    status: PhaseStatus
    completed_at: Optional[str] = Field(default=None, alias="completedAt")
    artifacts: Optional[dict[str, str]] = None
    error: Optional[str] = None


class BuildMetadata(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="allow")

    company_name: Optional[str] = Field(default=None, alias="companyName")
    niche: Optional[str] = None
    deploy_url: Optional[str] = Field(default=None, alias="deployUrl")
    repo_url: Optional[str] = Field(default=None, alias="repoUrl")
    template_version: Optional[str] = Field(default=None, alias="templateVersion")

    def merged(self, updates: dict) -> "BuildMetadata":
        """Return a copy with ``updates`` applied. Keys may be camelCase or snake_case."""
        data = self.model_dump(by_alias=True, exclude_none=True)
        for key, value in updates.items():
            field = type(self).model_fields.get(key)
            data[(field.alias or key) if field else key] = value
        return type(self).model_validate(data)


class BuildState(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    build_id: str = Field(alias="buildId", min_length=1)
    builder_type: BuilderType = Field(alias="builderType")
    started_at: str = Field(alias="startedAt")
    project_path: Optional[str] = Field(default=None, alias="projectPath")
    metadata: BuildMetadata = Field(default_factory=BuildMetadata)
    phases: dict[str, PhaseEntry]

    @field_validator("started_at")
    @classmethod
    def _iso_timestamp(cls, value: str) -> str:
        datetime.fromisoformat(value.replace("Z", "+00:00"))
        return value

    @field_validator("phases")
    @classmethod
    def _known_phases(cls, value: dict[str, PhaseEntry]) -> dict[str, PhaseEntry]:
        unknown = [pid for pid in value if pid not in PHASE_IDS]
        if unknown:
            raise ValueError(f"Unknown phase id(s): {', '.join(sorted(unknown))}")
        # Phases not yet recorded are pending
        return {pid: value.get(pid, PhaseEntry(status="pending")) for pid in PHASE_IDS}

    @property
    def completed_phases(self) -> frozenset[str]:
        return frozenset(pid for pid, entry in self.phases.items() if entry.status == "completed")

    def to_json_dict(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True)


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def create_initial_state(
    build_id: str,
    builder_type: str,
    project_path: str,
    metadata: dict | None = None,
) -> BuildState:
    """Create a fresh build state with every phase pending."""
    return BuildState.model_validate({
        "buildId": build_id,
        "builderType": builder_type,
        "startedAt": utc_now(),
        "projectPath": project_path,
        "metadata": metadata or {},
        "phases": {pid: {"status": "pending"} for pid in PHASE_IDS},
    })
