"""Prebuild state — passed through the orchestration graph."""

from typing import Literal, Optional, TypedDict


class PrebuildState(TypedDict):
    project_path: str  # Project under validation. Immutable after init.
    builder_type: Optional[str]  # Set once build-state.json has loaded.
    fatal_error: Optional[str]  # Missing/invalid state or unmet gate. Ends the run.
    errors: list[str]  # Aggregated "<artifact>: <message>" lines, in check order.
    notes: list[str]  # Human-readable record of checks that passed or were skipped.
    status: Literal["checking", "passed", "failed"]
