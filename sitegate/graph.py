"""LangGraph StateGraph for the prebuild validation run.

checking_state -> checking_context_docs -> checking_manifests -> checking_images
-> checking_provenance -> checking_fonts -> done

A missing or invalid build state, or an unmet final-phase gate, is fatal and
ends the run straight after checking_state. Every later check only adds to the
error list, so one run reports the complete set of defects.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from langgraph.graph import END, StateGraph

from sitegate import build_state
from sitegate.config import get_config
from sitegate.phase_gate import check_all_gates
from sitegate.state import PrebuildState
from sitegate.utils.build_log import BuildLog
from sitegate.utils.results import ValidationResult
from sitegate.validators.context_docs import validate_context_docs
from sitegate.validators.fonts import validate_fonts
from sitegate.validators.image_folders import validate_image_folders
from sitegate.validators.manifests import (
    validate_image_manifest,
    validate_images_ts,
    validate_page_registry,
)
from sitegate.validators.provenance import validate_provenance
from sitegate.validators.site_config import validate_site_config

LOG_SOURCE = "validate-manifests"


def _collect(state: PrebuildState, *results: ValidationResult) -> dict:
    """Fold validator results into error/note updates, prefixing each error with its artifact."""
    errors = list(state["errors"])
    notes = list(state["notes"])
    for result in results:
        if result.valid:
            notes.append(f"{result.name} valid")
        else:
            errors.extend(f"{result.name}: {message}" for message in result.errors)
    return {"errors": errors, "notes": notes}


def _skip(state: PrebuildState, log: BuildLog, check: str) -> dict:
    message = f"{check} check skipped for {state['builder_type']} builder"
    log.skip(LOG_SOURCE, message)
    return {"notes": state["notes"] + [message]}


def _checking_state(state: PrebuildState, log: BuildLog) -> dict:
    """Load build-state.json and require every phase through the final phase."""
    final_phase = get_config()["final_phase"]
    loaded = build_state.load(state["project_path"])

    if not loaded.ok:
        fatal = loaded.error
    else:
        gate = check_all_gates(loaded.state, final_phase)
        fatal = None if gate.passed else f"Phase gates not satisfied: {gate.reason}"

    if fatal:
        log.error(LOG_SOURCE, fatal)
        return {"fatal_error": fatal, "status": "failed"}

    return {
        "builder_type": loaded.state.builder_type,
        "notes": state["notes"] + [f"All phases through {final_phase} completed"],
    }


def _checking_context_docs(state: PrebuildState, log: BuildLog) -> dict:
    return _collect(state, validate_context_docs(state["project_path"]))


def _checking_manifests(state: PrebuildState, log: BuildLog) -> dict:
    project = state["project_path"]
    if state["builder_type"] == "template":
        return _collect(state, validate_site_config(project), validate_images_ts(project))
    return _collect(state, validate_image_manifest(project), validate_page_registry(project))


def _checking_images(state: PrebuildState, log: BuildLog) -> dict:
    if state["builder_type"] != "template":
        return _skip(state, log, "Image folder")
    return _collect(state, validate_image_folders(state["project_path"]))


def _checking_provenance(state: PrebuildState, log: BuildLog) -> dict:
    if state["builder_type"] != "template":
        return _skip(state, log, "Provenance")
    return _collect(state, validate_provenance(state["project_path"]))


def _checking_fonts(state: PrebuildState, log: BuildLog) -> dict:
    return _collect(state, validate_fonts(state["project_path"]))


def _done(state: PrebuildState, log: BuildLog) -> dict:
    errors = state["errors"]
    if errors:
        for error in errors:
            log.error(LOG_SOURCE, error)
        log.info(LOG_SOURCE, f"Pre-build validation FAILED with {len(errors)} errors")
        return {"status": "failed"}

    log.info(LOG_SOURCE, "Pre-build validation PASSED")
    return {"status": "passed"}


def _route_after_state(state: PrebuildState) -> str:
    """Conditional edge: a fatal state/gate failure ends the run immediately."""
    return "fatal" if state.get("fatal_error") else "continue"


_NODE_FNS = {
    "checking_state": _checking_state,
    "checking_context_docs": _checking_context_docs,
    "checking_manifests": _checking_manifests,
    "checking_images": _checking_images,
    "checking_provenance": _checking_provenance,
    "checking_fonts": _checking_fonts,
    "done": _done,
}


def _bind(node_fn, log: BuildLog):
    return lambda state: node_fn(state, log)


def build_graph(log: BuildLog):
    """Compile the prebuild graph with ``log`` bound into every node."""
    workflow = StateGraph(PrebuildState)
    for name, node_fn in _NODE_FNS.items():
        workflow.add_node(name, _bind(node_fn, log))

    workflow.set_entry_point("checking_state")
    workflow.add_conditional_edges(
        "checking_state",
        _route_after_state,
        {"fatal": END, "continue": "checking_context_docs"},
    )
    workflow.add_edge("checking_context_docs", "checking_manifests")
    workflow.add_edge("checking_manifests", "checking_images")
    workflow.add_edge("checking_images", "checking_provenance")
    workflow.add_edge("checking_provenance", "checking_fonts")
    workflow.add_edge("checking_fonts", "done")
    workflow.add_edge("done", END)

    return workflow.compile()


@dataclass
class PrebuildReport:
    status: str
    errors: list[str] = field(default_factory=list)
    notes: list[str] = field(default_factory=list)
    fatal_error: Optional[str] = None
    builder_type: Optional[str] = None

    @property
    def passed(self) -> bool:
        return self.status == "passed"

    @property
    def exit_code(self) -> int:
        return 0 if self.passed else 1


def initial_state(project_path: Path | str) -> PrebuildState:
    return {
        "project_path": str(project_path),
        "builder_type": None,
        "fatal_error": None,
        "errors": [],
        "notes": [],
        "status": "checking",
    }


def run_prebuild(project_path: Path | str, log: BuildLog | None = None) -> PrebuildReport:
    """Run every prebuild check against a project and return the aggregated report."""
    log = log or BuildLog(project_path)
    final_state = build_graph(log).invoke(initial_state(project_path))
    return PrebuildReport(
        status=final_state["status"],
        errors=final_state.get("errors", []),
        notes=final_state.get("notes", []),
        fatal_error=final_state.get("fatal_error"),
        builder_type=final_state.get("builder_type"),
    )
