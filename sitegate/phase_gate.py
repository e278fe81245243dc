"""Phase gates — ordered build phases and the checks that guard them.

The gate checks (``check_gate`` / ``check_all_gates``) are pure functions of a
loaded BuildState. The write operations below them are used by the earlier
build phases to record progress in build-state.json.
"""

import argparse
import sys
from pathlib import Path
from typing import Callable, Optional

from sitegate import build_state
from sitegate.config import get_config
from sitegate.schemas.build_state import (
    PHASE_IDS,
    PHASE_LABELS,
    BuildState,
    PhaseEntry,
    create_initial_state,
    utc_now,
)
from sitegate.utils.build_log import BuildLog
from sitegate.utils.results import GateResult, ValidationResult
from sitegate.validators.context_docs import validate_context_docs
from sitegate.validators.image_folders import validate_image_folders
from sitegate.validators.manifests import validate_images_ts
from sitegate.validators.provenance import validate_provenance
from sitegate.validators.site_config import (
    SITE_CONFIG,
    extract_service_slugs,
    read_site_config,
    validate_site_config_schema,
)


# --- Gate checks (pure) ---

def check_gate(state: BuildState, phase_id: str) -> GateResult:
    if phase_id not in PHASE_IDS:
        return GateResult(False, f"Unknown phase: {phase_id}")
    status = state.phases[phase_id].status
    if status != "completed":
        return GateResult(False, f'{phase_id} status is "{status}", expected "completed"')
    return GateResult(True)


def check_all_gates(state: BuildState, target_phase: str) -> GateResult:
    """Check that every phase up to and including ``target_phase`` is completed.

    The reason names the first phase, in order, that is not completed.
    """
    if target_phase not in PHASE_IDS:
        return GateResult(False, f"Unknown phase: {target_phase}")

    for phase_id in PHASE_IDS[: PHASE_IDS.index(target_phase) + 1]:
        gate = check_gate(state, phase_id)
        if not gate.passed:
            return gate
    return GateResult(True)


# --- Artifact checks run before a phase may be marked complete ---

def _first_missing(project: Path, *names) -> Optional[str]:
    for name in names:
        if not (project / name).exists():
            return f"{Path(name).as_posix()} does not exist"
    return None


def _first_error(*results: ValidationResult) -> Optional[str]:
    for result in results:
        if not result.valid:
            return result.errors[0]
    return None


def _phase_1(project: Path, builder_type: str) -> Optional[str]:
    return _first_missing(project, "client-config.json")


def _phase_3(project: Path, builder_type: str) -> Optional[str]:
    return _first_missing(
        project, SITE_CONFIG, "package.json", get_config()["log_file"], "BUSINESS-CONTEXT.md"
    )


def _phase_4(project: Path, builder_type: str) -> Optional[str]:
    if builder_type == "custom":
        return _first_missing(project, Path("src") / "content", "page-registry.json")
    problem = _first_error(validate_site_config_schema(project))
    return f"Config validation failed: {problem}" if problem else None


def _phase_5(project: Path, builder_type: str) -> Optional[str]:
    if builder_type == "custom":
        return _first_missing(project, "page-registry.json")
    return _first_missing(project, Path("src") / "styles" / "global.css")


def _phase_6(project: Path, builder_type: str) -> Optional[str]:
    if builder_type == "custom":
        return _first_missing(project, "image-manifest.json")
    content = read_site_config(project)
    slugs = extract_service_slugs(content) if content else []
    return _first_error(
        validate_images_ts(project),
        validate_image_folders(project, service_slugs=slugs),
        validate_context_docs(project),
        validate_provenance(project),
    )


ARTIFACT_CHECKS: dict[str, Callable[[Path, str], Optional[str]]] = {
    "phase-1": _phase_1,
    "phase-3": _phase_3,
    "phase-4": _phase_4,
    "phase-5": _phase_5,
    "phase-6": _phase_6,
}


def check_artifacts(project_path: Path | str, phase_id: str, builder_type: str) -> Optional[str]:
    """Return the first artifact problem for a phase, or None."""
    check = ARTIFACT_CHECKS.get(phase_id)
    return check(Path(project_path), builder_type) if check else None


# --- Write operations ---

def _require_phase(phase_id: str) -> None:
    if phase_id not in PHASE_IDS:
        raise ValueError(f"Unknown phase: {phase_id}")


def _require_no_later_completed(state: BuildState, phase_id: str, action: str) -> None:
    """A phase may only leave "completed" while no later phase is completed."""
    for later in PHASE_IDS[PHASE_IDS.index(phase_id) + 1 :]:
        if later in state.completed_phases:
            raise ValueError(f"Cannot {action} {phase_id} — later phase {later} is completed")


def init_build_state(
    project_path: Path | str,
    build_id: str,
    builder_type: str,
    metadata: dict | None = None,
    log: BuildLog | None = None,
) -> BuildState:
    state = create_initial_state(build_id, builder_type, str(project_path), metadata)
    build_state.save(project_path, state)
    if log:
        log.init(state.metadata.company_name or "Unknown")
        log.info("phase-gate", f"Initialized build {build_id} ({builder_type})")
    return state


def start_phase(project_path: Path | str, phase_id: str) -> BuildState:
    _require_phase(phase_id)
    state = build_state.require(project_path)
    _require_no_later_completed(state, phase_id, "start")
    state.phases[phase_id] = PhaseEntry(status="in_progress")
    build_state.save(project_path, state)
    return state


def complete_phase(
    project_path: Path | str,
    phase_id: str,
    artifacts: dict[str, str] | None = None,
    skip_artifact_check: bool = False,
    log: BuildLog | None = None,
) -> BuildState:
    """Mark a phase completed.

    Raises ValueError if an earlier phase is not completed, or if the phase's
    artifact check fails (unless ``skip_artifact_check`` is set).
    """
    _require_phase(phase_id)
    state = build_state.require(project_path)

    for earlier in PHASE_IDS[: PHASE_IDS.index(phase_id)]:
        if earlier not in state.completed_phases:
            raise ValueError(f"Cannot complete {phase_id} — {earlier} is not completed")

    if not skip_artifact_check:
        problem = check_artifacts(project_path, phase_id, state.builder_type)
        if problem:
            raise ValueError(f"Cannot complete {phase_id} — artifact check failed: {problem}")

    state.phases[phase_id] = PhaseEntry(
        status="completed", completed_at=utc_now(), artifacts=artifacts or {}
    )
    build_state.save(project_path, state)
    if log:
        log.info("phase-gate", f"{phase_id} ({PHASE_LABELS[phase_id]}) completed")
    return state


def fail_phase(
    project_path: Path | str,
    phase_id: str,
    error: str,
    log: BuildLog | None = None,
) -> BuildState:
    _require_phase(phase_id)
    state = build_state.require(project_path)
    _require_no_later_completed(state, phase_id, "fail")
    state.phases[phase_id] = PhaseEntry(status="failed", error=error)
    build_state.save(project_path, state)
    if log:
        log.error("phase-gate", f"{phase_id} failed: {error}")
    return state


def reset_phase(project_path: Path | str, phase_id: str) -> BuildState:
    """Reset a single phase to pending. Use reset_phases_from to cascade."""
    _require_phase(phase_id)
    state = build_state.require(project_path)
    _require_no_later_completed(state, phase_id, "reset")
    state.phases[phase_id] = PhaseEntry(status="pending")
    build_state.save(project_path, state)
    return state


def reset_phases_from(project_path: Path | str, from_phase: str) -> tuple[BuildState, list[str]]:
    """Reset ``from_phase`` and every later phase to pending."""
    _require_phase(from_phase)
    state = build_state.require(project_path)

    reset = list(PHASE_IDS[PHASE_IDS.index(from_phase) :])
    for phase_id in reset:
        state.phases[phase_id] = PhaseEntry(status="pending")
    build_state.save(project_path, state)
    return state, reset


def update_metadata(project_path: Path | str, **updates) -> BuildState:
    state = build_state.require(project_path)
    state.metadata = state.metadata.merged(updates)
    build_state.save(project_path, state)
    return state


# --- CLI ---

def format_status(state: BuildState) -> str:
    lines = [
        f"Build: {state.build_id}",
        f"Type: {state.builder_type}",
        f"Started: {state.started_at}",
        f"Company: {state.metadata.company_name or 'N/A'}",
        "",
        "Phase Status:",
    ]
    for phase_id in PHASE_IDS:
        entry = state.phases[phase_id]
        suffix = f" ({entry.completed_at})" if entry.completed_at else ""
        if entry.error:
            suffix = f" — {entry.error}"
        lines.append(f"  {phase_id:<8} {PHASE_LABELS[phase_id]:<18} {entry.status}{suffix}")
    return "\n".join(lines)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="sitegate-phase",
        description="Record and inspect build phase progress in build-state.json.",
    )
    parser.add_argument("--project", type=Path, default=Path.cwd(), help="Project directory.")
    sub = parser.add_subparsers(dest="command", required=True)

    init = sub.add_parser("init", help="Create build-state.json with every phase pending.")
    init.add_argument("--build-id", required=True)
    init.add_argument("--builder", choices=["template", "custom"], default="template")
    init.add_argument("--company")
    init.add_argument("--niche")

    for name in ("start", "complete", "reset", "reset-from", "check"):
        cmd = sub.add_parser(name)
        cmd.add_argument("phase", choices=PHASE_IDS)
        if name == "complete":
            cmd.add_argument("--skip-artifact-check", action="store_true")

    fail = sub.add_parser("fail")
    fail.add_argument("phase", choices=PHASE_IDS)
    fail.add_argument("--error", required=True)

    sub.add_parser("status")
    return parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    project = args.project
    log = BuildLog(project)

    try:
        if args.command == "init":
            metadata = {k: v for k, v in {"companyName": args.company, "niche": args.niche}.items() if v}
            init_build_state(project, args.build_id, args.builder, metadata, log=log)
            print(f"[SiteGate] Initialized {build_state.state_path(project)}")
        elif args.command == "start":
            start_phase(project, args.phase)
            print(f"[SiteGate] {args.phase} in progress")
        elif args.command == "complete":
            complete_phase(project, args.phase, skip_artifact_check=args.skip_artifact_check, log=log)
            print(f"[SiteGate] {args.phase} completed")
        elif args.command == "fail":
            fail_phase(project, args.phase, args.error, log=log)
            print(f"[SiteGate] {args.phase} marked failed")
        elif args.command == "reset":
            reset_phase(project, args.phase)
            print(f"[SiteGate] {args.phase} reset to pending")
        elif args.command == "reset-from":
            _, reset = reset_phases_from(project, args.phase)
            print(f"[SiteGate] Reset to pending: {', '.join(reset)}")
        elif args.command == "check":
            state = build_state.require(project)
            gate = check_all_gates(state, args.phase)
            if not gate.passed:
                print(f"[SiteGate] Gate failure: {gate.reason}", file=sys.stderr)
                return 1
            print(f"[SiteGate] All phases through {args.phase} completed")
        else:
            print(format_status(build_state.require(project)))
    except ValueError as exc:
        print(f"[SiteGate] {exc}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
