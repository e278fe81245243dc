"""Entry point: runs the prebuild validation and turns the report into an exit code."""

import argparse
import sys
from pathlib import Path

from sitegate.graph import PrebuildReport, run_prebuild
from sitegate.utils.build_log import BuildLog


def _print_report(report: PrebuildReport) -> None:
    if report.fatal_error:
        print(f"[SiteGate] ✗ {report.fatal_error}", file=sys.stderr)
        print(
            "[SiteGate] All phases through the final pre-build phase must be "
            "completed before building. See: sitegate-phase status",
            file=sys.stderr,
        )
        return

    for note in report.notes:
        print(f"[SiteGate] ✓ {note}")

    if report.errors:
        print(
            f"\n[SiteGate] ✗ Pre-build validation FAILED ({len(report.errors)} errors):",
            file=sys.stderr,
        )
        for error in report.errors:
            print(f"  - {error}", file=sys.stderr)
    else:
        print("\n[SiteGate] ✓ Pre-build validation PASSED — build may proceed.")


def run(project_path: Path) -> int:
    """Validate ``project_path`` and return the process exit code."""
    if not project_path.is_dir():
        print(f"[SiteGate] ✗ Project directory not found: {project_path}", file=sys.stderr)
        return 1

    print("[SiteGate] Pre-Build Validation")
    report = run_prebuild(project_path, BuildLog(project_path))
    _print_report(report)
    return report.exit_code


def main(argv: list[str] | None = None) -> None:
    """CLI entry point — ``sitegate-prebuild [--project PATH]``."""
    parser = argparse.ArgumentParser(
        prog="sitegate-prebuild",
        description="Verify build phase gates and artifacts before a site build.",
    )
    parser.add_argument(
        "--project",
        type=Path,
        default=Path.cwd(),
        help="Project directory (defaults to the current working directory).",
    )
    args = parser.parse_args(argv)
    sys.exit(run(args.project))


if __name__ == "__main__":
    main()
