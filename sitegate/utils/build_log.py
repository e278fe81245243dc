"""Build log sink — appends timestamped rows to BUILD-LOG.md in a project.

Every component that records decisions, skips or errors receives a BuildLog
instance explicitly; there is no module-level logger.
"""

import re
from datetime import datetime
from pathlib import Path

from sitegate.config import get_config

LEVELS = ("INFO", "SKIP", "MISSING", "FALLBACK", "FIX", "WARNING", "ERROR")

_ROW_RE = re.compile(r"^\| [^|]+ \| (\w+) \| ([^|]*) \| (.*) \|$")


def _timestamp() -> str:
    return datetime.now().strftime("%Y-%m-%d %H:%M:%S")


def _escape(text: str) -> str:
    """Keep a message on one table row."""
    return str(text).replace("|", "\\|").replace("\n", " ")


class BuildLog:
    """Append-only markdown log bound to a single project directory."""

    def __init__(self, project_path: Path | str, filename: str | None = None):
        self.project_path = Path(project_path)
        self.path = self.project_path / (filename or get_config()["log_file"])

    def init(self, company_name: str = "Unknown") -> None:
        """Create the log file with its header if it does not exist yet."""
        if self.path.exists():
            return
        header = (
            f"# Build Log: {company_name}\n\n"
            f"**Started:** {_timestamp()}\n\n"
            "---\n\n"
            "| Time | Level | Source | Message |\n"
            "|------|-------|--------|---------|\n"
        )
        self.path.write_text(header, encoding="utf-8")

    def exists(self) -> bool:
        return self.path.exists()

    def entry(self, level: str, source: str, message: str) -> None:
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f"Invalid level '{level}'. Must be one of: {', '.join(LEVELS)}")
        self.init()
        row = f"| {_timestamp()} | {level} | {_escape(source)} | {_escape(message)} |\n"
        with self.path.open("a", encoding="utf-8") as f:
            f.write(row)

    def info(self, source: str, message: str) -> None:
        self.entry("INFO", source, message)

    def skip(self, source: str, message: str) -> None:
        self.entry("SKIP", source, message)

    def missing(self, source: str, message: str) -> None:
        self.entry("MISSING", source, message)

    def fallback(self, source: str, message: str) -> None:
        self.entry("FALLBACK", source, message)

    def fix(self, source: str, message: str) -> None:
        self.entry("FIX", source, message)

    def warning(self, source: str, message: str) -> None:
        self.entry("WARNING", source, message)

    def error(self, source: str, message: str) -> None:
        self.entry("ERROR", source, message)

    def section(self, heading: str, content: str) -> None:
        """Append a free-form section (used at the end of a build)."""
        self.init()
        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"\n---\n\n## {heading}\n\n{content}\n")

    def entries(self) -> list[dict]:
        """Parse the table rows back into dicts of level/source/message."""
        if not self.path.exists():
            return []
        rows = []
        for line in self.path.read_text(encoding="utf-8").splitlines():
            match = _ROW_RE.match(line)
            if match and match.group(1) in LEVELS:
                rows.append({
                    "level": match.group(1),
                    "source": match.group(2).strip(),
                    "message": match.group(3).strip(),
                })
        return rows

    def summary(self) -> dict[str, int] | None:
        """Return a count per level, or None when no log exists."""
        if not self.path.exists():
            return None
        counts = {level: 0 for level in LEVELS}
        for row in self.entries():
            counts[row["level"]] += 1
        return counts
