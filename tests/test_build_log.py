"""Tests for sitegate.utils.build_log.BuildLog."""

import pytest

from sitegate.utils.build_log import BuildLog


class TestBuildLog:
    def test_first_entry_creates_header(self, tmp_path):
        log = BuildLog(tmp_path)
        assert not log.exists()
        log.info("prebuild", "started")

        content = log.path.read_text(encoding="utf-8")
        assert content.startswith("# Build Log: Unknown")
        assert "| Time | Level | Source | Message |" in content

    def test_init_uses_company_name_once(self, tmp_path):
        log = BuildLog(tmp_path)
        log.init("Acme Paving")
        log.init("Other Co")
        assert log.path.read_text(encoding="utf-8").startswith("# Build Log: Acme Paving")

    def test_entries_append_in_order(self, tmp_path):
        log = BuildLog(tmp_path)
        log.skip("populate-images", "No headshot")
        log.error("validate-manifests", "fonts: missing | file")
        log.fix("qa", "Added trailing slash")

        entries = log.entries()
        assert [e["level"] for e in entries] == ["SKIP", "ERROR", "FIX"]
        assert entries[1] == {
            "level": "ERROR",
            "source": "validate-manifests",
            "message": "fonts: missing \\| file",
        }

    def test_summary_counts(self, tmp_path):
        log = BuildLog(tmp_path)
        assert log.summary() is None
        log.warning("a", "x")
        log.warning("a", "y")
        log.info("a", "z")
        summary = log.summary()
        assert summary["WARNING"] == 2
        assert summary["INFO"] == 1
        assert summary["ERROR"] == 0

    def test_section_does_not_count_as_entry(self, tmp_path):
        log = BuildLog(tmp_path)
        log.info("a", "x")
        log.section("Summary", "| not | a | row |")
        assert len(log.entries()) == 1

    def test_invalid_level(self, tmp_path):
        with pytest.raises(ValueError):
            BuildLog(tmp_path).entry("DEBUG", "a", "x")
