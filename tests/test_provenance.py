"""Tests for sitegate.validators.provenance."""

import json

from sitegate.utils.results import ErrorKind
from sitegate.validators.provenance import validate_provenance

from conftest import write


def _manifest(project, **fields):
    data = {"model": "fal-ai/nano-banana-pro", "promptSource": "IMAGE-PROMPTS.md", **fields}
    write(project / "generated-images-manifest.json", json.dumps(data))


class TestProvenance:
    def test_matching_manifest(self, tmp_path):
        _manifest(tmp_path)
        assert validate_provenance(tmp_path).valid

    def test_wrong_model_single_error_names_both(self, tmp_path):
        _manifest(tmp_path, model="wrong-model")
        result = validate_provenance(tmp_path)
        assert len(result.issues) == 1
        assert result.issues[0].kind == ErrorKind.PROVENANCE_MISMATCH
        assert '"wrong-model"' in result.errors[0]
        assert '"fal-ai/nano-banana-pro"' in result.errors[0]

    def test_wrong_prompt_source(self, tmp_path):
        _manifest(tmp_path, promptSource="hand-written")
        result = validate_provenance(tmp_path)
        assert len(result.errors) == 1
        assert "hand-written" in result.errors[0]
        assert "IMAGE-PROMPTS.md" in result.errors[0]

    def test_both_mismatches_reported(self, tmp_path):
        _manifest(tmp_path, model="sdxl", promptSource="inline")
        assert len(validate_provenance(tmp_path).errors) == 2

    def test_missing_prompt_source_shown_as_missing(self, tmp_path):
        write(tmp_path / "generated-images-manifest.json", json.dumps({"model": "fal-ai/nano-banana-pro"}))
        result = validate_provenance(tmp_path)
        assert len(result.errors) == 1
        assert '(promptSource: "missing")' in result.errors[0]

    def test_wrong_model_still_reported_without_prompt_source(self, tmp_path):
        write(tmp_path / "generated-images-manifest.json", json.dumps({"model": "wrong-model"}))
        errors = validate_provenance(tmp_path).errors
        assert len(errors) == 2
        assert '"wrong-model"' in errors[0]
        assert '(promptSource: "missing")' in errors[1]

    def test_missing_model_shown_as_missing(self, tmp_path):
        write(tmp_path / "generated-images-manifest.json", json.dumps({"promptSource": "IMAGE-PROMPTS.md"}))
        assert validate_provenance(tmp_path).errors == [
            'Wrong image model in manifest: "missing". Required: "fal-ai/nano-banana-pro". '
            "Re-generate the images."
        ]

    def test_non_string_model_compared(self, tmp_path):
        _manifest(tmp_path, model=3)
        result = validate_provenance(tmp_path)
        assert len(result.errors) == 1
        assert 'Wrong image model in manifest: "3"' in result.errors[0]

    def test_bad_images_list_does_not_hide_mismatch(self, tmp_path):
        _manifest(tmp_path, model="sdxl", images="home-hero/photo.jpg")
        errors = validate_provenance(tmp_path).errors
        assert any(e.startswith("generated-images-manifest.json images:") for e in errors)
        assert any('"sdxl"' in e for e in errors)

    def test_non_object_manifest(self, tmp_path):
        write(tmp_path / "generated-images-manifest.json", json.dumps(["fal-ai/nano-banana-pro"]))
        assert "must contain a JSON object" in validate_provenance(tmp_path).errors[0]

    def test_missing_manifest(self, tmp_path):
        result = validate_provenance(tmp_path)
        assert result.issues[0].kind == ErrorKind.MISSING_ARTIFACT
        assert "not found" in result.errors[0]

    def test_invalid_json(self, tmp_path):
        write(tmp_path / "generated-images-manifest.json", "model: x")
        assert "invalid JSON" in validate_provenance(tmp_path).errors[0]
