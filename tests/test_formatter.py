"""Tests for formatter: render_artifacts_text, render_patterns_json, write_export."""

import json

from acgen.learning.patterns import empty_patterns
from acgen.utils.formatter import render_artifacts_text, render_patterns_json, write_export


class TestRenderArtifactsText:
    def test_single_artifact_layout(self, base_artifact):
        text = render_artifacts_text([base_artifact])
        assert text == (
            "Feature Area: Login\n"
            "Priority: Medium\n"
            "\n"
            "User Story:\n"
            "As a user, I want to log in\n"
            "\n"
            "Acceptance Criteria:\n"
            "1. a\n"
            "2. b\n"
            "\n"
            + "=" * 50 + "\n"
            "\n"
        )

    def test_preserves_criteria_order(self, base_artifact):
        base_artifact["criteria"] = ["third", "first", "second"]
        text = render_artifacts_text([base_artifact])
        assert text.index("1. third") < text.index("2. first") < text.index("3. second")

    def test_multiple_artifacts_in_order(self, base_artifact):
        other = {**base_artifact, "id": 2, "feature_area": "Logout"}
        text = render_artifacts_text([base_artifact, other])
        assert text.index("Feature Area: Login") < text.index("Feature Area: Logout")
        assert text.count("=" * 50) == 2

    def test_empty_list(self):
        assert render_artifacts_text([]) == ""


class TestRenderPatternsJson:
    def test_round_trips(self):
        assert json.loads(render_patterns_json(empty_patterns())) == empty_patterns()


class TestWriteExport:
    def test_writes_into_output_dir(self, mock_config, tmp_path):
        path = write_export("hello", "acceptance-criteria")

        assert path.parent == tmp_path / "output"
        assert path.name.startswith("acceptance-criteria-")
        assert path.suffix == ".txt"
        assert path.read_text(encoding="utf-8") == "hello"

    def test_no_overwrite(self, mock_config):
        first = write_export("one", "ac-learning", suffix=".json")
        second = write_export("two", "ac-learning", suffix=".json")

        assert first != second
        assert first.read_text(encoding="utf-8") == "one"
        assert second.read_text(encoding="utf-8") == "two"
