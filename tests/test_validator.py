"""Tests for acgen.utils.validator."""

import pytest

from acgen.errors import ValidationError
from acgen.utils.validator import validate_artifact, validate_document_fields, validate_input


class TestValidateInput:
    def test_valid_string_returns_stripped(self):
        assert validate_input("Password reset") == "Password reset"

    def test_leading_trailing_whitespace_stripped(self):
        assert validate_input("  some request  ") == "some request"

    def test_empty_string_raises(self):
        with pytest.raises(ValidationError):
            validate_input("")

    def test_whitespace_only_raises(self):
        with pytest.raises(ValidationError):
            validate_input("   ")

    def test_none_raises(self):
        with pytest.raises(ValidationError):
            validate_input(None)

    def test_is_a_value_error(self):
        with pytest.raises(ValueError):
            validate_input(42)


class TestValidateDocumentFields:
    def test_body_returned_untouched(self):
        assert validate_document_fields(" T ", "  body\n") == ("T", "  body\n")

    def test_non_string_body(self):
        with pytest.raises(ValidationError):
            validate_document_fields("T", None)


class TestValidateArtifact:
    def test_valid(self, base_artifact):
        assert validate_artifact(base_artifact) is base_artifact

    def test_string_id_allowed(self, base_artifact):
        base_artifact["id"] = "abc"
        validate_artifact(base_artifact)

    @pytest.mark.parametrize("field", ["id", "feature_area", "user_story", "criteria", "priority"])
    def test_missing_field(self, base_artifact, field):
        del base_artifact[field]
        with pytest.raises(ValidationError, match=field):
            validate_artifact(base_artifact)

    def test_bool_id_rejected(self, base_artifact):
        base_artifact["id"] = True
        with pytest.raises(ValidationError):
            validate_artifact(base_artifact)

    def test_non_string_criterion(self, base_artifact):
        base_artifact["criteria"] = ["ok", 3]
        with pytest.raises(ValidationError):
            validate_artifact(base_artifact)

    def test_priority_case_sensitive(self, base_artifact):
        base_artifact["priority"] = "high"
        with pytest.raises(ValidationError):
            validate_artifact(base_artifact)

    def test_index_in_message(self, base_artifact):
        base_artifact["feature_area"] = None
        with pytest.raises(ValidationError, match="Artifact 3"):
            validate_artifact(base_artifact, 3)

    def test_non_dict(self):
        with pytest.raises(ValidationError):
            validate_artifact(["not", "a", "dict"])
