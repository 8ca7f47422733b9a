"""Tests for acgen.utils.guidance.load_guidance."""

from unittest.mock import patch


class TestLoadGuidance:
    def test_returns_rules_when_enabled(self):
        with patch("acgen.config._config", {"guidance_enabled": True}):
            from acgen.utils.guidance import load_guidance
            result = load_guidance()
            assert len(result) > 0

    def test_returns_empty_when_disabled(self):
        with patch("acgen.config._config", {"guidance_enabled": False}):
            from acgen.utils.guidance import load_guidance
            assert load_guidance() == ""

    def test_returns_empty_when_key_missing(self):
        with patch("acgen.config._config", {}):
            from acgen.utils.guidance import load_guidance
            assert load_guidance() == ""

    def test_content_contains_key_phrases(self):
        with patch("acgen.config._config", {"guidance_enabled": True}):
            from acgen.utils.guidance import load_guidance
            result = load_guidance().lower()
            assert "given/when/then" in result
            assert "user story" in result
