"""Shared fixtures for the acceptance-criteria engine test suite."""

import pytest
from unittest.mock import patch


@pytest.fixture
def base_artifact():
    """Minimal valid Artifact."""
    return {
        "id": 1,
        "feature_area": "Login",
        "user_story": "As a user, I want to log in",
        "criteria": ["a", "b"],
        "priority": "Medium",
    }


@pytest.fixture
def login_corpus():
    """Three documents in insertion order."""
    return [
        {"id": "d1", "title": "Login", "body": "user login password reset flow"},
        {"id": "d2", "title": "Billing", "body": "invoice payment card refund"},
        {"id": "d3", "title": "Profile", "body": "user profile avatar settings"},
    ]


@pytest.fixture
def valid_wire_response():
    """Generator response using the camelCase wire keys."""
    return [
        {
            "id": 1,
            "featureArea": "Password Reset",
            "userStory": "As a user, I want to reset my password",
            "criteria": [
                "Given a registered email, when I request a reset, then a link is sent",
                "The reset link expires after 30 minutes",
            ],
            "priority": "High",
        }
    ]


@pytest.fixture
def mock_config(tmp_path):
    """Patch the config singleton with test-friendly values."""
    test_config = {
        "primary_model": "gemini-2.0-flash",
        "secondary_model": "claude-sonnet-4-6",
        "temperature": 0.7,
        "default_provider": "none",
        "retrieval_enabled": False,
        "retrieval_top_k": 3,
        "retrieval_min_score": 0.05,
        "context_char_limit": 2000,
        "max_document_chars": 10000,
        "history_limit": 20,
        "preferred_terms_in_prompt": 10,
        "guidance_enabled": False,
        "data_dir": str(tmp_path / "data"),
        "output_dir": str(tmp_path / "output"),
    }
    with patch("acgen.config._config", test_config):
        yield test_config
