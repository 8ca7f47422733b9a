"""Tests for acgen.utils.store.Store: defaults, round trips, per-record isolation."""

import json

import pytest

from acgen.errors import PersistenceLoadError
from acgen.learning.edit_analyzer import analyze_edit
from acgen.learning.patterns import empty_patterns, update_patterns
from acgen.utils.store import ARTIFACTS_FILE, KNOWLEDGE_BASE_FILE, LEARNING_FILE, Store


@pytest.fixture
def store(tmp_path):
    return Store(tmp_path / "data")


def _write(store, name, text):
    store.data_dir.mkdir(parents=True, exist_ok=True)
    (store.data_dir / name).write_text(text, encoding="utf-8")


class TestDefaults:
    def test_missing_records_use_defaults(self, store):
        learned, corpus, artifacts = store.load()
        assert learned == empty_patterns()
        assert corpus == []
        assert artifacts == []

    def test_default_dir_from_config(self, mock_config):
        assert str(Store().data_dir) == mock_config["data_dir"]


class TestRoundTrip:
    def test_learning(self, mock_config, store, base_artifact):
        diff = analyze_edit(base_artifact, {**base_artifact, "feature_area": "Login Flow", "priority": "High"})
        edits, profile = update_patterns([], diff)
        store.save_learning({"edits": edits, "profile": profile})

        assert store.load_learning() == {"edits": edits, "profile": profile}

    def test_profile_rebuilt_from_edits(self, mock_config, store, base_artifact):
        diff = analyze_edit(base_artifact, {**base_artifact, "priority": "Low"})
        edits, profile = update_patterns([], diff)
        tampered = json.loads(json.dumps(profile))
        tampered["priority_distribution"]["High"] = 99
        store.save_learning({"edits": edits, "profile": tampered})

        assert store.load_learning()["profile"] == profile

    def test_corpus_and_artifacts(self, store, base_artifact):
        corpus = [{"id": "d1", "title": "Login", "body": "text", "source_kind": "manual"}]
        store.save_corpus(corpus)
        store.save_artifacts([base_artifact])

        assert store.load_corpus() == corpus
        assert store.load_artifacts() == [base_artifact]


class TestCorruption:
    def test_invalid_json_raises_load_error(self, store):
        _write(store, LEARNING_FILE, "{not json")
        with pytest.raises(PersistenceLoadError) as exc_info:
            store.load_learning()
        assert exc_info.value.record == LEARNING_FILE

    def test_malformed_edit_record(self, store):
        _write(store, LEARNING_FILE, json.dumps({"edits": [{"edited": {}}]}))
        with pytest.raises(PersistenceLoadError):
            store.load_learning()

    def test_corpus_wrong_shape(self, store):
        _write(store, KNOWLEDGE_BASE_FILE, json.dumps({"docs": []}))
        with pytest.raises(PersistenceLoadError):
            store.load_corpus()

    def test_artifact_missing_field(self, store):
        _write(store, ARTIFACTS_FILE, json.dumps([{"id": 1}]))
        with pytest.raises(PersistenceLoadError):
            store.load_artifacts()

    def test_one_corrupt_record_does_not_block_others(self, store, base_artifact, capsys):
        corpus = [{"id": "d1", "title": "Login", "body": "text"}]
        store.save_corpus(corpus)
        store.save_artifacts([base_artifact])
        _write(store, LEARNING_FILE, "garbage")

        learned, loaded_corpus, artifacts = store.load()

        assert learned == empty_patterns()
        assert loaded_corpus == corpus
        assert artifacts == [base_artifact]
        assert "learning.json" in capsys.readouterr().err


class TestHistoryBound:
    def test_oversized_history_trimmed_on_load(self, mock_config, store, base_artifact):
        diffs = [
            analyze_edit(base_artifact, {**base_artifact, "priority": "High"})
            for _ in range(20)
        ]
        diffs += [
            analyze_edit(base_artifact, {**base_artifact, "priority": "Low"})
            for _ in range(5)
        ]
        store.save_learning({"edits": diffs, "profile": {}})

        learned = store.load_learning()

        assert len(learned["edits"]) == 20
        assert learned["edits"] == diffs[-20:]
        assert learned["profile"]["priority_distribution"] == {"High": 15, "Medium": 0, "Low": 5}


class TestCorpusShape:
    def test_non_string_body_rejected(self, store):
        _write(store, KNOWLEDGE_BASE_FILE, json.dumps([{"id": "d1", "title": "Login", "body": 42}]))
        with pytest.raises(PersistenceLoadError):
            store.load_corpus()
