"""JSON persistence for the three session records.

Records are independent: a missing file yields that record's empty default,
and a corrupt one is reported and replaced by its default without touching
the other two.
"""

import json
import sys
from pathlib import Path

from acgen.errors import PersistenceLoadError, ValidationError
from acgen.learning.patterns import DEFAULT_HISTORY_LIMIT, build_profile, empty_patterns
from acgen.state import Artifact, Document, LearnedPatterns
from acgen.utils.validator import validate_artifact

LEARNING_FILE = "learning.json"
KNOWLEDGE_BASE_FILE = "knowledge_base.json"
ARTIFACTS_FILE = "artifacts.json"


class Store:
    """Reads and writes session records under a data directory."""

    def __init__(self, data_dir: Path | str | None = None):
        if data_dir is None:
            from acgen.config import get_config, project_path

            data_dir = project_path(get_config().get("data_dir", "./data"))
        self.data_dir = Path(data_dir)

    def _path(self, name: str) -> Path:
        return self.data_dir / name

    def _read(self, name: str):
        """Return the decoded record, or None if it has never been written."""
        path = self._path(name)
        if not path.exists():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise PersistenceLoadError(name, str(exc)) from exc

    def _write(self, name: str, data) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._path(name).write_text(json.dumps(data, indent=2), encoding="utf-8")

    # --- learned patterns ---

    def load_learning(self) -> LearnedPatterns:
        data = self._read(LEARNING_FILE)
        if data is None:
            return empty_patterns()
        edits = data.get("edits") if isinstance(data, dict) else None
        if not isinstance(edits, list):
            raise PersistenceLoadError(LEARNING_FILE, "missing 'edits' list")

        from acgen.config import get_config

        limit = get_config().get("history_limit", DEFAULT_HISTORY_LIMIT)
        # Keep only the newest entries a live session would have retained
        edits = edits[-limit:] if limit > 0 else []
        try:
            # The profile is derived state: rebuild it rather than trust the file
            profile = build_profile(edits)
        except (AttributeError, KeyError, TypeError) as exc:
            raise PersistenceLoadError(LEARNING_FILE, f"malformed edit record: {exc!r}") from exc
        return {"edits": edits, "profile": profile}

    def save_learning(self, learned: LearnedPatterns) -> None:
        self._write(LEARNING_FILE, learned)

    # --- knowledge base ---

    def load_corpus(self) -> list[Document]:
        data = self._read(KNOWLEDGE_BASE_FILE)
        if data is None:
            return []
        if not isinstance(data, list) or not all(
            isinstance(d, dict)
            and {"id", "title", "body"} <= d.keys()
            and isinstance(d["body"], str)
            for d in data
        ):
            raise PersistenceLoadError(KNOWLEDGE_BASE_FILE, "expected a list of documents")
        return data

    def save_corpus(self, corpus: list[Document]) -> None:
        self._write(KNOWLEDGE_BASE_FILE, corpus)

    # --- artifacts ---

    def load_artifacts(self) -> list[Artifact]:
        data = self._read(ARTIFACTS_FILE)
        if data is None:
            return []
        if not isinstance(data, list):
            raise PersistenceLoadError(ARTIFACTS_FILE, "expected a list of artifacts")
        try:
            return [validate_artifact(a, i) for i, a in enumerate(data)]
        except ValidationError as exc:
            raise PersistenceLoadError(ARTIFACTS_FILE, str(exc)) from exc

    def save_artifacts(self, artifacts: list[Artifact]) -> None:
        self._write(ARTIFACTS_FILE, artifacts)

    def load(self) -> tuple[LearnedPatterns, list[Document], list[Artifact]]:
        """Load all three records, isolating failures per record."""
        loaders = (
            (self.load_learning, empty_patterns),
            (self.load_corpus, list),
            (self.load_artifacts, list),
        )
        results = []
        for loader, default in loaders:
            try:
                results.append(loader())
            except PersistenceLoadError as exc:
                print(f"[ACG] Warning: {exc}. Starting with an empty record.", file=sys.stderr)
                results.append(default())
        learned, corpus, artifacts = results
        return learned, corpus, artifacts
