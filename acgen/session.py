"""Session: owns the knowledge base, artifact list and learned patterns.

Every user-facing operation goes through a Session. Operations validate
first and only then replace state, so a failure never leaves a partial
update behind. When a Store is attached, each successful mutation is
written through to it.
"""

import copy
import sys

from acgen.config import get_config
from acgen.errors import GenerationInProgressError, ValidationError
from acgen.graph import run_generation
from acgen.learning.edit_analyzer import analyze_edit
from acgen.learning.patterns import empty_patterns, reset_patterns, update_patterns
from acgen.state import PROVIDERS, Artifact, Document, EditDiff, LearnedPatterns
from acgen.utils import artifacts as artifact_ops
from acgen.utils.corpus import new_document, new_web_link, remove_document
from acgen.utils.formatter import render_artifacts_text, render_patterns_json
from acgen.utils.store import Store
from acgen.utils.validator import validate_input


class Session:
    def __init__(
        self,
        store: Store | None = None,
        provider: str | None = None,
        retrieval_enabled: bool | None = None,
    ):
        config = get_config()
        self.store = store
        self.provider = None
        self.set_provider(provider if provider is not None else config.get("default_provider"))
        self.retrieval_enabled = (
            retrieval_enabled if retrieval_enabled is not None
            else config.get("retrieval_enabled", False)
        )

        if store is not None:
            self.learned, self.corpus, self.artifacts = store.load()
        else:
            self.learned: LearnedPatterns = empty_patterns()
            self.corpus: list[Document] = []
            self.artifacts: list[Artifact] = []

        self.in_flight = False
        self._editing: Artifact | None = None

    # --- settings ---

    def set_provider(self, provider: str | None) -> None:
        """Select the generator; None or "none" uses the template fallback."""
        if provider in (None, "", "none"):
            self.provider = None
            return
        if provider not in PROVIDERS:
            raise ValidationError(f"Unknown provider '{provider}'. Must be one of: {PROVIDERS}")
        self.provider = provider

    def toggle_retrieval(self, enabled: bool | None = None) -> bool:
        self.retrieval_enabled = (not self.retrieval_enabled) if enabled is None else enabled
        return self.retrieval_enabled

    # --- knowledge base ---

    def add_document(
        self,
        title: str,
        body: str,
        source_kind: str = "manual",
        size_bytes: int | None = None,
    ) -> Document:
        doc = new_document(title, body, source_kind=source_kind, size_bytes=size_bytes)
        self.corpus = self.corpus + [doc]
        self._save_corpus()
        return doc

    def add_web_link(self, url: str) -> Document:
        doc = new_web_link(url)
        self.corpus = self.corpus + [doc]
        self._save_corpus()
        return doc

    def delete_document(self, doc_id: str) -> None:
        self.corpus = remove_document(self.corpus, doc_id)
        self._save_corpus()

    # --- generation ---

    def generate(self, request: str) -> list[Artifact]:
        """Generate artifacts for a request and replace the current list.

        Single-flight: raises GenerationInProgressError if a generation is
        already outstanding on this session. On any failure the previous
        artifact list is kept.
        """
        if self.in_flight:
            raise GenerationInProgressError("A generation is already in progress.")
        query = validate_input(request)

        self.in_flight = True
        try:
            result = run_generation(
                query,
                self.corpus,
                self.learned,
                provider=self.provider,
                retrieval_enabled=self.retrieval_enabled,
            )
        finally:
            self.in_flight = False

        self.artifacts = result["artifacts"]
        self._save_artifacts()
        print(
            f"[ACG] {len(self.artifacts)} artifact(s) ready ({result['mode']} mode).",
            file=sys.stderr,
        )
        return self.artifacts

    # --- edit workflow ---

    def begin_edit(self, artifact_id) -> Artifact:
        """Snapshot the artifact and return a working copy for the caller to edit."""
        original = artifact_ops.find_artifact(self.artifacts, artifact_id)
        self._editing = copy.deepcopy(original)
        return copy.deepcopy(original)

    def cancel_edit(self) -> None:
        self._editing = None

    def save_edit(self, edited: Artifact) -> EditDiff:
        """Commit an edit: diff it, update learned patterns, replace the artifact."""
        if self._editing is None:
            raise ValidationError("No edit in progress.")
        original = self._editing
        if edited.get("id") != original["id"]:
            raise ValidationError("Edited artifact id does not match the artifact being edited.")

        diff = analyze_edit(original, edited)
        artifacts = artifact_ops.replace_artifact(self.artifacts, copy.deepcopy(edited))
        edits, profile = update_patterns(self.learned["edits"], diff)

        self.artifacts = artifacts
        self.learned = {"edits": edits, "profile": profile}
        self._editing = None
        self._save_artifacts()
        self._save_learning()
        return diff

    @property
    def editing(self) -> bool:
        return self._editing is not None

    # --- artifact list ---

    def delete_artifact(self, artifact_id) -> None:
        self.artifacts = artifact_ops.delete_artifact(self.artifacts, artifact_id)
        self._save_artifacts()

    def duplicate_artifact(self, artifact_id) -> Artifact:
        self.artifacts = artifact_ops.duplicate_artifact(self.artifacts, artifact_id)
        self._save_artifacts()
        return self.artifacts[-1]

    def export_artifacts(self) -> str:
        return render_artifacts_text(self.artifacts)

    # --- learned patterns ---

    def export_patterns(self) -> str:
        return render_patterns_json(self.learned)

    def reset_patterns(self) -> None:
        edits, profile = reset_patterns()
        self.learned = {"edits": edits, "profile": profile}
        self._save_learning()

    # --- persistence ---

    def _save_corpus(self) -> None:
        if self.store is not None:
            self.store.save_corpus(self.corpus)

    def _save_artifacts(self) -> None:
        if self.store is not None:
            self.store.save_artifacts(self.artifacts)

    def _save_learning(self) -> None:
        if self.store is not None:
            self.store.save_learning(self.learned)
