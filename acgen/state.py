"""Record shapes shared across the engine, plus the generation graph state."""

from typing import Literal, TypedDict

Priority = Literal["High", "Medium", "Low"]
Provider = Literal["primary", "secondary"]

PRIORITIES: tuple[str, ...] = ("High", "Medium", "Low")
PROVIDERS: tuple[str, ...] = ("primary", "secondary")


class Document(TypedDict, total=False):
    id: str
    title: str
    body: str  # Opaque text. Never parsed beyond tokenization.
    source_kind: str  # manual | text | web-link | <mime type>
    size_bytes: int | None
    added_at: str  # ISO-8601 UTC
    url: str  # Only set for web-link stubs.


class Artifact(TypedDict):
    id: int | str
    feature_area: str
    user_story: str
    criteria: list[str]  # Order is meaningful (numbered on export).
    priority: Priority


class LengthChange(TypedDict):
    before: int
    after: int
    delta: int


class EditDiff(TypedDict):
    timestamp: str
    original: Artifact
    edited: Artifact
    term_changes: dict | None  # {"removed": [...], "added": [...]} or None
    length_changes: dict[str, LengthChange]  # feature_area, user_story, criteria_avg
    structural_changes: list[dict]  # {"kind", "from", "to"}


class StyleProfile(TypedDict):
    preferred_terms: dict[str, int]  # Insertion order = first-registered order.
    avg_length: dict[str, int]  # feature_area, user_story, criteria
    priority_distribution: dict[str, int]  # High, Medium, Low


class LearnedPatterns(TypedDict):
    edits: list[EditDiff]  # Bounded, oldest first.
    profile: StyleProfile  # Always the fold of `edits`.


class GenerationState(TypedDict):
    query: str  # Validated user request. Immutable after init.
    corpus: list[Document]
    retrieval_enabled: bool
    learned: LearnedPatterns
    provider: Provider | None  # None = deterministic fallback.
    retrieved: list[tuple[Document, float]]
    prompt: str
    raw_response: str
    artifacts: list[Artifact]
    mode: Literal["pending", "generated", "fallback"]
