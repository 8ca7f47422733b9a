"""Context Composer: builds the generation prompt and reads the answer back.

The prompt is assembled from three blocks:
- the base instruction with the user's request (always present);
- a "User Writing Style" block, only once the user has saved at least one edit,
  carrying the learned target lengths and preferred terminology;
- a "Reference Context" block, only when retrieval returned documents,
  carrying each document's title and truncated body in ranked order.

The generator is asked for a JSON array of artifacts using camelCase keys.
parse_response() maps them onto snake_case Artifact records and rejects the
whole response on the first mismatch.
"""

import json

from acgen.errors import MalformedGenerationOutput, ValidationError
from acgen.learning.patterns import top_terms
from acgen.state import Artifact, Document, StyleProfile
from acgen.utils.guidance import load_guidance
from acgen.utils.parsing import extract_json_array
from acgen.utils.validator import validate_artifact

SYSTEM_PROMPT = (
    "You are a Business Analyst expert. "
    "Return only valid JSON array of acceptance criteria objects."
)

CONTEXT_SEPARATOR = "\n\n---\n\n"

# Generator wire keys -> Artifact record keys
_WIRE_FIELDS = {
    "id": "id",
    "featureArea": "feature_area",
    "userStory": "user_story",
    "criteria": "criteria",
    "priority": "priority",
}


def _base_instruction(query: str) -> str:
    return (
        f'Generate professional acceptance criteria for: "{query}". '
        "Return valid JSON array with objects containing: "
        "id, featureArea, userStory, criteria (array), priority"
    )


def _style_block(profile: StyleProfile, term_limit: int) -> str:
    lengths = profile["avg_length"]
    lines = [
        "--- User Writing Style ---",
        f"Preferred Feature Area length: ~{lengths['feature_area']} chars",
        f"Preferred User Story length: ~{lengths['user_story']} chars",
        f"Preferred Criteria length: ~{lengths['criteria']} chars",
    ]
    terms = top_terms(profile, term_limit)
    if terms:
        lines.append(f"Preferred terminology: {', '.join(terms)}")
    return "\n".join(lines)


def _context_block(retrieved: list[tuple[Document, float]], char_limit: int) -> str:
    sources = CONTEXT_SEPARATOR.join(
        f"[Source: {doc['title']}]\n{doc['body'][:char_limit]}"
        for doc, _score in retrieved
    )
    return (
        "--- Reference Context from Knowledge Base ---\n"
        f"{sources}\n\n"
        "Use the above context to inform the acceptance criteria where relevant."
    )


def compose_prompt(
    query: str,
    profile: StyleProfile,
    retrieved: list[tuple[Document, float]],
    edit_count: int = 0,
) -> str:
    """Build the single user prompt sent to the generator.

    Args:
        query: The validated user request.
        profile: Current style profile (derived from the edit history).
        retrieved: Ranked (document, score) pairs, highest score first.
        edit_count: Number of retained edits; the style block is only added
            when it is non-zero.
    """
    from acgen.config import get_config

    config = get_config()
    parts = [_base_instruction(query)]

    if edit_count > 0:
        parts.append(_style_block(profile, config.get("preferred_terms_in_prompt", 10)))

    if retrieved:
        parts.append(_context_block(retrieved, config.get("context_char_limit", 2000)))

    return "\n\n".join(parts)


def build_messages(prompt: str) -> list[dict]:
    """Wrap the prompt with the system instruction (and guidance, if enabled)."""
    system_content = SYSTEM_PROMPT
    guidance = load_guidance()
    if guidance:
        system_content += (
            "\n\n## Acceptance Criteria Writing Guidelines\n"
            "Apply the following guidelines where they fit the request.\n\n"
            f"{guidance}"
        )
    return [
        {"role": "system", "content": system_content},
        {"role": "user", "content": prompt},
    ]


def _from_wire(item, index: int) -> Artifact:
    """Convert one decoded wire object into a validated Artifact."""
    if not isinstance(item, dict):
        raise ValidationError(f"Artifact {index} must be an object, got {type(item).__name__}.")
    missing = [key for key in _WIRE_FIELDS if key not in item]
    if missing:
        raise ValidationError(f"Artifact {index} missing required fields: {missing}")
    artifact = {record_key: item[wire_key] for wire_key, record_key in _WIRE_FIELDS.items()}
    return validate_artifact(artifact, index)


def parse_response(raw: str) -> list[Artifact]:
    """Extract and validate the artifact array from raw generator text.

    Raises MalformedGenerationOutput if no array is found, it does not
    decode, it is empty, or any element fails validation. Never returns a
    partial list.
    """
    try:
        items = extract_json_array(raw)
    except json.JSONDecodeError as exc:
        raise MalformedGenerationOutput(f"Response array is not valid JSON: {exc}") from exc
    except ValueError as exc:
        raise MalformedGenerationOutput(str(exc)) from exc

    if not items:
        raise MalformedGenerationOutput("Response array contains no artifacts.")
    try:
        return [_from_wire(item, i) for i, item in enumerate(items)]
    except ValidationError as exc:
        raise MalformedGenerationOutput(str(exc)) from exc


def fallback_generate(query: str) -> list[Artifact]:
    """Deterministic two-artifact template used when no generator is configured."""
    return [
        {
            "id": 1,
            "feature_area": "Core Functionality",
            "user_story": f"As a user, I want to {query[:40]}",
            "criteria": [
                "Given user action, when triggered, then system responds",
                "When data is valid, the system accepts the input",
                "The system displays a confirmation message",
            ],
            "priority": "High",
        },
        {
            "id": 2,
            "feature_area": "Error Handling",
            "user_story": f"Error handling for {query[:30]}",
            "criteria": [
                "When invalid data is provided, show error message",
                "When network fails, show retry option",
                "All errors are logged",
            ],
            "priority": "High",
        },
    ]
