"""Input validation for requests, document fields and artifact records."""

from acgen.errors import ValidationError
from acgen.state import PRIORITIES, Artifact

REQUIRED_ARTIFACT_FIELDS = ("id", "feature_area", "user_story", "criteria", "priority")


def validate_input(request: str) -> str:
    """Validate that the generation request is a non-empty string.

    Returns the stripped input on success.
    Raises ValidationError if input is empty or whitespace-only.
    """
    if not isinstance(request, str) or not request.strip():
        raise ValidationError("Request must be a non-empty string.")
    return request.strip()


def validate_document_fields(title: str, body: str) -> tuple[str, str]:
    """Check a document's title and body are non-empty after trimming.

    Returns the stripped title and the body unchanged (bodies are opaque).
    """
    if not isinstance(title, str) or not title.strip():
        raise ValidationError("Document title must be a non-empty string.")
    if not isinstance(body, str) or not body.strip():
        raise ValidationError("Document body must be a non-empty string.")
    return title.strip(), body


def validate_artifact(artifact: dict, index: int | None = None) -> Artifact:
    """Validate an artifact record in place and return it.

    Requires every field, an int/str id, string feature area and user story,
    a list of string criteria and a priority of High, Medium or Low.
    Nothing is coerced: any mismatch raises ValidationError.
    """
    label = "Artifact" if index is None else f"Artifact {index}"
    if not isinstance(artifact, dict):
        raise ValidationError(f"{label} must be an object, got {type(artifact).__name__}.")

    missing = [f for f in REQUIRED_ARTIFACT_FIELDS if f not in artifact]
    if missing:
        raise ValidationError(f"{label} missing required fields: {missing}")

    if isinstance(artifact["id"], bool) or not isinstance(artifact["id"], (int, str)):
        raise ValidationError(f"{label} has invalid id {artifact['id']!r}.")
    for field in ("feature_area", "user_story"):
        if not isinstance(artifact[field], str):
            raise ValidationError(f"{label} field '{field}' must be a string.")

    criteria = artifact["criteria"]
    if not isinstance(criteria, list) or not all(isinstance(c, str) for c in criteria):
        raise ValidationError(f"{label} field 'criteria' must be a list of strings.")

    if artifact["priority"] not in PRIORITIES:
        raise ValidationError(
            f"{label} has invalid priority {artifact['priority']!r}. "
            f"Must be one of: {', '.join(PRIORITIES)}"
        )
    return artifact
