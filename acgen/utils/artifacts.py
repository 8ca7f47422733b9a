"""Artifact list operations: find, replace, delete, duplicate."""

import copy
import uuid

from acgen.errors import ValidationError
from acgen.state import Artifact
from acgen.utils.validator import validate_artifact


def find_artifact(artifacts: list[Artifact], artifact_id) -> Artifact:
    for artifact in artifacts:
        if artifact["id"] == artifact_id:
            return artifact
    raise ValidationError(f"No artifact with id {artifact_id!r}.")


def replace_artifact(artifacts: list[Artifact], edited: Artifact) -> list[Artifact]:
    """Return a new list with the artifact sharing edited's id swapped in place."""
    validate_artifact(edited)
    find_artifact(artifacts, edited["id"])
    return [edited if a["id"] == edited["id"] else a for a in artifacts]


def delete_artifact(artifacts: list[Artifact], artifact_id) -> list[Artifact]:
    find_artifact(artifacts, artifact_id)
    return [a for a in artifacts if a["id"] != artifact_id]


def duplicate_artifact(artifacts: list[Artifact], artifact_id) -> list[Artifact]:
    """Append a copy with a fresh id and " (Copy)" added to the feature area."""
    source = find_artifact(artifacts, artifact_id)
    clone = copy.deepcopy(source)
    clone["id"] = uuid.uuid4().hex[:12]
    clone["feature_area"] = f"{source['feature_area']} (Copy)"
    return artifacts + [clone]
