"""Edit Analyzer: diffs an artifact before and after the user edited it.

The resulting EditDiff carries three kinds of signal:
- term_changes: vocabulary the user introduced and dropped (words > 3 chars);
- length_changes: character lengths of feature area, user story and the
  average criterion, before and after;
- structural_changes: criteria count and priority changes.

term_changes is only recorded when the edit both added and removed
vocabulary. A pure addition or pure removal yields term_changes = None.
"""

import copy
import math
from datetime import datetime, timezone

from acgen.state import Artifact, EditDiff, LengthChange
from acgen.utils.tokenizer import tokenize
from acgen.utils.validator import validate_artifact

MIN_TERM_LENGTH = 4
MAX_TERMS = 5


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _serialize(artifact: Artifact) -> str:
    """Concatenate every textual field, criteria in order."""
    parts = [artifact["feature_area"], artifact["user_story"], *artifact["criteria"], artifact["priority"]]
    return "\n".join(parts)


def _new_terms(source: list[str], baseline: set[str]) -> list[str]:
    """Terms of `source` absent from `baseline`, deduplicated in scan order."""
    seen = set()
    terms = []
    for token in source:
        if len(token) < MIN_TERM_LENGTH or token in baseline or token in seen:
            continue
        seen.add(token)
        terms.append(token)
        if len(terms) == MAX_TERMS:
            break
    return terms


def _criteria_average(criteria: list[str]) -> int:
    if not criteria:
        return 0
    return round_half_up(sum(len(c) for c in criteria) / len(criteria))


def _length_change(before: int, after: int) -> LengthChange:
    return {"before": before, "after": after, "delta": after - before}


def analyze_edit(original: Artifact, edited: Artifact) -> EditDiff:
    """Compute the EditDiff between an artifact and its edited version.

    Both artifacts are validated first; a malformed one raises ValidationError
    and no diff is produced.
    """
    validate_artifact(original)
    validate_artifact(edited)

    original_tokens = list(tokenize(_serialize(original)))
    edited_tokens = list(tokenize(_serialize(edited)))

    added = _new_terms(edited_tokens, set(original_tokens))
    removed = _new_terms(original_tokens, set(edited_tokens))
    term_changes = {"removed": removed, "added": added} if added and removed else None

    length_changes = {
        "feature_area": _length_change(len(original["feature_area"]), len(edited["feature_area"])),
        "user_story": _length_change(len(original["user_story"]), len(edited["user_story"])),
        "criteria_avg": _length_change(
            _criteria_average(original["criteria"]),
            _criteria_average(edited["criteria"]),
        ),
    }

    structural_changes = []
    if len(original["criteria"]) != len(edited["criteria"]):
        structural_changes.append({
            "kind": "criteria_count",
            "from": len(original["criteria"]),
            "to": len(edited["criteria"]),
        })
    if original["priority"] != edited["priority"]:
        structural_changes.append({
            "kind": "priority_change",
            "from": original["priority"],
            "to": edited["priority"],
        })

    return {
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "original": copy.deepcopy(original),
        "edited": copy.deepcopy(edited),
        "term_changes": term_changes,
        "length_changes": length_changes,
        "structural_changes": structural_changes,
    }
