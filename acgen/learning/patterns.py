"""Pattern Aggregator: folds the bounded edit history into a style profile.

The profile is never updated incrementally. Every update appends to the
history, evicts the oldest entries beyond the limit and rebuilds the profile
from the retained entries only, so evicted edits leave no trace.
"""

from acgen.learning.edit_analyzer import round_half_up
from acgen.state import PRIORITIES, EditDiff, LearnedPatterns, StyleProfile

DEFAULT_HISTORY_LIMIT = 20


def empty_profile() -> StyleProfile:
    return {
        "preferred_terms": {},
        "avg_length": {"feature_area": 0, "user_story": 0, "criteria": 0},
        "priority_distribution": {p: 0 for p in PRIORITIES},
    }


def empty_patterns() -> LearnedPatterns:
    return {"edits": [], "profile": empty_profile()}


def _mean(values: list[int]) -> int:
    return round_half_up(sum(values) / len(values)) if values else 0


def build_profile(history: list[EditDiff]) -> StyleProfile:
    """Deterministic fold of the history into a StyleProfile."""
    profile = empty_profile()
    terms = profile["preferred_terms"]

    for diff in history:
        term_changes = diff.get("term_changes")
        if term_changes:
            # Removed terms are not counted (additive signal only)
            for term in term_changes["added"]:
                terms[term] = terms.get(term, 0) + 1
        profile["priority_distribution"][diff["edited"]["priority"]] += 1

    lengths = [diff["length_changes"] for diff in history]
    profile["avg_length"] = {
        "feature_area": _mean([lc["feature_area"]["after"] for lc in lengths]),
        "user_story": _mean([lc["user_story"]["after"] for lc in lengths]),
        "criteria": _mean([lc["criteria_avg"]["after"] for lc in lengths]),
    }
    return profile


def update_patterns(
    history: list[EditDiff],
    diff: EditDiff,
    limit: int | None = None,
) -> tuple[list[EditDiff], StyleProfile]:
    """Append a diff, evict oldest entries beyond the limit, rebuild the profile.

    The input history is not mutated; a new list is returned.
    """
    if limit is None:
        from acgen.config import get_config

        limit = get_config().get("history_limit", DEFAULT_HISTORY_LIMIT)

    new_history = history + [diff]
    if len(new_history) > limit:
        new_history = new_history[len(new_history) - limit:]
    return new_history, build_profile(new_history)


def reset_patterns() -> tuple[list[EditDiff], StyleProfile]:
    """Discard all learned signal. Calling it repeatedly yields the same state."""
    return [], empty_profile()


def top_terms(profile: StyleProfile, n: int = 10) -> list[str]:
    """Top-n preferred terms by descending count; ties keep first-registered order."""
    ranked = sorted(profile["preferred_terms"].items(), key=lambda item: item[1], reverse=True)
    return [term for term, _count in ranked[:n]]
