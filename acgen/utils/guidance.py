"""Distilled acceptance-criteria writing guidance for injection into the system prompt."""

# Imperative rules for LLM consumption. Keep them short: they are sent with
# every generation request when guidance is enabled.
_GUIDANCE_RULES = """\
- Phrase each criterion as an observable outcome; prefer Given/When/Then when a \
precondition and a trigger both exist.
- One behavior per criterion. Split compound statements joined by "and".
- Cover the happy path, validation failures and at least one boundary condition.
- Avoid implementation details (frameworks, table names, endpoints) unless the \
request names them.
- Write the user story as "As a <role>, I want <capability>, so that <benefit>".
- Assign High priority only to criteria without which the feature is unusable.\
"""


def load_guidance() -> str:
    """Return the distilled writing guidance rules.

    Returns an empty string if guidance is disabled in config
    (set guidance_enabled to false or remove it).
    """
    from acgen.config import get_config

    config = get_config()
    if not config.get("guidance_enabled", False):
        return ""

    return _GUIDANCE_RULES
