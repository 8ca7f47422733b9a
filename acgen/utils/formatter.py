"""Output Formatter: plain-text artifact export and learned-pattern export."""

import json
from datetime import datetime
from pathlib import Path

from acgen.config import get_config, project_path
from acgen.state import Artifact, LearnedPatterns

SECTION_RULE = "=" * 50


def _render_artifact(artifact: Artifact) -> str:
    criteria = "\n".join(f"{i}. {c}" for i, c in enumerate(artifact["criteria"], 1))
    return (
        f"Feature Area: {artifact['feature_area']}\n"
        f"Priority: {artifact['priority']}\n"
        "\n"
        "User Story:\n"
        f"{artifact['user_story']}\n"
        "\n"
        "Acceptance Criteria:\n"
        f"{criteria}\n"
        "\n"
        f"{SECTION_RULE}\n"
        "\n"
    )


def render_artifacts_text(artifacts: list[Artifact]) -> str:
    """Render artifacts as the plain-text export, criteria numbered from 1."""
    return "".join(_render_artifact(a) for a in artifacts)


def render_patterns_json(learned: LearnedPatterns) -> str:
    """Serialize the learned patterns record for export."""
    return json.dumps(learned, indent=2)


def _unique_path(output_dir: Path, stem: str, suffix: str) -> Path:
    output_path = output_dir / f"{stem}{suffix}"
    counter = 1
    while output_path.exists():
        counter += 1
        output_path = output_dir / f"{stem} ({counter}){suffix}"
    return output_path


def write_export(content: str, stem: str, suffix: str = ".txt") -> Path:
    """Write an export into the configured output directory.

    The file name is `<stem>-<YYYYmmdd-HHMMSS><suffix>`; a counter is added if
    that name is already taken. Returns the Path written.
    """
    config = get_config()
    output_dir = project_path(config.get("output_dir", "./output"))
    output_dir.mkdir(parents=True, exist_ok=True)

    stamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    output_path = _unique_path(output_dir, f"{stem}-{stamp}", suffix)
    output_path.write_text(content, encoding="utf-8")
    return output_path
