"""Entry point: loads the session, runs one command, prints the result."""

import sys
from pathlib import Path

from acgen.errors import (
    GenerationTransportError,
    MalformedGenerationOutput,
    ValidationError,
)
from acgen.session import Session
from acgen.state import PRIORITIES, Artifact
from acgen.utils.formatter import write_export
from acgen.utils.store import Store

USAGE = """\
Usage: acgen [options] [request...]

Options:
  --provider NAME     primary (Gemini), secondary (Claude) or none (template)
  --rag / --no-rag    Ground generation in the knowledge base
  --add-doc PATH      Add a plain-text file to the knowledge base (repeatable)
  --add-link URL      Add a web-link stub to the knowledge base
  --docs              List knowledge-base documents
  --edit ID           Interactively edit an artifact and record the edit
  --export            Write the current artifacts to a text file
  --export-learning   Write learned patterns to a JSON file
  --reset-learning    Discard all learned patterns
"""


def _pop_value(args: list[str], flag: str) -> list[str]:
    """Remove every `flag VALUE` pair from args and return the values."""
    values = []
    while flag in args:
        i = args.index(flag)
        if i + 1 >= len(args):
            raise ValidationError(f"{flag} requires a value.")
        values.append(args[i + 1])
        del args[i:i + 2]
    return values


def _pop_flag(args: list[str], flag: str) -> bool:
    if flag in args:
        args.remove(flag)
        return True
    return False


def _prompt_field(label: str, current: str) -> str:
    value = input(f"{label} [{current}]: ").strip()
    return value or current


def _collect_edit(artifact: Artifact) -> Artifact:
    """Prompt the user in the terminal for each field of the artifact.

    Empty input keeps the current value. Criteria are entered one per line,
    finished by an empty line; entering none keeps the existing list.
    """
    print(f"\n--- Editing artifact {artifact['id']} (Enter keeps the current value) ---\n")
    edited = dict(artifact)
    edited["feature_area"] = _prompt_field("Feature Area", artifact["feature_area"])
    edited["user_story"] = _prompt_field("User Story", artifact["user_story"])

    while True:
        priority = _prompt_field(f"Priority ({'/'.join(PRIORITIES)})", artifact["priority"])
        if priority in PRIORITIES:
            edited["priority"] = priority
            break
        print(f"Please enter one of: {', '.join(PRIORITIES)}.")

    print("Current criteria:")
    for i, criterion in enumerate(artifact["criteria"], 1):
        print(f"  {i}. {criterion}")
    print("New criteria, one per line (empty line to finish, none to keep):")
    criteria = []
    while True:
        line = input("> ").strip()
        if not line:
            break
        criteria.append(line)
    edited["criteria"] = criteria or list(artifact["criteria"])
    return edited


def _coerce_id(raw: str):
    return int(raw) if raw.isdigit() else raw


def run(args: list[str]) -> int:
    """Run one CLI invocation. Returns the process exit code."""
    if _pop_flag(args, "--help") or _pop_flag(args, "-h"):
        print(USAGE)
        return 0

    providers = _pop_value(args, "--provider")
    doc_paths = _pop_value(args, "--add-doc")
    links = _pop_value(args, "--add-link")
    edit_ids = _pop_value(args, "--edit")
    rag_on = _pop_flag(args, "--rag")
    rag_off = _pop_flag(args, "--no-rag")
    list_docs = _pop_flag(args, "--docs")
    export = _pop_flag(args, "--export")
    export_learning = _pop_flag(args, "--export-learning")
    reset_learning = _pop_flag(args, "--reset-learning")

    session = Session(store=Store(), provider=providers[-1] if providers else None)
    if rag_on or rag_off:
        session.toggle_retrieval(rag_on)

    for path in doc_paths:
        file_path = Path(path)
        try:
            body = file_path.read_text(encoding="utf-8", errors="replace")
            size_bytes = file_path.stat().st_size
        except OSError as exc:
            raise ValidationError(f"Cannot read document '{path}': {exc.strerror or exc}") from exc
        doc = session.add_document(file_path.name, body, source_kind="text", size_bytes=size_bytes)
        print(f"[ACG] Added \"{doc['title']}\" to the knowledge base.")
    for url in links:
        doc = session.add_web_link(url)
        print(f"[ACG] Web link added as \"{doc['title']}\". Please add manual content.")

    if list_docs:
        for doc in session.corpus:
            print(f"{doc['id']}  {doc['title']}  ({doc.get('source_kind', 'manual')})")

    if reset_learning:
        session.reset_patterns()
        print("[ACG] Learning data reset.")

    request = " ".join(args)
    if request:
        artifacts = session.generate(request)
        print(session.export_artifacts(), end="")
        print(f"[ACG] Generated {len(artifacts)} artifact(s).")

    for raw_id in edit_ids:
        working = session.begin_edit(_coerce_id(raw_id))
        diff = session.save_edit(_collect_edit(working))
        print(
            f"[ACG] Edit saved ({len(diff['structural_changes'])} structural change(s)); "
            f"{len(session.learned['edits'])} edit(s) in learning history."
        )

    if export:
        path = write_export(session.export_artifacts(), "acceptance-criteria")
        print(f"[ACG] Artifacts exported to: {path}")
    if export_learning:
        path = write_export(session.export_patterns(), "ac-learning", suffix=".json")
        print(f"[ACG] Learned patterns exported to: {path}")

    return 0


def main() -> None:
    """CLI entry point: accepts the request as arguments or from stdin."""
    args = sys.argv[1:]
    if not args:
        print("Enter your request (Ctrl+D / Ctrl+Z to submit):")
        args = [sys.stdin.read()]

    try:
        code = run(args)
    except MalformedGenerationOutput as exc:
        print(f"[ACG] The generator answered, but not with usable criteria: {exc}", file=sys.stderr)
        code = 2
    except GenerationTransportError as exc:
        print(f"[ACG] Generation failed: {exc}", file=sys.stderr)
        code = 3
    except ValidationError as exc:
        print(f"[ACG] {exc}", file=sys.stderr)
        code = 1
    sys.exit(code)


if __name__ == "__main__":
    main()
