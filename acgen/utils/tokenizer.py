"""Word tokenizer shared by retrieval scoring and edit analysis."""

import re
from typing import Iterator

_WORD_RE = re.compile(r"\w+")


def tokenize(text: str) -> Iterator[str]:
    """Yield maximal runs of word characters, lowercased, in scan order."""
    for match in _WORD_RE.finditer(text.lower()):
        yield match.group(0)


def token_set(text: str) -> set[str]:
    return set(tokenize(text))
