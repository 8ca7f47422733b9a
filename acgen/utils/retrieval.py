"""Retrieval ranker: lexical set-overlap scoring over the knowledge base.

Scores are Jaccard similarities of the query and document-body token sets.
There is no semantic component: a document is relevant only if it shares
vocabulary with the request.
"""

from acgen.state import Document
from acgen.utils.tokenizer import token_set


def jaccard(a: set[str], b: set[str]) -> float:
    """Return |A∩B| / |A∪B|, or 0.0 when both sets are empty."""
    union = a | b
    if not union:
        return 0.0
    return len(a & b) / len(union)


def retrieve(
    query: str,
    corpus: list[Document],
    k: int | None = None,
    min_score: float | None = None,
) -> list[tuple[Document, float]]:
    """Return up to k (document, score) pairs whose score exceeds min_score.

    Results are ordered by descending score. Equal scores keep corpus order,
    so earlier-added documents win ties. An empty corpus or a query with no
    word tokens yields an empty list.
    """
    from acgen.config import get_config

    config = get_config()
    if k is None:
        k = config.get("retrieval_top_k", 3)
    if min_score is None:
        min_score = config.get("retrieval_min_score", 0.05)

    query_tokens = token_set(query)
    scored = [
        (doc, jaccard(query_tokens, token_set(doc.get("body", ""))))
        for doc in corpus
    ]
    # sorted() is stable: ties stay in corpus order
    ranked = sorted(scored, key=lambda pair: pair[1], reverse=True)
    return [pair for pair in ranked if pair[1] > min_score][:k]
