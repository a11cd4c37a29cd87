"""
Candidate selection for question answering.

``SubstringRanker`` is a deliberately simple relevance filter: a document is
a candidate when its content contains the question verbatim, ignoring case.
Anything implementing ``Ranker`` (e.g. an embedding retriever) can replace it
without touching prompt assembly or citations.
"""
from datetime import datetime, timezone
from typing import List, Protocol, Sequence

from ipready.db.models.document import Document

DEFAULT_MAX_CANDIDATES = 5


class Ranker(Protocol):
    def rank(self, question: str, corpus: Sequence[Document]) -> List[Document]: ...


def _recency_key(document: Document) -> datetime:
    created_at = document.created_at
    if created_at is None:
        return datetime.min.replace(tzinfo=timezone.utc)
    if created_at.tzinfo is None:
        # SQLite hands back naive timestamps
        return created_at.replace(tzinfo=timezone.utc)
    return created_at


class SubstringRanker:
    def __init__(self, limit: int = DEFAULT_MAX_CANDIDATES):
        self.limit = limit

    def rank(self, question: str, corpus: Sequence[Document]) -> List[Document]:
        needle = question.casefold()
        matches = [doc for doc in corpus if needle in (doc.content or "").casefold()]
        # sorted() is stable, so equal timestamps keep corpus order
        matches = sorted(matches, key=_recency_key, reverse=True)
        return matches[: self.limit]
