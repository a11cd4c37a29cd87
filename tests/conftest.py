"""
Shared builders and fakes for the test suite.

Engines are exercised against in-memory repositories and a call-counting
stub model, so no database or network is needed outside test_repository.
"""
import asyncio
from datetime import datetime, timedelta, timezone
from typing import List, Optional

import pytest

from ipready.core.errors import NotFoundError
from ipready.db.models.document import Document
from ipready.db.models.evidence import Evidence
from ipready.db.models.process import Process, ProteinProcess
from ipready.db.models.protein import Protein
from ipready.db.models.query import QueryLog
from ipready.services.retrieval import SubstringRanker

BASE_TIME = datetime(2024, 1, 1, tzinfo=timezone.utc)


def make_document(
    doc_id: int,
    content: str,
    filename: Optional[str] = None,
    age_days: int = 0,
    protein_id: Optional[int] = None,
) -> Document:
    """A transient Document created ``age_days`` before a fixed reference time"""
    return Document(
        id=doc_id,
        filename=filename or f"doc_{doc_id}.txt",
        content=content,
        mime_type="text/plain",
        file_size=len(content.encode("utf-8")),
        protein_id=protein_id,
        created_at=BASE_TIME - timedelta(days=age_days),
    )


def make_protein(
    protein_id: int,
    name: Optional[str] = None,
    processes: int = 0,
    evidence: int = 0,
    documents: int = 0,
    maturity: Optional[str] = "R&D",
) -> Protein:
    protein = Protein(id=protein_id, name=name or f"Protein {protein_id}", maturity=maturity)
    protein.processes = [
        ProteinProcess(
            protein_id=protein_id,
            process_id=i + 1,
            process=Process(id=i + 1, name=f"Process {i + 1}", type="Fermentation"),
            yield_percent=80.0 + i,
        )
        for i in range(processes)
    ]
    protein.evidence = [
        Evidence(id=i + 1, protein_id=protein_id, type="Mass Spectrometry", description=f"run {i}", confidence=90)
        for i in range(evidence)
    ]
    protein.documents = [
        make_document(100 * protein_id + i, f"report {i}", protein_id=protein_id)
        for i in range(documents)
    ]
    return protein


class StubModel:
    """Completion model that records every call"""

    def __init__(self, reply: str = "Protein X reached 85% yield [DOC-1].", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls = []

    @property
    def call_count(self) -> int:
        return len(self.calls)

    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        self.calls.append({"system": system_prompt, "user": user_prompt, "max_tokens": max_tokens})
        if self.error is not None:
            raise self.error
        return self.reply


class SlowModel:
    """Completion model that blocks until cancelled or ``delay`` elapses"""

    def __init__(self, delay: float):
        self.delay = delay
        self.started = None
        self.finished = False

    async def complete(self, system_prompt: str, user_prompt: str, max_tokens: int) -> str:
        if self.started is not None:
            self.started.set()
        await asyncio.sleep(self.delay)
        self.finished = True
        return "late"


class FakeRepository:
    """In-memory stand-in for SqlRepository"""

    def __init__(self, proteins: Optional[List[Protein]] = None, documents: Optional[List[Document]] = None):
        self.proteins = {p.id: p for p in proteins or []}
        self.documents = list(documents or [])
        self.queries: List[QueryLog] = []

    async def list_documents_matching(self, substring, limit, order_by_recency=True):
        return SubstringRanker(limit).rank(substring, self.documents)

    async def list_documents(self, limit=100, offset=0):
        ordered = sorted(self.documents, key=lambda d: d.created_at, reverse=True)
        return ordered[offset:offset + limit]

    async def get_document(self, document_id):
        for document in self.documents:
            if document.id == document_id:
                return document
        raise NotFoundError("Document", document_id)

    async def add_document(self, filename, content, mime_type=None, file_size=None, protein_id=None):
        if protein_id is not None and protein_id not in self.proteins:
            raise NotFoundError("Protein", protein_id)
        document = make_document(len(self.documents) + 1, content, filename=filename, protein_id=protein_id)
        document.mime_type = mime_type
        if file_size is not None:
            document.file_size = file_size
        self.documents.append(document)
        return document

    async def link_document(self, document_id, protein_id):
        document = await self.get_document(document_id)
        if protein_id is not None and protein_id not in self.proteins:
            raise NotFoundError("Protein", protein_id)
        document.protein_id = protein_id
        return document

    async def get_protein_with_relations(self, protein_id):
        if protein_id not in self.proteins:
            raise NotFoundError("Protein", protein_id)
        return self.proteins[protein_id]

    async def list_proteins_with_relations(self):
        return [self.proteins[key] for key in sorted(self.proteins)]

    async def log_query(self, question, answer):
        entry = QueryLog(id=len(self.queries) + 1, question=question, answer=answer, created_at=BASE_TIME)
        self.queries.append(entry)
        return entry

    async def list_queries(self, limit=50):
        return list(reversed(self.queries))[:limit]


@pytest.fixture
def stub_model():
    return StubModel()


@pytest.fixture
def corpus():
    return [
        make_document(1, "Fermentation yield reached 85% at 30°C.", "Protein_X_Fermentation_Study.pdf", age_days=3),
        make_document(2, "Mass spectrometry confirmed 42 kDa. FERMENTATION YIELD was not measured.", "Mass_Spec.pdf", age_days=1),
        make_document(3, "Stability at 4°C showed <5% degradation.", "Stability_Test_Report.docx", age_days=2),
    ]
