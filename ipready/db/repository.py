"""
Repository interfaces over the database.

The engines depend on the Protocol classes only; ``SqlRepository`` is the
SQLAlchemy implementation injected at the API boundary.
"""
from typing import List, Optional, Protocol, Sequence

from loguru import logger
from sqlalchemy import Text, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ipready.core.errors import NotFoundError
from ipready.db.models.document import Document
from ipready.db.models.process import ProteinProcess
from ipready.db.models.protein import Protein
from ipready.db.models.query import QueryLog


def _like_pattern(text: str) -> str:
    """Wrap ``text`` in wildcards, escaping LIKE metacharacters so they match literally"""
    escaped = text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class DocumentRepository(Protocol):
    async def list_documents_matching(
        self, substring: str, limit: int, order_by_recency: bool = True
    ) -> Sequence[Document]: ...


class ProteinRepository(Protocol):
    async def get_protein_with_relations(self, protein_id: int) -> Protein: ...

    async def list_proteins_with_relations(self) -> Sequence[Protein]: ...


class SqlRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    # Documents

    async def list_documents_matching(
        self, substring: str, limit: int, order_by_recency: bool = True
    ) -> List[Document]:
        """Documents whose content contains ``substring``, case-insensitively"""
        if self.session.get_bind().dialect.name == "sqlite":
            # SQLite's lower() and LIKE only fold ASCII
            condition = func.casefold(Document.content, type_=Text).contains(substring.casefold(), autoescape=True)
        else:
            condition = Document.content.ilike(_like_pattern(substring), escape="\\")
        query = select(Document).where(condition)
        if order_by_recency:
            query = query.order_by(Document.created_at.desc(), Document.id.desc())
        query = query.limit(limit)

        result = await self.session.execute(query)
        documents = list(result.scalars().all())
        logger.debug(f"{len(documents)} documents matched query text (limit {limit})")
        return documents

    async def list_documents(self, limit: int = 100, offset: int = 0) -> List[Document]:
        query = (
            select(Document)
            .order_by(Document.created_at.desc(), Document.id.desc())
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_document(self, document_id: int) -> Document:
        document = await self.session.get(Document, document_id)
        if not document:
            raise NotFoundError("Document", document_id)
        return document

    async def add_document(
        self,
        filename: str,
        content: str,
        mime_type: Optional[str] = None,
        file_size: Optional[int] = None,
        protein_id: Optional[int] = None,
    ) -> Document:
        if protein_id is not None:
            await self._require_protein(protein_id)

        document = Document(
            filename=filename,
            content=content,
            mime_type=mime_type,
            file_size=file_size if file_size is not None else len(content.encode("utf-8")),
            protein_id=protein_id,
        )
        self.session.add(document)
        await self.session.commit()
        await self.session.refresh(document)

        logger.info(f"Document stored: {document.filename} (id={document.id})")
        return document

    async def link_document(self, document_id: int, protein_id: Optional[int]) -> Document:
        """Set or clear the protein a document belongs to"""
        document = await self.get_document(document_id)
        if protein_id is not None:
            await self._require_protein(protein_id)

        document.protein_id = protein_id
        await self.session.commit()
        await self.session.refresh(document)
        return document

    # Proteins

    def _proteins_with_relations(self):
        return select(Protein).options(
            selectinload(Protein.processes).selectinload(ProteinProcess.process),
            selectinload(Protein.evidence),
            selectinload(Protein.documents),
        )

    async def get_protein_with_relations(self, protein_id: int) -> Protein:
        result = await self.session.execute(
            self._proteins_with_relations().where(Protein.id == protein_id)
        )
        protein = result.scalars().first()
        if not protein:
            raise NotFoundError("Protein", protein_id)
        return protein

    async def list_proteins_with_relations(self) -> List[Protein]:
        result = await self.session.execute(
            self._proteins_with_relations().order_by(Protein.id)
        )
        return list(result.scalars().all())

    async def _require_protein(self, protein_id: int):
        exists = await self.session.execute(
            select(func.count()).select_from(Protein).where(Protein.id == protein_id)
        )
        if not exists.scalar():
            raise NotFoundError("Protein", protein_id)

    # Query log

    async def log_query(self, question: str, answer: str) -> QueryLog:
        entry = QueryLog(question=question, answer=answer)
        self.session.add(entry)
        await self.session.commit()
        await self.session.refresh(entry)
        return entry

    async def list_queries(self, limit: int = 50) -> List[QueryLog]:
        result = await self.session.execute(
            select(QueryLog).order_by(QueryLog.created_at.desc(), QueryLog.id.desc()).limit(limit)
        )
        return list(result.scalars().all())
