"""
Retrieval-augmented question answering over the document corpus.

Flow: validate question -> rank candidates -> refuse if none -> build a
``[DOC-N: filename]`` labelled context -> one model completion -> answer plus
the full list of candidate sources.
"""
import asyncio
from typing import List, Optional, Sequence

from loguru import logger
from pydantic import BaseModel

from ipready.core.config import settings
from ipready.core.errors import ModelUnavailableError, ValidationError
from ipready.db.models.document import Document
from ipready.services.anthropic_client import CompletionModel
from ipready.services.retrieval import Ranker, SubstringRanker

NO_DOCUMENTS_ANSWER = (
    "I don't have any documents to answer this question. "
    "Please upload some documents first."
)

CONTEXT_SEPARATOR = "\n\n---\n\n"

SYSTEM_PROMPT = """You are a scientific research assistant for a biotechnology company developing functional proteins via precision fermentation.

CRITICAL RULES:
1. Answer ONLY based on the provided documents
2. ALWAYS cite sources using [DOC-X] format
3. If information is not in the documents, say "I don't have enough information in the provided documents"
4. Never make up or hallucinate information
5. Be precise and scientific in your language"""

USER_PROMPT_TEMPLATE = """Here are the relevant documents from our database:

{context}

Question: {question}

Please provide a detailed answer based ONLY on these documents. Include citations in [DOC-X] format."""


class SourceRef(BaseModel):
    id: int
    filename: str


class QueryAnswer(BaseModel):
    answer: str
    sources: List[SourceRef]


def build_context(documents: Sequence[Document], char_limit: int) -> str:
    """Label each excerpt with its 1-based citation tag and join them"""
    return CONTEXT_SEPARATOR.join(
        f"[DOC-{i}: {doc.filename}]\n{(doc.content or '')[:char_limit]}"
        for i, doc in enumerate(documents, start=1)
    )


def build_user_prompt(question: str, context: str) -> str:
    return USER_PROMPT_TEMPLATE.format(context=context, question=question)


class QAEngine:
    def __init__(
        self,
        model: CompletionModel,
        ranker: Optional[Ranker] = None,
        char_limit: Optional[int] = None,
        max_tokens: Optional[int] = None,
        timeout: Optional[float] = None
    ):
        self.model = model
        self.ranker = ranker or SubstringRanker(settings.RETRIEVAL_MAX_DOCUMENTS)
        self.char_limit = char_limit or settings.CONTEXT_CHAR_LIMIT
        self.max_tokens = max_tokens or settings.LLM_MAX_TOKENS
        self.timeout = timeout or settings.LLM_TIMEOUT_SECONDS

    async def answer(self, question, corpus: Sequence[Document]) -> QueryAnswer:
        """
        Answer ``question`` from ``corpus`` with DOC-N citations.

        Raises:
            ValidationError: question missing, not a string, or blank
            ModelUnavailableError: model call failed or exceeded the timeout
        """
        if not isinstance(question, str) or not question.strip():
            raise ValidationError("Question is required")

        candidates = self.ranker.rank(question, corpus)
        if not candidates:
            logger.info("No documents matched question; returning refusal")
            return QueryAnswer(answer=NO_DOCUMENTS_ANSWER, sources=[])

        context = build_context(candidates, self.char_limit)
        user_prompt = build_user_prompt(question, context)

        logger.info(f"Answering question from {len(candidates)} documents")
        try:
            text = await asyncio.wait_for(
                self.model.complete(SYSTEM_PROMPT, user_prompt, self.max_tokens),
                timeout=self.timeout
            )
        except asyncio.TimeoutError as e:
            logger.error(f"Model call exceeded {self.timeout}s")
            raise ModelUnavailableError(f"model call timed out after {self.timeout}s") from e

        return QueryAnswer(
            answer=text or "",
            sources=[SourceRef(id=doc.id, filename=doc.filename) for doc in candidates]
        )
