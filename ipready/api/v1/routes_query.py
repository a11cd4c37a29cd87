"""
Question answering routes
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel
from typing import Any, List, Optional
from datetime import datetime
from loguru import logger

from ipready.api.deps import get_repository, get_qa_engine
from ipready.core.config import settings
from ipready.core.errors import ValidationError, ModelUnavailableError
from ipready.db.repository import SqlRepository
from ipready.services.qa_engine import QAEngine, QueryAnswer

router = APIRouter()

FALLBACK_ANSWER = "The research assistant is unavailable right now. Please try again in a moment."

class QueryRequest(BaseModel):
    question: Optional[Any] = None

class QueryLogResponse(BaseModel):
    id: int
    question: str
    answer: str
    created_at: Optional[datetime]

@router.post("", response_model=QueryAnswer)
async def ask_question(
    request: QueryRequest,
    repository: SqlRepository = Depends(get_repository),
    engine: QAEngine = Depends(get_qa_engine)
):
    """Answer a question from the stored documents, with citations"""
    question = request.question
    
    try:
        if not isinstance(question, str) or not question.strip():
            raise ValidationError("Question is required")
        
        documents = await repository.list_documents_matching(
            question,
            limit=settings.RETRIEVAL_MAX_DOCUMENTS,
            order_by_recency=True
        )
        response = await engine.answer(question, documents)
    
    except ValidationError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ModelUnavailableError as e:
        logger.error(f"Query failed, model unavailable: {e}")
        try:
            await repository.log_query(question, FALLBACK_ANSWER)
        except Exception:
            logger.exception("Could not record fallback answer in query history")
        raise HTTPException(status_code=503, detail=FALLBACK_ANSWER)
    except Exception as e:
        logger.exception(f"Query error: {e}")
        raise HTTPException(status_code=500, detail="Failed to process query")
    
    # Save query to history
    await repository.log_query(question, response.answer)
    
    return response

@router.get("/history", response_model=List[QueryLogResponse])
async def get_query_history(
    limit: int = Query(50, ge=1, le=500),
    repository: SqlRepository = Depends(get_repository)
):
    """Most recent questions and the answers given"""
    entries = await repository.list_queries(limit=limit)
    
    return [
        QueryLogResponse(
            id=entry.id,
            question=entry.question,
            answer=entry.answer,
            created_at=entry.created_at
        )
        for entry in entries
    ]
