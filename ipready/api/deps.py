"""
Dependency providers for the API routers
"""
from functools import lru_cache
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ipready.db.session import get_db
from ipready.db.repository import SqlRepository
from ipready.services.anthropic_client import AnthropicClient, CompletionModel
from ipready.services.qa_engine import QAEngine
from ipready.services.gap_analysis import GapAnalysisEngine

def get_repository(db: AsyncSession = Depends(get_db)) -> SqlRepository:
    return SqlRepository(db)

@lru_cache()
def get_completion_model() -> CompletionModel:
    return AnthropicClient()

def get_qa_engine(model: CompletionModel = Depends(get_completion_model)) -> QAEngine:
    return QAEngine(model)

def get_gap_engine(repository: SqlRepository = Depends(get_repository)) -> GapAnalysisEngine:
    return GapAnalysisEngine(repository)
