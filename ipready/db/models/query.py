from sqlalchemy import Column, Integer, DateTime, Text
from sqlalchemy.sql import func
from ipready.db.base import Base

class QueryLog(Base):
    """Append-only audit trail of answered questions"""
    __tablename__ = "queries"
    
    id = Column(Integer, primary_key=True, index=True)
    question = Column(Text, nullable=False)
    answer = Column(Text, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
