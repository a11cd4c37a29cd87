from sqlalchemy import Column, Integer, String, DateTime, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ipready.db.base import Base

class Protein(Base):
    __tablename__ = "proteins"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    sequence = Column(Text)  # Amino-acid sequence, optional
    maturity = Column(String)  # Free-form stage label: R&D, MVP, Production
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
    
    processes = relationship("ProteinProcess", back_populates="protein", cascade="all, delete-orphan", order_by="ProteinProcess.id")
    evidence = relationship("Evidence", back_populates="protein", cascade="all, delete-orphan", order_by="Evidence.id")
    documents = relationship("Document", back_populates="protein", order_by="Document.id")
