from sqlalchemy import Column, Integer, String, DateTime, Text, JSON, Float, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ipready.db.base import Base

class Process(Base):
    __tablename__ = "processes"
    
    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    type = Column(String)  # Fermentation, Purification
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    proteins = relationship("ProteinProcess", back_populates="process")

class ProteinProcess(Base):
    __tablename__ = "protein_processes"
    
    id = Column(Integer, primary_key=True, index=True)
    protein_id = Column(Integer, ForeignKey("proteins.id"), nullable=False, index=True)
    process_id = Column(Integer, ForeignKey("processes.id"), nullable=False, index=True)
    
    yield_percent = Column(Float)
    conditions = Column(JSON)  # temp, pH, duration
    
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    protein = relationship("Protein", back_populates="processes")
    process = relationship("Process", back_populates="proteins")
