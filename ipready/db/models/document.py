from sqlalchemy import Column, Integer, String, DateTime, Text, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from ipready.db.base import Base

class Document(Base):
    __tablename__ = "documents"
    
    id = Column(Integer, primary_key=True, index=True)
    filename = Column(String, nullable=False)
    content = Column(Text, nullable=False)  # Extracted plain text
    mime_type = Column(String)
    file_size = Column(Integer)  # Bytes
    
    # The only field that may change after creation
    protein_id = Column(Integer, ForeignKey("proteins.id"), nullable=True, index=True)
    
    created_at = Column(DateTime(timezone=True), server_default=func.now(), index=True)
    
    protein = relationship("Protein", back_populates="documents")
