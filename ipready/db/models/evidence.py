from sqlalchemy import Column, Integer, String, DateTime, Text, Float, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship, validates
from sqlalchemy.sql import func
from ipready.db.base import Base

class Evidence(Base):
    __tablename__ = "evidence"
    __table_args__ = (
        CheckConstraint("confidence IS NULL OR (confidence >= 0 AND confidence <= 100)", name="ck_evidence_confidence"),
    )
    
    id = Column(Integer, primary_key=True, index=True)
    protein_id = Column(Integer, ForeignKey("proteins.id"), nullable=False, index=True)
    
    type = Column(String, nullable=False)  # Mass Spectrometry, Stability Test, ...
    description = Column(Text, nullable=False)
    confidence = Column(Float)  # 0-100
    
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    
    protein = relationship("Protein", back_populates="evidence")
    
    @validates("confidence")
    def validate_confidence(self, key, value):
        if value is not None and not 0 <= value <= 100:
            raise ValueError(f"confidence must be in [0, 100], got {value}")
        return value
