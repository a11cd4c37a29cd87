"""
Protein readiness routes
"""
from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel
from typing import List, Optional, Any
from datetime import datetime

from ipready.api.deps import get_repository, get_gap_engine
from ipready.core.errors import NotFoundError
from ipready.db.repository import SqlRepository
from ipready.services.gap_analysis import (
    GapAnalysisEngine,
    GapAnalysisResult,
    ReadinessSummary,
    score_protein,
)

router = APIRouter()

class ProcessLinkResponse(BaseModel):
    process_id: int
    process_name: Optional[str]
    process_type: Optional[str]
    yield_percent: Optional[float]
    conditions: Optional[Any]

class EvidenceResponse(BaseModel):
    id: int
    type: str
    description: str
    confidence: Optional[float]

class DocumentRef(BaseModel):
    id: int
    filename: str
    created_at: Optional[datetime]

class ProteinDetailResponse(BaseModel):
    id: int
    name: str
    sequence: Optional[str]
    maturity: Optional[str]
    processes: List[ProcessLinkResponse]
    evidence: List[EvidenceResponse]
    documents: List[DocumentRef]
    gaps: GapAnalysisResult

@router.get("", response_model=List[ReadinessSummary])
async def list_proteins(engine: GapAnalysisEngine = Depends(get_gap_engine)):
    """All proteins with their readiness status"""
    return await engine.summarize_all()

@router.get("/gaps", response_model=List[GapAnalysisResult])
async def analyze_all_proteins(engine: GapAnalysisEngine = Depends(get_gap_engine)):
    """Gap analysis for every protein"""
    return await engine.analyze_all()

@router.get("/{protein_id}", response_model=ProteinDetailResponse)
async def get_protein(
    protein_id: int,
    repository: SqlRepository = Depends(get_repository)
):
    """Protein with its process links, evidence, documents and gap analysis"""
    try:
        protein = await repository.get_protein_with_relations(protein_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Protein not found")
    
    return ProteinDetailResponse(
        id=protein.id,
        name=protein.name,
        sequence=protein.sequence,
        maturity=protein.maturity,
        processes=[
            ProcessLinkResponse(
                process_id=link.process_id,
                process_name=link.process.name if link.process else None,
                process_type=link.process.type if link.process else None,
                yield_percent=link.yield_percent,
                conditions=link.conditions
            )
            for link in protein.processes
        ],
        evidence=[
            EvidenceResponse(
                id=item.id,
                type=item.type,
                description=item.description,
                confidence=item.confidence
            )
            for item in protein.evidence
        ],
        documents=[
            DocumentRef(id=doc.id, filename=doc.filename, created_at=doc.created_at)
            for doc in protein.documents
        ],
        gaps=score_protein(protein)
    )

@router.get("/{protein_id}/gaps", response_model=GapAnalysisResult)
async def analyze_protein(
    protein_id: int,
    engine: GapAnalysisEngine = Depends(get_gap_engine)
):
    """Gap analysis scorecard for one protein"""
    try:
        return await engine.analyze(protein_id)
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Protein not found")
