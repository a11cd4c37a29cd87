"""
IP-readiness gap analysis.

A protein is scored on three categories (linked processes, evidence items,
supporting documents) against fixed thresholds. Results are recomputed from
the repository on every call and never cached.
"""
from typing import Dict, List, Literal, Optional

from loguru import logger
from pydantic import BaseModel

from ipready.db.models.protein import Protein
from ipready.db.repository import ProteinRepository

# Process-readiness policy
REQUIRED_PROCESSES = 1
REQUIRED_EVIDENCE = 3
REQUIRED_DOCUMENTS = 5

COMPLETE = "complete"
PARTIAL = "partial"
MISSING = "missing"

READY_FOR_IP = "READY_FOR_IP"
IN_PROGRESS = "IN_PROGRESS"
NOT_STARTED = "NOT_STARTED"

GapState = Literal["complete", "partial", "missing"]
Priority = Literal["HIGH", "MEDIUM", "LOW"]
ReadinessStatus = Literal["READY_FOR_IP", "IN_PROGRESS", "NOT_STARTED"]


class Requirement(BaseModel):
    required: int
    has: int


class Requirements(BaseModel):
    process: Requirement
    evidence: Requirement
    documents: Requirement


class Gaps(BaseModel):
    process: GapState
    evidence: GapState
    documents: GapState


class Recommendation(BaseModel):
    priority: Priority
    message: str
    missing: int


class GapAnalysisResult(BaseModel):
    protein_id: int
    protein_name: str
    requirements: Requirements
    gaps: Gaps
    status: ReadinessStatus
    recommendations: List[Recommendation]


class ReadinessSummary(BaseModel):
    id: int
    name: str
    maturity: Optional[str]
    process_count: int
    evidence_count: int
    document_count: int
    status: ReadinessStatus


def gap_state(has: int, required: int) -> GapState:
    if has >= required:
        return COMPLETE
    if has > 0:
        return PARTIAL
    return MISSING


def overall_status(gaps: Gaps) -> ReadinessStatus:
    states = [gaps.process, gaps.evidence, gaps.documents]
    if all(state == COMPLETE for state in states):
        return READY_FOR_IP
    if any(state != MISSING for state in states):
        return IN_PROGRESS
    return NOT_STARTED


def recommend(requirements: Requirements, gaps: Gaps) -> List[Recommendation]:
    recommendations = []

    if gaps.process != COMPLETE:
        recommendations.append(Recommendation(
            priority="HIGH",
            message="Add production process data",
            missing=requirements.process.required - requirements.process.has
        ))

    if gaps.evidence != COMPLETE:
        shortfall = requirements.evidence.required - requirements.evidence.has
        recommendations.append(Recommendation(
            priority="HIGH",
            message=f"Add {shortfall} more evidence items",
            missing=shortfall
        ))

    if gaps.documents != COMPLETE:
        shortfall = requirements.documents.required - requirements.documents.has
        recommendations.append(Recommendation(
            priority="MEDIUM",
            message=f"Upload {shortfall} more supporting documents",
            missing=shortfall
        ))

    return recommendations


def score_counts(
    protein_id: int,
    protein_name: str,
    process_count: int,
    evidence_count: int,
    document_count: int
) -> GapAnalysisResult:
    """Pure scoring step: counts in, full result out"""
    requirements = Requirements(
        process=Requirement(required=REQUIRED_PROCESSES, has=process_count),
        evidence=Requirement(required=REQUIRED_EVIDENCE, has=evidence_count),
        documents=Requirement(required=REQUIRED_DOCUMENTS, has=document_count)
    )
    gaps = Gaps(
        process=gap_state(process_count, REQUIRED_PROCESSES),
        evidence=gap_state(evidence_count, REQUIRED_EVIDENCE),
        documents=gap_state(document_count, REQUIRED_DOCUMENTS)
    )
    return GapAnalysisResult(
        protein_id=protein_id,
        protein_name=protein_name,
        requirements=requirements,
        gaps=gaps,
        status=overall_status(gaps),
        recommendations=recommend(requirements, gaps)
    )


def relation_counts(protein: Protein) -> Dict[str, int]:
    return {
        "process_count": len(protein.processes or []),
        "evidence_count": len(protein.evidence or []),
        "document_count": len(protein.documents or [])
    }


def score_protein(protein: Protein) -> GapAnalysisResult:
    return score_counts(protein.id, protein.name, **relation_counts(protein))


class GapAnalysisEngine:
    def __init__(self, repository: ProteinRepository):
        self.repository = repository

    async def analyze(self, protein_id: int) -> GapAnalysisResult:
        """Raises NotFoundError when the protein does not exist"""
        protein = await self.repository.get_protein_with_relations(protein_id)
        result = score_protein(protein)
        logger.debug(f"Gap analysis for protein {protein_id}: {result.status}")
        return result

    async def analyze_all(self) -> List[GapAnalysisResult]:
        proteins = await self.repository.list_proteins_with_relations()
        return [score_protein(protein) for protein in proteins]

    async def summarize_all(self) -> List[ReadinessSummary]:
        proteins = await self.repository.list_proteins_with_relations()
        summaries = []
        for protein in proteins:
            counts = relation_counts(protein)
            summaries.append(ReadinessSummary(
                id=protein.id,
                name=protein.name,
                maturity=protein.maturity,
                status=score_protein(protein).status,
                **counts
            ))
        return summaries
