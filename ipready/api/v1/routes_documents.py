"""
Document corpus routes
"""
from fastapi import APIRouter, Depends, HTTPException, Query
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime

from ipready.api.deps import get_repository
from ipready.core.errors import NotFoundError
from ipready.db.repository import SqlRepository

router = APIRouter()

class DocumentCreate(BaseModel):
    filename: str = Field(..., min_length=1)
    content: str
    mime_type: str = "text/plain"
    file_size: Optional[int] = Field(None, ge=0)
    protein_id: Optional[int] = None

class DocumentLink(BaseModel):
    protein_id: Optional[int] = None

class DocumentResponse(BaseModel):
    id: int
    filename: str
    mime_type: Optional[str]
    file_size: Optional[int]
    protein_id: Optional[int]
    created_at: Optional[datetime]

def _to_response(document) -> DocumentResponse:
    return DocumentResponse(
        id=document.id,
        filename=document.filename,
        mime_type=document.mime_type,
        file_size=document.file_size,
        protein_id=document.protein_id,
        created_at=document.created_at
    )

@router.get("", response_model=List[DocumentResponse])
async def list_documents(
    limit: int = Query(100, ge=1, le=1000),
    offset: int = Query(0, ge=0),
    repository: SqlRepository = Depends(get_repository)
):
    """List documents, newest first"""
    documents = await repository.list_documents(limit=limit, offset=offset)
    return [_to_response(doc) for doc in documents]

@router.post("", response_model=DocumentResponse, status_code=201)
async def create_document(
    document_data: DocumentCreate,
    repository: SqlRepository = Depends(get_repository)
):
    """Register a document whose text has already been extracted"""
    try:
        document = await repository.add_document(
            filename=document_data.filename,
            content=document_data.content,
            mime_type=document_data.mime_type,
            file_size=document_data.file_size,
            protein_id=document_data.protein_id
        )
    except NotFoundError:
        raise HTTPException(status_code=404, detail="Protein not found")
    
    return _to_response(document)

@router.put("/{document_id}/protein", response_model=DocumentResponse)
async def link_document(
    document_id: int,
    link: DocumentLink,
    repository: SqlRepository = Depends(get_repository)
):
    """Attach a document to a protein, or detach it with a null protein_id"""
    try:
        document = await repository.link_document(document_id, link.protein_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=f"{e.entity} not found")
    
    return _to_response(document)
