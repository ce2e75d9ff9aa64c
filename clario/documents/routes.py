from fastapi import APIRouter, Depends, HTTPException, status, UploadFile, File, Form, Query
from sqlalchemy.orm import Session
from sqlalchemy import or_, desc
from sqlalchemy.exc import SQLAlchemyError
from typing import Optional
from pathlib import Path
import mimetypes
import logging
import uuid

import aiofiles
import aiofiles.os

from clario.auth.dependencies import get_current_user, get_settings, require_pro
from clario.config import Settings
from clario.database import get_db, json_array_contains
from clario.documents.models import Document
from clario.documents.schemas import DocumentCreate, DocumentUpdate, DocumentResponse
from clario.models import User, DocumentStatus, DocumentType, utcnow
from clario.responses import success
from clario.services.ai_service import AIService, get_ai_service
from clario.services.document_text import ALLOWED_EXTENSIONS, TextExtractionError, extract_text
from clario.services.pagination import PageParams, page_params, paginate

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/documents", tags=["Documents"])


def get_owned_document(db: Session, document_id: str, user: User) -> Document:
    """Fetch a document owned by ``user``; other users' documents read as missing."""
    document = db.query(Document).filter(
        Document.id == document_id,
        Document.user_id == user.id
    ).first()
    if not document:
        raise HTTPException(status_code=404, detail="Document not found")
    return document


def serialize(document: Document) -> dict:
    return DocumentResponse.model_validate(document).model_dump(mode="json")


def validate_file(file: UploadFile) -> str:
    """Validate the upload's name and return its lowercase extension."""
    if not file or not file.filename:
        raise HTTPException(status_code=400, detail="No file uploaded")

    file_extension = Path(file.filename).suffix.lower()
    if file_extension not in ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail="Invalid file type. Only PDF, DOC, DOCX, and TXT files are allowed."
        )
    return file_extension


async def save_uploaded_file(content: bytes, file_extension: str, upload_dir: str) -> str:
    await aiofiles.os.makedirs(upload_dir, exist_ok=True)
    file_path = str(Path(upload_dir) / f"{uuid.uuid4()}{file_extension}")
    async with aiofiles.open(file_path, "wb") as f:
        await f.write(content)
    return file_path


async def remove_stored_file(file_path: str) -> None:
    try:
        await aiofiles.os.remove(file_path)
    except OSError as e:
        logger.warning(f"Could not remove stored file {file_path}: {str(e)}")

# =====================================================
# DOCUMENT CRUD OPERATIONS
# =====================================================

@router.get("/")
def list_documents(
    type: Optional[DocumentType] = None,
    status: Optional[DocumentStatus] = None,
    starred: Optional[bool] = None,
    search: Optional[str] = Query(None, max_length=200),
    paging: PageParams = Depends(page_params),
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """List the caller's documents, most recently updated first."""
    query = db.query(Document).filter(Document.user_id == current_user.id)

    # Apply filters
    if type:
        query = query.filter(Document.type == type)
    if status:
        query = query.filter(Document.status == status)
    if starred is not None:
        query = query.filter(Document.is_starred == starred)
    if search and search.strip():
        term = search.strip()
        query = query.filter(
            or_(
                Document.title.icontains(term, autoescape=True),
                json_array_contains(db, Document.tags, term)
            )
        )

    query = query.order_by(desc(Document.updated_at), desc(Document.id))
    documents, pagination = paginate(query, paging.page, paging.limit)

    return success({
        "documents": [serialize(d) for d in documents],
        "pagination": pagination
    })

@router.post("/upload", status_code=status.HTTP_201_CREATED)
async def upload_document(
    document: UploadFile = File(...),
    title: Optional[str] = Form(None),
    type: DocumentType = Form(DocumentType.OTHER),
    tags: Optional[str] = Form(None),  # Comma separated
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    """Upload a PDF, DOC, DOCX or TXT file and store its extracted text."""
    file_extension = validate_file(document)

    # One byte past the limit is enough to know the file is too large
    content = await document.read(settings.max_file_size + 1)
    if len(content) > settings.max_file_size:
        raise HTTPException(status_code=400, detail="File too large")

    try:
        extracted = extract_text(content, file_extension)
    except TextExtractionError as e:
        logger.warning(f"Upload from user {current_user.id} rejected: {str(e)}")
        raise HTTPException(status_code=400, detail="Could not read the uploaded file")

    if not extracted.text:
        raise HTTPException(status_code=400, detail="No text could be extracted from the document")

    file_path = await save_uploaded_file(content, file_extension, settings.upload_dir)
    mime_type = document.content_type or mimetypes.guess_type(document.filename)[0] or "application/octet-stream"

    db_document = Document(
        user_id=current_user.id,
        title=(title or "").strip() or document.filename,
        type=type,
        file_path=file_path,
        file_name=document.filename,
        file_size=len(content),
        mime_type=mime_type,
        tags=[tag.strip() for tag in tags.split(",") if tag.strip()] if tags else [],
        page_count=extracted.page_count,
        language="en",
        previous_versions=[]
    )
    db_document.set_content(extracted.text)

    try:
        db.add(db_document)
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        await remove_stored_file(file_path)
        raise
    db.refresh(db_document)

    logger.info(f"Document {db_document.id} uploaded by user {current_user.id} ({len(content)} bytes)")
    return success({"document": serialize(db_document)}, "Document uploaded successfully")

@router.get("/{document_id}")
def get_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    document = get_owned_document(db, document_id, current_user)
    return success({"document": serialize(document)})

@router.post("/", status_code=status.HTTP_201_CREATED)
def create_document(
    document_data: DocumentCreate,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    document = Document(
        user_id=current_user.id,
        title=document_data.title,
        type=document_data.type,
        tags=document_data.tags,
        language="en",
        previous_versions=[]
    )
    document.set_content(document_data.content)

    db.add(document)
    db.commit()
    db.refresh(document)

    return success({"document": serialize(document)}, "Document created successfully")

@router.put("/{document_id}")
def update_document(
    document_id: str,
    document_update: DocumentUpdate,
    current_user: User = Depends(get_current_user),
    settings: Settings = Depends(get_settings),
    db: Session = Depends(get_db)
):
    document = get_owned_document(db, document_id, current_user)

    update_data = document_update.model_dump(exclude_unset=True, exclude_none=True)
    content = update_data.pop("content", None)

    for field, value in update_data.items():
        setattr(document, field, value)

    if content is not None:
        document.set_content(content)
        if settings.clear_analysis_on_content_edit:
            document.clear_analysis()

    document.updated_at = utcnow()
    db.commit()
    db.refresh(document)

    return success({"document": serialize(document)}, "Document updated successfully")

@router.delete("/{document_id}")
async def delete_document(
    document_id: str,
    current_user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    document = get_owned_document(db, document_id, current_user)
    file_path = document.file_path

    db.delete(document)
    db.commit()

    if file_path:
        await remove_stored_file(file_path)

    return success(message="Document deleted successfully")

# =====================================================
# AI ACTIONS
# =====================================================

@router.post("/{document_id}/analyze")
async def analyze_document(
    document_id: str,
    current_user: User = Depends(require_pro()),
    ai_service: AIService = Depends(get_ai_service),
    db: Session = Depends(get_db)
):
    """Run clause analysis and attach the result to the document."""
    document = get_owned_document(db, document_id, current_user)

    analysis = await ai_service.analyze_clauses(document.content_original)

    document.clause_analysis = analysis.model_dump(mode="json")
    document.risk_score = analysis.overall_risk
    document.last_analyzed = utcnow()
    document.status = DocumentStatus.ANALYZED
    db.commit()

    return success({"analysis": analysis.model_dump(mode="json")}, "Document analyzed successfully")

@router.post("/{document_id}/simplify")
async def simplify_document(
    document_id: str,
    current_user: User = Depends(require_pro()),
    ai_service: AIService = Depends(get_ai_service),
    db: Session = Depends(get_db)
):
    document = get_owned_document(db, document_id, current_user)

    simplified = await ai_service.simplify(document.content_original)

    original_length = len(document.content_original)
    document.content_simplified = simplified
    document.complexity_score = max(0.0, 100 - len(simplified) / original_length * 100)
    db.commit()

    return success({"simplified": simplified}, "Document simplified successfully")

@router.post("/{document_id}/check-clauses")
async def check_document_clauses(
    document_id: str,
    current_user: User = Depends(require_pro()),
    ai_service: AIService = Depends(get_ai_service),
    db: Session = Depends(get_db)
):
    """Check the document for standard clauses; the clause analysis slot is left untouched."""
    document = get_owned_document(db, document_id, current_user)

    clause_check = await ai_service.check_standard_clauses(document.content_original)

    document.clause_check = clause_check.model_dump(mode="json")
    document.last_analyzed = utcnow()
    db.commit()

    return success({"clause_check": clause_check.model_dump(mode="json")}, "Clause check completed successfully")
