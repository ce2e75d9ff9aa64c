from fastapi import APIRouter, Depends
import logging

from clario.ai.schemas import ChatRequest, ChatResponse, DocumentTextRequest, GenerateDocumentRequest
from clario.auth.dependencies import get_current_user, require_pro
from clario.models import User, utcnow
from clario.responses import success
from clario.services.ai_service import AIService, get_ai_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/ai", tags=["AI Assistant"])


@router.post("/chat")
async def chat(
    request: ChatRequest,
    current_user: User = Depends(get_current_user),
    ai_service: AIService = Depends(get_ai_service)
):
    """Free-form legal question; available on every plan."""
    logger.info(f"Chat request from user {current_user.id} - message length: {len(request.message)}")
    response = await ai_service.chat(request.message, request.context)

    chat_response = ChatResponse(response=response, timestamp=utcnow())
    return success(chat_response.model_dump(mode="json"))

@router.post("/analyze-clauses")
async def analyze_clauses(
    request: DocumentTextRequest,
    current_user: User = Depends(require_pro()),
    ai_service: AIService = Depends(get_ai_service)
):
    analysis = await ai_service.analyze_clauses(request.document_text)
    return success({"analysis": analysis.model_dump(mode="json")})

@router.post("/simplify-document")
async def simplify_document(
    request: DocumentTextRequest,
    current_user: User = Depends(require_pro()),
    ai_service: AIService = Depends(get_ai_service)
):
    simplified = await ai_service.simplify(request.document_text)
    return success({"simplified": simplified})

@router.post("/check-standard-clauses")
async def check_standard_clauses(
    request: DocumentTextRequest,
    current_user: User = Depends(require_pro()),
    ai_service: AIService = Depends(get_ai_service)
):
    clause_check = await ai_service.check_standard_clauses(request.document_text)
    return success({"clause_check": clause_check.model_dump(mode="json")})

@router.post("/generate-document")
async def generate_document(
    request: GenerateDocumentRequest,
    current_user: User = Depends(require_pro()),
    ai_service: AIService = Depends(get_ai_service)
):
    """Draft a new legal document of the requested type. Nothing is stored."""
    logger.info(f"Generating {request.type} document for user {current_user.id}")
    document = await ai_service.generate_document(request.type, request.parameters)
    return success({"document": document, "type": request.type})
