"""
Knowledge Base Router - API endpoint for Q&A over a PDF
Handles the /retrieval endpoint
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from typing import List, Optional
import logging

from ai_gateway.core.dependencies import get_knowledge_base_service
from ai_gateway.core.exceptions import CLIENT_ERRORS, ProviderError, ValidationError
from ai_gateway.schemas import KnowledgeBaseResponse
from ai_gateway.services.knowledge_base_service import KnowledgeBaseService, normalize_question

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/retrieval", response_model=KnowledgeBaseResponse)
async def get_knowledge_base(
    question: Optional[List[str]] = Form(None, description="Question(s) about the document"),
    file: Optional[UploadFile] = File(None, description="PDF document"),
    pdfUrl: Optional[str] = Form(None, description="URL of a PDF document"),
    service: KnowledgeBaseService = Depends(get_knowledge_base_service)
):
    """
    Answer a question using the content of a PDF

    **Document source:**
    - `file`: Uploaded PDF (takes priority)
    - `pdfUrl`: Remote PDF, fetched by the server

    **Response:**
    - `answer`: Answer built from the most relevant passages
    """
    if not question or not normalize_question(question) or (file is None and not pdfUrl):
        raise ValidationError("Invalid request")

    file_data = await file.read() if file is not None else None
    pdf_bytes = await service.load_document(file_data, pdfUrl)

    try:
        answer = await service.analyze_pdf(question, pdf_bytes)
        return KnowledgeBaseResponse(answer=answer)

    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.error(f"Knowledge base error: {str(e)}", exc_info=True)
        raise ProviderError("Failed to analyze the document")
