"""
Translation Router - API endpoint for glossary-aware translation
Handles the /translate endpoint
"""

from fastapi import APIRouter, Depends, File, Form, UploadFile
from typing import Optional
import logging

from ai_gateway.core.dependencies import get_translation_service
from ai_gateway.core.exceptions import CLIENT_ERRORS, TranslationError, ValidationError
from ai_gateway.schemas import TranslationResponse
from ai_gateway.services.translation_service import TranslationService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/translate", response_model=TranslationResponse)
async def translate_text(
    text: Optional[str] = Form(None, description="Text to translate"),
    sourceLang: Optional[str] = Form(None, description="Source language code"),
    targetLang: Optional[str] = Form(None, description="Target language code"),
    glossary: Optional[UploadFile] = File(None, description="Glossary spreadsheet (.xlsx, .xls or .csv)"),
    service: TranslationService = Depends(get_translation_service)
):
    """
    Translate text from one language to another

    **Glossary:**
    - Optional spreadsheet; row 1 holds headers, column 1 the source term
    - Translation columns are keyed by language code
    - Terms found in the glossary are translated consistently

    **Response:**
    - `translatedText`: The translated text
    """
    if not text or not sourceLang or not targetLang:
        raise ValidationError("Form data is required")

    try:
        glossary_data = None
        glossary_filename = None
        if glossary is not None:
            glossary_data = await glossary.read()
            glossary_filename = glossary.filename

        translated = await service.translate(
            text,
            sourceLang,
            targetLang,
            glossary=glossary_data,
            glossary_filename=glossary_filename
        )
        return TranslationResponse(translatedText=translated)

    except CLIENT_ERRORS:
        raise
    except Exception as e:
        logger.error(f"Translation error: {str(e)}", exc_info=True)
        raise TranslationError("Failed to translate text")
