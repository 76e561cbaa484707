"""
Dependency injection and shared resources.
Provides the provider bindings and services used by the routes.
"""
from functools import lru_cache
import logging

from ai_gateway.core.config import settings
from ai_gateway.providers import (
    ClaudeVisionProvider,
    GeminiVisionProvider,
    OpenAITextProvider,
    OpenAIVisionProvider,
    RekognitionProvider,
)
from ai_gateway.services.detection_service import DetectionService
from ai_gateway.services.knowledge_base_service import KnowledgeBaseService
from ai_gateway.services.translation_service import TranslationService
from ai_gateway.services.values_service import ValuesService

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_text_provider() -> OpenAITextProvider:
    """Get the text completion model binding"""
    return OpenAITextProvider(settings.get_openai_text_config())


@lru_cache(maxsize=1)
def get_vision_provider() -> OpenAIVisionProvider:
    """Get the default vision-language model binding"""
    return OpenAIVisionProvider(settings.get_openai_vision_config())


def get_translation_service() -> TranslationService:
    return TranslationService(
        get_text_provider(),
        strategy=settings.GLOSSARY_STRATEGY,
        chunk_size=settings.GLOSSARY_CHUNK_SIZE
    )


@lru_cache(maxsize=1)
def get_detection_service() -> DetectionService:
    logger.info("Initializing detection providers")
    return DetectionService(
        openai_provider=get_vision_provider(),
        gemini_provider=GeminiVisionProvider(settings.get_gemini_config()),
        claude_provider=ClaudeVisionProvider(settings.get_claude_config(), max_tokens=settings.CLAUDE_MAX_TOKENS),
        rekognition_provider=RekognitionProvider(
            settings.get_rekognition_config(),
            max_labels=settings.REKOGNITION_MAX_LABELS,
            min_confidence=settings.REKOGNITION_MIN_CONFIDENCE
        )
    )


def get_values_service() -> ValuesService:
    return ValuesService(get_vision_provider())


def get_knowledge_base_service() -> KnowledgeBaseService:
    return KnowledgeBaseService(
        get_text_provider(),
        passage_size=settings.KB_PASSAGE_SIZE,
        max_passages=settings.KB_MAX_PASSAGES,
        fetch_timeout=settings.PDF_FETCH_TIMEOUT
    )
