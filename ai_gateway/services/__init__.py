"""
API Services Package
Contains the orchestration logic behind each endpoint
"""

from .translation_service import TranslationService
from .detection_service import AISelector, DetectionService, parse_selector
from .values_service import ValuesService
from .knowledge_base_service import KnowledgeBaseService

__all__ = [
    'TranslationService',
    'AISelector',
    'DetectionService',
    'parse_selector',
    'ValuesService',
    'KnowledgeBaseService',
]
