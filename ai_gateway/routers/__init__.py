"""
API Routers Package
"""

# Import all routers here
from .system import router as system_router
from .translation import router as translation_router
from .detection import router as detection_router
from .values import router as values_router
from .knowledge_base import router as knowledge_base_router

__all__ = [
    'system_router',
    'translation_router',
    'detection_router',
    'values_router',
    'knowledge_base_router',
]
