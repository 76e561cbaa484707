"""Core package for the AI Gateway"""
from .config import settings, Settings, ProviderConfig
from .exceptions import (
    GatewayError,
    ValidationError,
    InvalidSelectionError,
    UnsupportedInputError,
    RetrievalError,
    LoadError,
    ProviderError,
    TranslationError
)

__all__ = [
    'settings',
    'Settings',
    'ProviderConfig',
    'GatewayError',
    'ValidationError',
    'InvalidSelectionError',
    'UnsupportedInputError',
    'RetrievalError',
    'LoadError',
    'ProviderError',
    'TranslationError'
]
