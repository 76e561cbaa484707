"""
Provider Bindings Package
Uniform wrappers around the external AI backends
"""

from .base import DetectionAction, HTTPProvider, RetryableProviderError, build_image_prompt
from .openai_provider import OpenAITextProvider, OpenAIVisionProvider
from .gemini_provider import GeminiVisionProvider
from .claude_provider import ClaudeVisionProvider
from .rekognition_provider import RekognitionProvider

__all__ = [
    'DetectionAction',
    'HTTPProvider',
    'RetryableProviderError',
    'build_image_prompt',
    'OpenAITextProvider',
    'OpenAIVisionProvider',
    'GeminiVisionProvider',
    'ClaudeVisionProvider',
    'RekognitionProvider',
]
