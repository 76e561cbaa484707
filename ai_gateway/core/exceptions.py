"""
Error types raised across the gateway.

Every error carries the HTTP status it maps to. Input-preparation errors
keep their message for the caller; provider errors are replaced by a
generic message at the router boundary.
"""


class GatewayError(Exception):
    """Base class for all gateway errors"""
    status_code = 500
    default_message = "An error occurred"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message or self.default_message


class ValidationError(GatewayError):
    """Required request fields are missing or malformed"""
    status_code = 400
    default_message = "Invalid request"


class InvalidSelectionError(GatewayError):
    """The provider selector is not one of the supported providers"""
    status_code = 400
    default_message = "Invalid AI selection"


class UnsupportedInputError(GatewayError):
    """An input source is neither a readable path nor a byte buffer"""
    status_code = 400
    default_message = "Unsupported file format"


class RetrievalError(GatewayError):
    """Fetching a remote document failed"""
    status_code = 400

    def __init__(self, message: str = "", status: int = None):
        super().__init__(message)
        self.status = status


class LoadError(GatewayError):
    """A glossary or PDF could not be parsed, or parsed to nothing"""
    status_code = 400


class ProviderError(GatewayError):
    """The AI backend call failed or returned unusable output"""
    status_code = 500
    default_message = "AI provider request failed"


class TranslationError(ProviderError):
    """The language model failed while translating"""
    default_message = "Failed to translate text"


# Errors raised while preparing inputs; their message is safe to return
CLIENT_ERRORS = (
    ValidationError,
    InvalidSelectionError,
    UnsupportedInputError,
    RetrievalError,
    LoadError,
)
