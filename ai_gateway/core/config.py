"""
Core configuration for the AI Gateway.
Centralizes all settings and provider credentials.
"""
from dataclasses import dataclass
from typing import Optional
from pydantic_settings import BaseSettings


@dataclass(frozen=True)
class ProviderConfig:
    """Explicit credentials and transport settings for one provider binding"""
    api_key: str = ""
    model: str = ""
    base_url: str = ""
    timeout: float = 120.0
    max_retries: int = 3
    retry_wait: float = 1.0
    region: Optional[str] = None
    secret_key: Optional[str] = None


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    # API Information
    API_TITLE: str = "AI Gateway"
    API_DESCRIPTION: str = "Vision detection, document Q&A and glossary-aware translation"
    API_VERSION: str = "1.0.0"

    # Server Configuration
    HOST: str = "0.0.0.0"
    PORT: int = 3000
    DEBUG: bool = False

    # OpenAI Configuration
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_TEXT_MODEL: str = "gpt-4o-mini"
    OPENAI_VISION_MODEL: str = "gpt-4o"

    # Gemini Configuration
    GOOGLE_AI_API_KEY: str = ""
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com/v1beta"
    GEMINI_MODEL: str = "gemini-1.5-flash-latest"

    # Claude Configuration
    CLAUDE_API_KEY: str = ""
    CLAUDE_BASE_URL: str = "https://api.anthropic.com/v1"
    CLAUDE_MODEL: str = "claude-3-opus-20240229"
    CLAUDE_MAX_TOKENS: int = 1024

    # AWS Rekognition Configuration
    AWS_ACCESS_KEY_ID: Optional[str] = None
    AWS_SECRET_ACCESS_KEY: Optional[str] = None
    AWS_REGION: str = "us-east-1"
    REKOGNITION_MAX_LABELS: int = 10
    REKOGNITION_MIN_CONFIDENCE: float = 70.0

    # Provider calls
    PROVIDER_TIMEOUT: float = 120.0  # seconds
    PROVIDER_MAX_RETRIES: int = 3
    PROVIDER_RETRY_WAIT: float = 1.0  # seconds, exponential base

    # Translation
    GLOSSARY_STRATEGY: str = "chunked"  # 'chunked' or 'substitution'
    GLOSSARY_CHUNK_SIZE: int = 10000  # characters

    # Knowledge base
    KB_PASSAGE_SIZE: int = 4000  # characters
    KB_MAX_PASSAGES: int = 4
    PDF_FETCH_TIMEOUT: float = 30.0

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # Security
    CORS_ORIGINS: list = ["*"]

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"

    def _provider_config(self, api_key: str, model: str, base_url: str) -> ProviderConfig:
        return ProviderConfig(
            api_key=api_key,
            model=model,
            base_url=base_url.rstrip("/"),
            timeout=self.PROVIDER_TIMEOUT,
            max_retries=self.PROVIDER_MAX_RETRIES,
            retry_wait=self.PROVIDER_RETRY_WAIT
        )

    def get_openai_text_config(self) -> ProviderConfig:
        """Get configuration for the text completion model"""
        return self._provider_config(self.OPENAI_API_KEY, self.OPENAI_TEXT_MODEL, self.OPENAI_BASE_URL)

    def get_openai_vision_config(self) -> ProviderConfig:
        """Get configuration for the default vision-language model"""
        return self._provider_config(self.OPENAI_API_KEY, self.OPENAI_VISION_MODEL, self.OPENAI_BASE_URL)

    def get_gemini_config(self) -> ProviderConfig:
        """Get configuration for the Gemini vision model"""
        return self._provider_config(self.GOOGLE_AI_API_KEY, self.GEMINI_MODEL, self.GEMINI_BASE_URL)

    def get_claude_config(self) -> ProviderConfig:
        """Get configuration for the Claude vision model"""
        return self._provider_config(self.CLAUDE_API_KEY, self.CLAUDE_MODEL, self.CLAUDE_BASE_URL)

    def get_rekognition_config(self) -> ProviderConfig:
        """Get AWS Rekognition client configuration"""
        return ProviderConfig(
            api_key=self.AWS_ACCESS_KEY_ID or "",
            secret_key=self.AWS_SECRET_ACCESS_KEY,
            region=self.AWS_REGION,
            timeout=self.PROVIDER_TIMEOUT,
            max_retries=self.PROVIDER_MAX_RETRIES
        )

    def configured_providers(self) -> dict:
        """Report which provider credentials are present"""
        return {
            "openai": "configured" if self.OPENAI_API_KEY else "missing",
            "gemini": "configured" if self.GOOGLE_AI_API_KEY else "missing",
            "claude": "configured" if self.CLAUDE_API_KEY else "missing",
            "rekognition": "configured" if self.AWS_ACCESS_KEY_ID else "default-chain"
        }


# Create global settings instance
settings = Settings()
