"""
Pydantic schemas for API responses.
Field names follow the public JSON contract.
"""
from pydantic import BaseModel, Field
from typing import List, Dict, Optional


class ErrorResponse(BaseModel):
    """Error body returned by every endpoint"""
    error: str = Field(..., description="Error message")


class TranslationResponse(BaseModel):
    """Response model for translation"""
    translatedText: str = Field(..., description="Translated text")


class DetectionResponse(BaseModel):
    """Response model for item detection"""
    detectedItems: Optional[str] = Field(None, description="Provider answer; null when the provider returned nothing")


class MeasurementsResponse(BaseModel):
    """Response model for rough measurements"""
    measurements: Optional[str] = Field(None, description="Provider answer; null when the provider returned nothing")


class KnowledgeBaseResponse(BaseModel):
    """Response model for document Q&A"""
    answer: str = Field(..., description="Answer to the question")


class FieldValue(BaseModel):
    """A field read from an image and its value"""
    field: str
    value: str


class ValuesResponse(BaseModel):
    """Response model for field extraction"""
    response: List[FieldValue] = Field(..., description="Extracted field/value pairs")


class HealthResponse(BaseModel):
    """Response model for health check"""
    status: str
    timestamp: str
    services: Optional[Dict[str, str]] = None
    version: str


class SystemInfoResponse(BaseModel):
    """Response model for system information"""
    message: str
    version: str
    endpoints: Dict[str, str]
    providers: List[str]
    glossary_strategy: str
