from typing import Optional

from pydantic import BaseModel, ConfigDict


class CleanTranscriptRequest(BaseModel):
    transcript: Optional[str] = None


class GenerateContentRequest(BaseModel):
    transcript: Optional[str] = None
    videoTitle: Optional[str] = None


class CleanTranscriptResponse(BaseModel):
    cleanedTranscript: str


class FAQ(BaseModel):
    question: str
    answer: str


class GeneratedContent(BaseModel):
    """Shape requested from the model. Extra keys are passed through untouched."""

    model_config = ConfigDict(extra="allow")

    seoTitle: str
    metaDescription: str
    faqs: list[FAQ]
    keyTakeaways: list[str]
    schemaMarkup: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str


class HealthResponse(BaseModel):
    status: str
    timestamp: str
