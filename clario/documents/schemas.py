from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime
from clario.models import DocumentStatus, DocumentType
from clario.ai.schemas import ClauseAnalysisResult, ClauseCheckResult


def _clean_tags(tags: Optional[List[str]]) -> Optional[List[str]]:
    if tags is None:
        return tags
    return [tag.strip() for tag in tags if tag.strip()]


class DocumentCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    type: DocumentType
    content: str = Field(..., min_length=1)
    tags: List[str] = []

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Content cannot be empty")
        return v

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        return _clean_tags(v)

class DocumentUpdate(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    type: Optional[DocumentType] = None
    content: Optional[str] = Field(None, min_length=1)
    tags: Optional[List[str]] = None
    is_starred: Optional[bool] = None
    is_public: Optional[bool] = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip() if v else v

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Content cannot be empty")
        return v

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_tags(v)

class DocumentVersion(BaseModel):
    content: str
    timestamp: datetime
    changes: Optional[str] = None

class DocumentAnalysis(BaseModel):
    clause_analysis: Optional[ClauseAnalysisResult] = None
    clause_check: Optional[ClauseCheckResult] = None

class DocumentResponse(BaseModel):
    id: str
    user_id: str
    title: str
    type: DocumentType
    status: DocumentStatus
    content_original: str
    content_simplified: Optional[str] = None
    analysis: DocumentAnalysis
    file_name: Optional[str] = None
    file_size: Optional[int] = None
    mime_type: Optional[str] = None
    tags: List[str] = []
    is_starred: bool
    is_public: bool
    word_count: Optional[int] = None
    page_count: Optional[int] = None
    language: Optional[str] = None
    last_analyzed: Optional[datetime] = None
    risk_score: Optional[float] = None
    complexity_score: Optional[float] = None
    version: int = 1
    previous_versions: List[DocumentVersion] = []
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("tags", "previous_versions", mode="before")
    @classmethod
    def default_lists(cls, v):
        return v or []
