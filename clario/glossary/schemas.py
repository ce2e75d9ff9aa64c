from pydantic import BaseModel, ConfigDict, field_validator
from typing import Optional, List
from datetime import datetime
from clario.models import TermCategory, TermComplexity, UsageFrequency


class LegalReference(BaseModel):
    source: Optional[str] = None
    url: Optional[str] = None
    description: Optional[str] = None

class Translation(BaseModel):
    language: str
    translation: str

class RelatedTerm(BaseModel):
    id: str
    display_term: str
    definition: str
    category: TermCategory
    complexity: TermComplexity

    model_config = ConfigDict(from_attributes=True)

class LegalTermResponse(BaseModel):
    id: str
    term: str
    display_term: str
    definition: str
    category: TermCategory
    complexity: TermComplexity
    examples: List[str] = []
    synonyms: List[str] = []
    antonyms: List[str] = []
    usage_frequency: Optional[UsageFrequency] = None
    usage_contexts: List[str] = []
    legal_references: List[LegalReference] = []
    translations: List[Translation] = []
    last_updated: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator(
        "examples", "synonyms", "antonyms", "usage_contexts", "legal_references", "translations",
        mode="before"
    )
    @classmethod
    def default_lists(cls, v):
        return v or []

class CategoryCount(BaseModel):
    category: TermCategory
    count: int
