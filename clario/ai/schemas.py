from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any, Literal
from datetime import datetime
import re

from clario.models import RiskLevel


_PERCENT = re.compile(r"^\s*(\d+(?:\.\d+)?)\s*%?\s*$")


def _parse_overall_risk(value: Any) -> float:
    if isinstance(value, bool):
        raise ValueError("overall_risk must be a number or percentage")
    if isinstance(value, (int, float)):
        risk = float(value)
    elif isinstance(value, str) and _PERCENT.match(value):
        risk = float(_PERCENT.match(value).group(1))
    else:
        raise ValueError("overall_risk must be a number or percentage")
    if not 0 <= risk <= 100:
        raise ValueError("overall_risk must lie between 0 and 100")
    return risk


class ProviderModel(BaseModel):
    """Accepts the camelCase keys the provider is prompted with as well as snake_case."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @field_validator("risk_level", mode="before", check_fields=False)
    @classmethod
    def lowercase_risk_level(cls, v):
        return v.strip().lower() if isinstance(v, str) else v


# =====================================================
# GATEWAY RESULTS
# =====================================================

class ClauseFinding(ProviderModel):
    clause: str
    type: str = "general"
    risk_level: RiskLevel
    status: Optional[str] = None
    analysis: Optional[str] = None
    recommendations: List[str] = []
    standard_clause: Optional[str] = None


class ClauseAnalysisResult(ProviderModel):
    clauses: List[ClauseFinding]
    overall_risk: float
    summary: Optional[str] = None

    @field_validator("overall_risk", mode="before")
    @classmethod
    def parse_overall_risk(cls, v):
        return _parse_overall_risk(v)


class StandardClause(ProviderModel):
    name: str
    present: bool
    text: Optional[str] = None
    risk_level: RiskLevel
    recommendation: Optional[str] = None


class ClauseCheckResult(ProviderModel):
    standard_clauses: List[StandardClause]
    missing_clauses: List[str] = []
    non_standard_clauses: List[str] = []
    overall_risk: float

    @field_validator("overall_risk", mode="before")
    @classmethod
    def parse_overall_risk(cls, v):
        return _parse_overall_risk(v)


# =====================================================
# REQUESTS
# =====================================================

class ChatRequest(BaseModel):
    message: str = Field(..., min_length=1, max_length=4000)
    context: Optional[str] = Field(default=None, description="Previous conversation or document context")

    @field_validator("message")
    @classmethod
    def message_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Message cannot be empty")
        return v.strip()


class DocumentTextRequest(BaseModel):
    document_text: str = Field(..., min_length=1)

    @field_validator("document_text")
    @classmethod
    def text_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Document text cannot be empty")
        return v.strip()


class GenerateDocumentRequest(BaseModel):
    type: Literal["nda", "employment", "privacy", "terms", "partnership", "lease"]
    parameters: Dict[str, Any] = {}


# =====================================================
# RESPONSES
# =====================================================

class ChatResponse(BaseModel):
    response: str
    timestamp: datetime
