from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, List
from datetime import datetime, timezone
from clario.models import DeadlineCategory, DeadlinePriority, DeadlineStatus, RecurrenceFrequency


def to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Timestamps are stored as naive UTC; offset-aware input is converted."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class Cost(BaseModel):
    amount: float = Field(..., ge=0)
    currency: str = Field("USD", min_length=3, max_length=3)

class RecurringPattern(BaseModel):
    frequency: RecurrenceFrequency
    interval: int = Field(1, ge=1)
    end_date: Optional[datetime] = None

    @field_validator("end_date")
    @classmethod
    def normalize_end_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)

class ReminderSettings(BaseModel):
    enabled: bool = True
    days_before: List[int] = []
    email_reminder: bool = True
    push_reminder: bool = True

class Note(BaseModel):
    content: str
    timestamp: datetime
    author: Optional[str] = None


class DeadlineBase(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    due_date: datetime
    priority: DeadlinePriority = DeadlinePriority.MEDIUM
    category: DeadlineCategory
    assigned_to: Optional[str] = Field(None, max_length=255)
    tags: List[str] = []
    estimated_hours: Optional[float] = Field(None, ge=0)
    cost: Optional[Cost] = None
    reminder_settings: Optional[ReminderSettings] = None
    is_recurring: bool = False
    recurring_pattern: Optional[RecurringPattern] = None

class DeadlineCreate(DeadlineBase):
    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip()

    @field_validator("due_date")
    @classmethod
    def normalize_due_date(cls, v: datetime) -> datetime:
        return to_naive_utc(v)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: List[str]) -> List[str]:
        return [tag.strip() for tag in v if tag.strip()]

class DeadlineUpdate(BaseModel):
    """Partial update: only fields present in the request body are written."""
    title: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    priority: Optional[DeadlinePriority] = None
    status: Optional[DeadlineStatus] = None
    category: Optional[DeadlineCategory] = None
    assigned_to: Optional[str] = Field(None, max_length=255)
    tags: Optional[List[str]] = None
    estimated_hours: Optional[float] = Field(None, ge=0)
    actual_hours: Optional[float] = Field(None, ge=0)
    cost: Optional[Cost] = None
    reminder_settings: Optional[ReminderSettings] = None
    completion_date: Optional[datetime] = None
    is_recurring: Optional[bool] = None
    recurring_pattern: Optional[RecurringPattern] = None
    # Appended to the deadline's notes, never replaces them
    notes: Optional[str] = Field(None, min_length=1)

    # Omitting these leaves them unchanged; an explicit null is rejected
    @field_validator("title", "due_date", "priority", "status", "category", "tags", "is_recurring")
    @classmethod
    def reject_null(cls, v):
        if v is None:
            raise ValueError("Field cannot be null")
        return v

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not v.strip():
            raise ValueError("Title cannot be empty")
        return v.strip() if v else v

    @field_validator("due_date", "completion_date")
    @classmethod
    def normalize_dates(cls, v: Optional[datetime]) -> Optional[datetime]:
        return to_naive_utc(v)

    @field_validator("tags")
    @classmethod
    def clean_tags(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        if v is None:
            return v
        return [tag.strip() for tag in v if tag.strip()]

class DeadlineResponse(DeadlineBase):
    id: str
    user_id: str
    status: DeadlineStatus
    days_remaining: int
    notes: List[Note] = []
    actual_hours: Optional[float] = None
    completion_date: Optional[datetime] = None
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @field_validator("tags", "notes", mode="before")
    @classmethod
    def default_lists(cls, v):
        return v or []

class DeadlineSummary(BaseModel):
    id: str
    title: str
    due_date: datetime
    priority: DeadlinePriority
    status: DeadlineStatus
    days_remaining: int

    model_config = ConfigDict(from_attributes=True)
