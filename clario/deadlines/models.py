from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey, Float, JSON, Index
from clario.database import Base
from clario.models import (
    DeadlineCategory, DeadlinePriority, DeadlineStatus, enum_column, utcnow
)
from clario.services.deadline_service import days_remaining
import uuid


class Deadline(Base):
    __tablename__ = "deadlines"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    due_date = Column(DateTime, nullable=False)
    priority = Column(enum_column(DeadlinePriority), default=DeadlinePriority.MEDIUM, nullable=False)
    status = Column(enum_column(DeadlineStatus), default=DeadlineStatus.UPCOMING, nullable=False)
    category = Column(enum_column(DeadlineCategory), nullable=False)
    assigned_to = Column(String(255))
    tags = Column(JSON, default=list)

    # {enabled, days_before: [7, 3, 1], email_reminder, push_reminder}
    reminder_settings = Column(JSON)
    # Append-only list of {content, timestamp, author}
    notes = Column(JSON, default=list)

    completion_date = Column(DateTime)
    estimated_hours = Column(Float)
    actual_hours = Column(Float)
    cost = Column(JSON)  # {amount, currency}
    is_recurring = Column(Boolean, default=False)
    recurring_pattern = Column(JSON)  # {frequency, interval, end_date}

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_deadlines_user_due_date", "user_id", "due_date"),
        Index("ix_deadlines_user_status", "user_id", "status"),
        Index("ix_deadlines_user_priority", "user_id", "priority"),
        Index("ix_deadlines_user_category", "user_id", "category"),
    )

    @property
    def days_remaining(self) -> int:
        return days_remaining(self.due_date)
