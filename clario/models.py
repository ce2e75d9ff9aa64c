from sqlalchemy import Column, String, DateTime, Boolean, Enum
from clario.database import Base
from datetime import datetime, timezone
import enum
import uuid


def utcnow() -> datetime:
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def enum_values(enum_cls):
    return [member.value for member in enum_cls]


def enum_column(enum_cls):
    # Persist the enum values ("in-progress"), not the member names
    return Enum(enum_cls, values_callable=enum_values, native_enum=False, length=32)

# =====================================================
# ENUMS
# =====================================================

class SubscriptionPlan(str, enum.Enum):
    FREE = "free"
    PRO = "pro"
    ENTERPRISE = "enterprise"

class DeadlinePriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

class DeadlineStatus(str, enum.Enum):
    UPCOMING = "upcoming"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"

class DeadlineCategory(str, enum.Enum):
    TAX_COMPLIANCE = "tax-compliance"
    INTELLECTUAL_PROPERTY = "intellectual-property"
    CORPORATE_GOVERNANCE = "corporate-governance"
    HR_COMPLIANCE = "hr-compliance"
    DATA_COMPLIANCE = "data-compliance"
    INSURANCE = "insurance"
    IT_COMPLIANCE = "it-compliance"
    VENDOR_MANAGEMENT = "vendor-management"
    OTHER = "other"

class RecurrenceFrequency(str, enum.Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    ANNUALLY = "annually"

class DocumentType(str, enum.Enum):
    CONTRACT = "contract"
    NDA = "nda"
    EMPLOYMENT = "employment"
    PRIVACY = "privacy"
    TERMS = "terms"
    PARTNERSHIP = "partnership"
    LEASE = "lease"
    OTHER = "other"

class DocumentStatus(str, enum.Enum):
    DRAFT = "draft"
    ANALYZED = "analyzed"
    REVIEWED = "reviewed"
    APPROVED = "approved"

class TermCategory(str, enum.Enum):
    CONTRACT = "contract"
    LIABILITY = "liability"
    INTELLECTUAL_PROPERTY = "intellectual-property"
    EMPLOYMENT = "employment"
    CORPORATE = "corporate"
    LITIGATION = "litigation"
    GENERAL = "general"

class TermComplexity(str, enum.Enum):
    BASIC = "basic"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"

class UsageFrequency(str, enum.Enum):
    COMMON = "common"
    UNCOMMON = "uncommon"
    RARE = "rare"

class RiskLevel(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"

# Deadline statuses that automatic recomputation must never overwrite
TERMINAL_DEADLINE_STATUSES = frozenset({DeadlineStatus.COMPLETED, DeadlineStatus.CANCELLED})

# Plans ordered by entitlement, used for subscription gating
PLAN_RANK = {
    SubscriptionPlan.FREE: 0,
    SubscriptionPlan.PRO: 1,
    SubscriptionPlan.ENTERPRISE: 2,
}

# =====================================================
# USER ACCOUNTS
# =====================================================

class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String(255), unique=True, nullable=False, index=True)
    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    password_hash = Column(String(255), nullable=False)
    subscription_plan = Column(enum_column(SubscriptionPlan), default=SubscriptionPlan.FREE, nullable=False)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
    last_login = Column(DateTime)

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()
