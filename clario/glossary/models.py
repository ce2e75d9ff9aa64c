from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey, JSON, Table, Index
from sqlalchemy.orm import relationship, validates
from clario.database import Base
from clario.models import TermCategory, TermComplexity, UsageFrequency, enum_column, utcnow
import uuid


# Directed: a row (A, B) lists B among A's related terms, not the reverse
legal_term_relations = Table(
    "legal_term_relations",
    Base.metadata,
    Column("term_id", String(36), ForeignKey("legal_terms.id", ondelete="CASCADE"), primary_key=True),
    Column("related_term_id", String(36), ForeignKey("legal_terms.id", ondelete="CASCADE"), primary_key=True),
)


class LegalTerm(Base):
    __tablename__ = "legal_terms"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    term = Column(String(255), unique=True, nullable=False)
    display_term = Column(String(255), nullable=False)
    definition = Column(Text, nullable=False)
    category = Column(enum_column(TermCategory), nullable=False)
    complexity = Column(enum_column(TermComplexity), default=TermComplexity.BASIC, nullable=False)

    examples = Column(JSON, default=list)
    synonyms = Column(JSON, default=list)
    antonyms = Column(JSON, default=list)
    usage_frequency = Column(enum_column(UsageFrequency), default=UsageFrequency.COMMON)
    usage_contexts = Column(JSON, default=list)
    legal_references = Column(JSON, default=list)  # [{source, url, description}]
    translations = Column(JSON, default=list)  # [{language, translation}]

    is_active = Column(Boolean, default=True, nullable=False)
    last_updated = Column(DateTime, default=utcnow)
    created_by = Column(String(36), ForeignKey("users.id", ondelete="SET NULL"))
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    related_terms = relationship(
        "LegalTerm",
        secondary=legal_term_relations,
        primaryjoin=id == legal_term_relations.c.term_id,
        secondaryjoin=id == legal_term_relations.c.related_term_id,
    )

    __table_args__ = (
        Index("ix_legal_terms_category", "category"),
        Index("ix_legal_terms_complexity", "complexity"),
        Index("ix_legal_terms_is_active", "is_active"),
    )

    @validates("term")
    def normalize_term(self, key, value):
        return value.strip().lower() if value else value

    @property
    def active_related_terms(self):
        return [related for related in self.related_terms if related.is_active]
