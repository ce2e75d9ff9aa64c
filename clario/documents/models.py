from sqlalchemy import Column, String, Text, DateTime, Boolean, ForeignKey, BigInteger, Integer, Float, JSON, Index
from clario.database import Base
from clario.models import DocumentStatus, DocumentType, enum_column, utcnow
import uuid


def count_words(text: str) -> int:
    return len(text.split()) if text else 0


class Document(Base):
    __tablename__ = "documents"

    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    title = Column(String(255), nullable=False)
    type = Column(enum_column(DocumentType), nullable=False)
    status = Column(enum_column(DocumentStatus), default=DocumentStatus.DRAFT, nullable=False)

    # Content
    content_original = Column(Text, nullable=False)
    content_simplified = Column(Text)
    # Tagged analysis slots, each written only by its own AI action
    clause_analysis = Column(JSON)
    clause_check = Column(JSON)

    # Stored file
    file_path = Column(String(500))
    file_name = Column(String(255))
    file_size = Column(BigInteger)
    mime_type = Column(String(100))

    tags = Column(JSON, default=list)
    is_starred = Column(Boolean, default=False, nullable=False)
    is_public = Column(Boolean, default=False, nullable=False)

    # Metadata
    word_count = Column(Integer, default=0)
    page_count = Column(Integer)
    language = Column(String(10), default="en")
    last_analyzed = Column(DateTime)
    risk_score = Column(Float)
    complexity_score = Column(Float)

    # Versioning
    version = Column(Integer, default=1)
    previous_versions = Column(JSON, default=list)  # [{content, timestamp, changes}]

    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("ix_documents_user_type", "user_id", "type"),
        Index("ix_documents_user_starred", "user_id", "is_starred"),
        Index("ix_documents_user_updated_at", "user_id", "updated_at"),
    )

    def set_content(self, text: str) -> None:
        """Write the original content and keep the word count in step with it."""
        self.content_original = text
        self.word_count = count_words(text)

    def clear_analysis(self) -> None:
        self.clause_analysis = None
        self.clause_check = None
        self.risk_score = None
        self.last_analyzed = None
        self.status = DocumentStatus.DRAFT

    @property
    def analysis(self) -> dict:
        return {
            "clause_analysis": self.clause_analysis,
            "clause_check": self.clause_check,
        }
