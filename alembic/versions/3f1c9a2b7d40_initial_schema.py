"""Initial schema: users, deadlines, documents, legal terms

Revision ID: 3f1c9a2b7d40
Revises:
Create Date: 2026-10-18 09:12:44.120318

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f1c9a2b7d40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _enum(name, *values):
    return sa.Enum(*values, name=name, native_enum=False, length=32)


def upgrade():
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("first_name", sa.String(length=100), nullable=False),
        sa.Column("last_name", sa.String(length=100), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("subscription_plan", _enum("subscriptionplan", "free", "pro", "enterprise"), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.Column("last_login", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "deadlines",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("due_date", sa.DateTime(), nullable=False),
        sa.Column("priority", _enum("deadlinepriority", "low", "medium", "high", "critical"), nullable=False),
        sa.Column(
            "status",
            _enum("deadlinestatus", "upcoming", "in-progress", "completed", "overdue", "cancelled"),
            nullable=False,
        ),
        sa.Column(
            "category",
            _enum(
                "deadlinecategory",
                "tax-compliance", "intellectual-property", "corporate-governance", "hr-compliance",
                "data-compliance", "insurance", "it-compliance", "vendor-management", "other",
            ),
            nullable=False,
        ),
        sa.Column("assigned_to", sa.String(length=255), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("reminder_settings", sa.JSON(), nullable=True),
        sa.Column("notes", sa.JSON(), nullable=True),
        sa.Column("completion_date", sa.DateTime(), nullable=True),
        sa.Column("estimated_hours", sa.Float(), nullable=True),
        sa.Column("actual_hours", sa.Float(), nullable=True),
        sa.Column("cost", sa.JSON(), nullable=True),
        sa.Column("is_recurring", sa.Boolean(), nullable=True),
        sa.Column("recurring_pattern", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_deadlines_user_due_date", "deadlines", ["user_id", "due_date"])
    op.create_index("ix_deadlines_user_status", "deadlines", ["user_id", "status"])
    op.create_index("ix_deadlines_user_priority", "deadlines", ["user_id", "priority"])
    op.create_index("ix_deadlines_user_category", "deadlines", ["user_id", "category"])

    op.create_table(
        "documents",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("title", sa.String(length=255), nullable=False),
        sa.Column(
            "type",
            _enum("documenttype", "contract", "nda", "employment", "privacy", "terms", "partnership", "lease", "other"),
            nullable=False,
        ),
        sa.Column("status", _enum("documentstatus", "draft", "analyzed", "reviewed", "approved"), nullable=False),
        sa.Column("content_original", sa.Text(), nullable=False),
        sa.Column("content_simplified", sa.Text(), nullable=True),
        sa.Column("clause_analysis", sa.JSON(), nullable=True),
        sa.Column("clause_check", sa.JSON(), nullable=True),
        sa.Column("file_path", sa.String(length=500), nullable=True),
        sa.Column("file_name", sa.String(length=255), nullable=True),
        sa.Column("file_size", sa.BigInteger(), nullable=True),
        sa.Column("mime_type", sa.String(length=100), nullable=True),
        sa.Column("tags", sa.JSON(), nullable=True),
        sa.Column("is_starred", sa.Boolean(), nullable=False),
        sa.Column("is_public", sa.Boolean(), nullable=False),
        sa.Column("word_count", sa.Integer(), nullable=True),
        sa.Column("page_count", sa.Integer(), nullable=True),
        sa.Column("language", sa.String(length=10), nullable=True),
        sa.Column("last_analyzed", sa.DateTime(), nullable=True),
        sa.Column("risk_score", sa.Float(), nullable=True),
        sa.Column("complexity_score", sa.Float(), nullable=True),
        sa.Column("version", sa.Integer(), nullable=True),
        sa.Column("previous_versions", sa.JSON(), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_documents_user_type", "documents", ["user_id", "type"])
    op.create_index("ix_documents_user_starred", "documents", ["user_id", "is_starred"])
    op.create_index("ix_documents_user_updated_at", "documents", ["user_id", "updated_at"])

    op.create_table(
        "legal_terms",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("term", sa.String(length=255), nullable=False),
        sa.Column("display_term", sa.String(length=255), nullable=False),
        sa.Column("definition", sa.Text(), nullable=False),
        sa.Column(
            "category",
            _enum(
                "termcategory",
                "contract", "liability", "intellectual-property", "employment", "corporate", "litigation", "general",
            ),
            nullable=False,
        ),
        sa.Column("complexity", _enum("termcomplexity", "basic", "intermediate", "advanced"), nullable=False),
        sa.Column("examples", sa.JSON(), nullable=True),
        sa.Column("synonyms", sa.JSON(), nullable=True),
        sa.Column("antonyms", sa.JSON(), nullable=True),
        sa.Column("usage_frequency", _enum("usagefrequency", "common", "uncommon", "rare"), nullable=True),
        sa.Column("usage_contexts", sa.JSON(), nullable=True),
        sa.Column("legal_references", sa.JSON(), nullable=True),
        sa.Column("translations", sa.JSON(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("last_updated", sa.DateTime(), nullable=True),
        sa.Column("created_by", sa.String(length=36), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=True),
        sa.Column("updated_at", sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(["created_by"], ["users.id"], ondelete="SET NULL"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("term"),
    )
    op.create_index("ix_legal_terms_category", "legal_terms", ["category"])
    op.create_index("ix_legal_terms_complexity", "legal_terms", ["complexity"])
    op.create_index("ix_legal_terms_is_active", "legal_terms", ["is_active"])

    op.create_table(
        "legal_term_relations",
        sa.Column("term_id", sa.String(length=36), nullable=False),
        sa.Column("related_term_id", sa.String(length=36), nullable=False),
        sa.ForeignKeyConstraint(["term_id"], ["legal_terms.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["related_term_id"], ["legal_terms.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("term_id", "related_term_id"),
    )


def downgrade():
    op.drop_table("legal_term_relations")
    op.drop_index("ix_legal_terms_is_active", table_name="legal_terms")
    op.drop_index("ix_legal_terms_complexity", table_name="legal_terms")
    op.drop_index("ix_legal_terms_category", table_name="legal_terms")
    op.drop_table("legal_terms")
    op.drop_index("ix_documents_user_updated_at", table_name="documents")
    op.drop_index("ix_documents_user_starred", table_name="documents")
    op.drop_index("ix_documents_user_type", table_name="documents")
    op.drop_table("documents")
    op.drop_index("ix_deadlines_user_category", table_name="deadlines")
    op.drop_index("ix_deadlines_user_priority", table_name="deadlines")
    op.drop_index("ix_deadlines_user_status", table_name="deadlines")
    op.drop_index("ix_deadlines_user_due_date", table_name="deadlines")
    op.drop_table("deadlines")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
