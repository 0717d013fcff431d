"""create departments, schemes, audit_logs

Revision ID: 20261019_0001
Revises:
Create Date: 2026-10-19 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision = "20261019_0001"
down_revision = None
branch_labels = None
depends_on = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
    ]


def _amount(name: str, comment: str | None = None) -> sa.Column:
    return sa.Column(name, sa.Numeric(18, 2), nullable=False, comment=comment)


def upgrade() -> None:
    # ---------------------------------------------------------------------------
    # departments
    # Grouping key for schemes; created first.
    # ---------------------------------------------------------------------------
    op.create_table(
        "departments",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("name_hn", sa.String(length=255), nullable=True, comment="Department name in Hindi"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_departments"),
        sa.UniqueConstraint("name", name="uq_departments_name"),
    )

    # ---------------------------------------------------------------------------
    # schemes
    # scheme_code is the natural key used by bulk imports.
    # ---------------------------------------------------------------------------
    op.create_table(
        "schemes",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column(
            "scheme_code",
            sa.String(length=13),
            nullable=False,
            comment="Natural key: 13 digits, zero padded",
        ),
        sa.Column("scheme_name", sa.String(length=500), nullable=False),
        sa.Column("financial_year", sa.String(length=9), nullable=True),
        _amount("total_budget_provision"),
        _amount("progressive_allotment"),
        _amount(
            "actual_progressive_expenditure",
            comment="Actual progressive expenditure up to December",
        ),
        _amount("pct_budget_expenditure"),
        _amount("pct_actual_expenditure"),
        _amount("provisional_expenditure_current_month"),
        sa.Column("department_id", postgresql.UUID(as_uuid=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_schemes"),
        sa.UniqueConstraint("scheme_code", name="uq_schemes_scheme_code"),
        sa.ForeignKeyConstraint(
            ["department_id"],
            ["departments.id"],
            name="fk_schemes_department_id_departments",
            ondelete="CASCADE",
        ),
    )
    op.create_index("ix_schemes_department_id", "schemes", ["department_id"], unique=False)
    op.create_index("ix_schemes_financial_year", "schemes", ["financial_year"], unique=False)

    # ---------------------------------------------------------------------------
    # audit_logs
    # ---------------------------------------------------------------------------
    op.create_table(
        "audit_logs",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", sa.String(length=64), nullable=False, comment="Id of the authenticated actor"),
        sa.Column("action", sa.String(length=64), nullable=False),
        sa.Column("module", sa.String(length=32), nullable=False),
        sa.Column("details", postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_audit_logs"),
    )
    op.create_index("ix_audit_logs_user_id", "audit_logs", ["user_id"], unique=False)
    op.create_index("ix_audit_logs_module_action", "audit_logs", ["module", "action"], unique=False)
    op.create_index("ix_audit_logs_created_at", "audit_logs", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_audit_logs_created_at", table_name="audit_logs")
    op.drop_index("ix_audit_logs_module_action", table_name="audit_logs")
    op.drop_index("ix_audit_logs_user_id", table_name="audit_logs")
    op.drop_table("audit_logs")
    op.drop_index("ix_schemes_financial_year", table_name="schemes")
    op.drop_index("ix_schemes_department_id", table_name="schemes")
    op.drop_table("schemes")
    op.drop_table("departments")
