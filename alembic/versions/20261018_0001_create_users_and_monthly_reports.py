"""create users and monthly_reports tables

Revision ID: 20261018_0001
Revises:
Create Date: 2026-10-18 09:00:00
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = "20261018_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("username", sa.String(length=150), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False, comment="Division tag or ADMIN"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.UniqueConstraint("username", name="uq_users_username"),
    )
    op.create_index("ix_users_role", "users", ["role"], unique=False)

    op.create_table(
        "monthly_reports",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("user_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("type_of_record", sa.String(length=255), nullable=False),
        sa.Column(
            "period_covered",
            sa.Text(),
            nullable=True,
            comment="Comma-separated sub-period labels",
        ),
        sa.Column("no_of_pages", sa.Integer(), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.ForeignKeyConstraint(
            ["user_id"],
            ["users.id"],
            name="fk_monthly_reports_user_id_users",
            ondelete="CASCADE",
        ),
        sa.PrimaryKeyConstraint("id", name="pk_monthly_reports"),
    )
    op.create_index("ix_monthly_reports_user_id", "monthly_reports", ["user_id"], unique=False)
    op.create_index("ix_monthly_reports_created_at", "monthly_reports", ["created_at"], unique=False)


def downgrade() -> None:
    op.drop_index("ix_monthly_reports_created_at", table_name="monthly_reports")
    op.drop_index("ix_monthly_reports_user_id", table_name="monthly_reports")
    op.drop_table("monthly_reports")
    op.drop_index("ix_users_role", table_name="users")
    op.drop_table("users")
