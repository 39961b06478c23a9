"""add_tenants_users_scopes_rota

Revision ID: 5c1e0a7d2b91
Revises:
Create Date: 2026-10-01 00:01:00.000000

This migration adds:
- tenants with unique slug, settings document and subscription status
- users carrying legacy location/department columns
- user_scopes with the (user_id, location, department) primary key
- rota_weeks and rota_shifts carrying location/department columns
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "5c1e0a7d2b91"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.func.now(),
            nullable=False,
        ),
    ]


def _scope_columns() -> list[sa.Column]:
    return [
        sa.Column("location", sa.String(length=120), nullable=True),
        sa.Column("department", sa.String(length=120), nullable=True),
    ]


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "tenants",
        sa.Column("slug", sa.String(length=63), nullable=False),
        sa.Column("legal_name", sa.String(length=255), nullable=False),
        sa.Column("settings", sa.JSON(), nullable=False),
        sa.Column("subscription_status", sa.String(length=20), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_tenants_id"), "tenants", ["id"], unique=False)
    op.create_index(op.f("ix_tenants_slug"), "tenants", ["slug"], unique=True)

    op.create_table(
        "users",
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("full_name", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        *_scope_columns(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_users_id"), "users", ["id"], unique=False)
    op.create_index(op.f("ix_users_email"), "users", ["email"], unique=False)
    op.create_index(op.f("ix_users_tenant_id"), "users", ["tenant_id"], unique=False)
    op.create_index(op.f("ix_users_location"), "users", ["location"], unique=False)
    op.create_index(op.f("ix_users_department"), "users", ["department"], unique=False)

    op.create_table(
        "user_scopes",
        sa.Column("user_id", sa.Uuid(), nullable=False),
        sa.Column("location", sa.String(length=120), nullable=False),
        sa.Column("department", sa.String(length=120), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id", "location", "department"),
    )

    op.create_table(
        "rota_weeks",
        sa.Column("week_start", sa.Date(), nullable=False),
        sa.Column("status", sa.String(length=20), nullable=False),
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        *_scope_columns(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_rota_weeks_id"), "rota_weeks", ["id"], unique=False)
    op.create_index(op.f("ix_rota_weeks_week_start"), "rota_weeks", ["week_start"], unique=False)
    op.create_index(op.f("ix_rota_weeks_tenant_id"), "rota_weeks", ["tenant_id"], unique=False)
    op.create_index(op.f("ix_rota_weeks_location"), "rota_weeks", ["location"], unique=False)
    op.create_index(op.f("ix_rota_weeks_department"), "rota_weeks", ["department"], unique=False)

    op.create_table(
        "rota_shifts",
        sa.Column("week_id", sa.Uuid(), nullable=False),
        sa.Column("user_id", sa.Uuid(), nullable=True),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("start_time", sa.Time(), nullable=False),
        sa.Column("end_time", sa.Time(), nullable=False),
        sa.Column("role", sa.String(length=100), nullable=True),
        sa.Column("id", sa.Uuid(), nullable=False),
        *_timestamps(),
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        *_scope_columns(),
        sa.ForeignKeyConstraint(["week_id"], ["rota_weeks.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="SET NULL"),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_rota_shifts_id"), "rota_shifts", ["id"], unique=False)
    op.create_index(op.f("ix_rota_shifts_week_id"), "rota_shifts", ["week_id"], unique=False)
    op.create_index(op.f("ix_rota_shifts_user_id"), "rota_shifts", ["user_id"], unique=False)
    op.create_index(op.f("ix_rota_shifts_tenant_id"), "rota_shifts", ["tenant_id"], unique=False)
    op.create_index(op.f("ix_rota_shifts_location"), "rota_shifts", ["location"], unique=False)
    op.create_index(
        op.f("ix_rota_shifts_department"), "rota_shifts", ["department"], unique=False
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_table("rota_shifts")
    op.drop_table("rota_weeks")
    op.drop_table("user_scopes")
    op.drop_table("users")
    op.drop_table("tenants")
