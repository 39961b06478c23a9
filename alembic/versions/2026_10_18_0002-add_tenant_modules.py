"""add_tenant_modules

Revision ID: 8f3b6c2e4a10
Revises: 5c1e0a7d2b91
Create Date: 2026-10-18 00:02:00.000000

This migration adds:
- tenant_modules with one row per (tenant_id, module_key)
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "8f3b6c2e4a10"
down_revision: Union[str, None] = "5c1e0a7d2b91"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table(
        "tenant_modules",
        sa.Column("module_key", sa.String(length=50), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False),
        sa.Column("trial_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("id", sa.Uuid(), nullable=False),
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
        sa.Column("tenant_id", sa.Uuid(), nullable=False),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "module_key", name="uq_tenant_modules_key"),
    )
    op.create_index(op.f("ix_tenant_modules_id"), "tenant_modules", ["id"], unique=False)
    op.create_index(
        op.f("ix_tenant_modules_tenant_id"), "tenant_modules", ["tenant_id"], unique=False
    )


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index(op.f("ix_tenant_modules_tenant_id"), table_name="tenant_modules")
    op.drop_index(op.f("ix_tenant_modules_id"), table_name="tenant_modules")
    op.drop_table("tenant_modules")
