"""create_tenancy_warnings_table

Create the append-only tenancy_warnings table. Soft-mode enforcement
writes one row per warning when TENANCY_WARN_PERSIST is enabled.

Revision ID: 3c5e7a9b1d2f
Revises:
Create Date: 2026-10-18 09:12:41.502113

"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op


# revision identifiers, used by Alembic.
revision: str = "3c5e7a9b1d2f"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "tenancy_warnings",
        sa.Column("id", sa.String(length=26), nullable=False),  # ULID
        sa.Column("occurred_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("route", sa.Text(), nullable=False),
        sa.Column("method", sa.String(length=16), nullable=False),
        sa.Column(
            "warn_type", sa.String(length=32), nullable=False
        ),  # mismatch | missing-tenantId
        sa.Column("actor_user_id", sa.String(length=255), nullable=True),
        sa.Column("effective_tenant_id", sa.String(length=255), nullable=True),
        sa.Column("resource_id", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "tenancy_warnings_occurred_at_idx",
        "tenancy_warnings",
        ["occurred_at"],
        unique=False,
    )
    op.create_index(
        "tenancy_warnings_warn_type_idx",
        "tenancy_warnings",
        ["warn_type"],
        unique=False,
    )
    op.create_index(
        "tenancy_warnings_tenant_idx",
        "tenancy_warnings",
        ["effective_tenant_id"],
        unique=False,
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("tenancy_warnings_tenant_idx", table_name="tenancy_warnings")
    op.drop_index("tenancy_warnings_warn_type_idx", table_name="tenancy_warnings")
    op.drop_index("tenancy_warnings_occurred_at_idx", table_name="tenancy_warnings")
    op.drop_table("tenancy_warnings")
