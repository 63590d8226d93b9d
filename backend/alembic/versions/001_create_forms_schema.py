"""Create accounts, forms and responses tables

Revision ID: 001
Revises: None
Create Date: 2026-10-19 00:00:00.000000+00:00

What:  Initial schema for the form builder.
How:   Generic SQLAlchemy types only (Uuid, JSON, TIMESTAMP) so the same
       migration runs on PostgreSQL and SQLite.

Rollback: downgrade() drops all three tables (destructive).
"""

from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa

# revision identifiers
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create accounts → forms → responses, in foreign key order."""
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        # Legacy document fields, kept for imported records
        sa.Column("legacy_token", sa.String(255), nullable=True),
        sa.Column("form_id", sa.String(64), nullable=True),
        sa.Column("response_ids", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_accounts_username", "accounts", ["username"], unique=True)

    op.create_table(
        "forms",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("owner_id", sa.Uuid(), nullable=False),
        sa.Column("title", sa.String(500), nullable=False),
        sa.Column("form_data", sa.JSON(), nullable=False),
        sa.Column("response_ids", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["owner_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_forms_owner_id", "forms", ["owner_id"])

    op.create_table(
        "responses",
        sa.Column("id", sa.Uuid(), nullable=False),
        sa.Column("form_id", sa.Uuid(), nullable=False),
        sa.Column("response_data", sa.JSON(), nullable=True),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("created_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["form_id"], ["forms.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_responses_form_id", "responses", ["form_id"])


def downgrade() -> None:
    """Drop all tables. WARNING: every account, form and response is lost."""
    op.drop_index("ix_responses_form_id", table_name="responses")
    op.drop_table("responses")
    op.drop_index("ix_forms_owner_id", table_name="forms")
    op.drop_table("forms")
    op.drop_index("ix_accounts_username", table_name="accounts")
    op.drop_table("accounts")
