"""Initial schema with accounts and their owned records

Revision ID: 001
Revises:
Create Date: 2024-01-01 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps():
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    ]


def _account_owned(table_name: str, *columns, constraints=()):
    op.create_table(
        table_name,
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("account_id", sa.Uuid(as_uuid=True), nullable=False),
        *columns,
        *_timestamps(),
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"], ondelete="CASCADE"),
        *constraints,
    )
    op.create_index(f"ix_{table_name}_account_id", table_name, ["account_id"])


def upgrade() -> None:
    # Create accounts table
    op.create_table(
        "accounts",
        sa.Column("id", sa.Uuid(as_uuid=True), primary_key=True),
        sa.Column("name", sa.String(255)),
        sa.Column("has_access_to_paid_version_for_free", sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column("subscription_status", sa.String(20), nullable=False, server_default="none"),
        sa.Column("subscription_plan", sa.String(100)),
        sa.Column("subscription_ends_at", sa.DateTime(timezone=True)),
        *_timestamps(),
        sa.CheckConstraint(
            "subscription_status IN ('none', 'active', 'past_due', 'cancelled')",
            name="valid_subscription_status",
        ),
    )
    op.create_index("idx_accounts_subscription_status", "accounts", ["subscription_status"])

    # Create users table
    _account_owned(
        "users",
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("first_name", sa.String(100)),
        sa.Column("last_name", sa.String(100)),
        constraints=(sa.UniqueConstraint("email"),),
    )

    # Create invitations table
    _account_owned(
        "invitations",
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("invited_by_user_id", sa.Uuid(as_uuid=True)),
        constraints=(
            sa.ForeignKeyConstraint(["invited_by_user_id"], ["users.id"], ondelete="SET NULL"),
        ),
    )

    # Create contacts table
    _account_owned(
        "contacts",
        sa.Column("first_name", sa.String(100), nullable=False),
        sa.Column("last_name", sa.String(100)),
        sa.Column("is_active", sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column("is_partial", sa.Boolean, nullable=False, server_default=sa.false()),
    )
    op.create_index("idx_contacts_account_state", "contacts", ["account_id", "is_partial", "is_active"])

    # Create activities table
    _account_owned(
        "activities",
        sa.Column("summary", sa.Text),
        sa.Column("happened_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("idx_activities_account_happened_at", "activities", ["account_id", "happened_at"])

    # Create calls table
    _account_owned(
        "calls",
        sa.Column("contact_id", sa.Uuid(as_uuid=True), nullable=False),
        sa.Column("content", sa.Text),
        sa.Column("called_at", sa.DateTime(timezone=True), nullable=False),
        constraints=(
            sa.ForeignKeyConstraint(["contact_id"], ["contacts.id"], ondelete="CASCADE"),
        ),
    )
    op.create_index("idx_calls_account_called_at", "calls", ["account_id", "called_at"])
    op.create_index("idx_calls_contact_id", "calls", ["contact_id"])


def downgrade() -> None:
    # Drop tables in reverse order
    op.drop_table("calls")
    op.drop_table("activities")
    op.drop_table("contacts")
    op.drop_table("invitations")
    op.drop_table("users")
    op.drop_table("accounts")
