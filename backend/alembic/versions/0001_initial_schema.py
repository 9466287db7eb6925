"""initial_schema

Revision ID: 0001
Revises:
Create Date: 2026-10-18

Creates the computation-tree tables: users, discussions, operations.
Starting numbers are unique across discussions; operations cascade with
their discussion and with their parent operation.
"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

user_role = sa.Enum("registered", "guest", name="userrole")
operation_type = sa.Enum("add", "subtract", "multiply", "divide", name="operationtype")


def upgrade() -> None:
    # --- users ---
    op.create_table(
        "users",
        sa.Column("user_id", sa.String(36), primary_key=True),
        sa.Column("username", sa.String(100), nullable=False, unique=True),
        sa.Column("email", sa.String(255), nullable=True, unique=True),
        sa.Column("role", user_role, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )

    # --- discussions ---
    op.create_table(
        "discussions",
        sa.Column("discussion_id", sa.String(36), primary_key=True),
        sa.Column("starting_number", sa.Float, nullable=False),
        sa.Column("author_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("starting_number", name="uq_discussions_starting_number"),
    )
    op.create_index("ix_discussions_author_id", "discussions", ["author_id"])

    # --- operations ---
    op.create_table(
        "operations",
        sa.Column("operation_id", sa.String(36), primary_key=True),
        sa.Column(
            "discussion_id",
            sa.String(36),
            sa.ForeignKey("discussions.discussion_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "parent_id",
            sa.String(36),
            sa.ForeignKey("operations.operation_id", ondelete="CASCADE"),
            nullable=True,
        ),
        sa.Column("operation_type", operation_type, nullable=False),
        sa.Column("operand", sa.Float, nullable=False),
        sa.Column("result", sa.Float, nullable=False),
        sa.Column("author_id", sa.String(36), sa.ForeignKey("users.user_id"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_operations_discussion_id", "operations", ["discussion_id"])
    op.create_index("ix_operations_parent_id", "operations", ["parent_id"])
    op.create_index("ix_operations_author_id", "operations", ["author_id"])


def downgrade() -> None:
    op.drop_index("ix_operations_author_id", table_name="operations")
    op.drop_index("ix_operations_parent_id", table_name="operations")
    op.drop_index("ix_operations_discussion_id", table_name="operations")
    op.drop_table("operations")
    op.drop_index("ix_discussions_author_id", table_name="discussions")
    op.drop_table("discussions")
    op.drop_table("users")
    operation_type.drop(op.get_bind(), checkfirst=True)
    user_role.drop(op.get_bind(), checkfirst=True)
