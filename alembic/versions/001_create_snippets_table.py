"""Create snippets table

Revision ID: 001
Revises: None
Create Date: 2026-10-18 00:00:00.000000+00:00

What:  Creates the `snippets` table and its created_at index.
Rollback: downgrade() drops the table entirely (destructive — all data lost).
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
    """Create the snippets table; see snippetbox/models/snippet.py for column docs."""
    op.create_table(
        "snippets",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("title", sa.String(100), nullable=False),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="When this snippet was created (UTC)",
        ),
        sa.Column(
            "expires_at",
            sa.DateTime(timezone=True),
            nullable=False,
            comment="After this instant the snippet is no longer served (UTC)",
        ),
        sa.PrimaryKeyConstraint("id"),
    )

    # Serves the home page query: ORDER BY created_at DESC LIMIT 10
    op.create_index(
        "idx_snippets_created_at",
        "snippets",
        [sa.text("created_at DESC")],
    )


def downgrade() -> None:
    """Drop the snippets table. WARNING: all snippet data is lost."""
    op.drop_index("idx_snippets_created_at", table_name="snippets")
    op.drop_table("snippets")
