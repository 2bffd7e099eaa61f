"""
Snippetbox — Snippet SQLAlchemy Model
======================================

What:  ORM model representing the `snippets` table.
Why:   Maps Python objects to database rows; Alembic reads it for migrations.
Who:   Used by SnippetStore for Insert / Get / Latest.

Table Design Rationale:
    - Integer auto-increment primary key: ids appear in page URLs
      (/snippet/view/42), so short sequential ids are the point.
    - title: VARCHAR(100), matching the form's 100-character limit.
    - content: TEXT, no length limit.
    - created_at / expires_at: timestamps with time zone, always written in
      UTC by the store. Rows are never updated or deleted; an expired snippet
      simply stops matching the `expires_at > now` filter.

    Index on created_at DESC serves the home page query (latest 10).
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from snippetbox.database import Base


class Snippet(Base):
    """A stored text entry with a title, body, creation time, and expiry time."""

    __tablename__ = "snippets"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    title: Mapped[str] = mapped_column(
        String(100),
        nullable=False,
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="When this snippet was created (UTC)",
    )

    expires_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        comment="After this instant the snippet is no longer served (UTC)",
    )

    __table_args__ = (
        Index("idx_snippets_created_at", created_at.desc()),
    )

    def __repr__(self) -> str:
        return (
            f"<Snippet(id={self.id}, title='{self.title}', "
            f"expires_at='{self.expires_at}')>"
        )
