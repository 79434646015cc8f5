"""SQLAlchemy ORM model for the Article entity."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, String, Text, false, func
from sqlalchemy.orm import Mapped, mapped_column

from article_board.domain.entities import utc_now
from article_board.infrastructure.database.base import Base
from article_board.infrastructure.database.schema import (
    ARTICLES_TABLE,
    AUDIT_USER_MAX_LENGTH,
    TITLE_MAX_LENGTH,
)


class ArticleModel(Base):
    """ORM model — maps to the 'Articles' table."""

    __tablename__ = ARTICLES_TABLE

    id: Mapped[int] = mapped_column("Id", primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column("Title", String(TITLE_MAX_LENGTH), nullable=False)
    content: Mapped[str | None] = mapped_column("Content", Text, nullable=True)
    is_pinned: Mapped[bool | None] = mapped_column(
        "IsPinned",
        Boolean,
        nullable=True,
        default=False,
        server_default=false(),
    )
    created_by: Mapped[str | None] = mapped_column(
        "CreatedBy", String(AUDIT_USER_MAX_LENGTH), nullable=True
    )
    created: Mapped[datetime | None] = mapped_column(
        "Created",
        DateTime,
        nullable=True,
        default=utc_now,
        server_default=func.current_timestamp(),
    )
    modified_by: Mapped[str | None] = mapped_column(
        "ModifiedBy", String(AUDIT_USER_MAX_LENGTH), nullable=True
    )
    modified: Mapped[datetime | None] = mapped_column("Modified", DateTime, nullable=True)

    def __repr__(self) -> str:
        return f"<ArticleModel(id={self.id}, title='{self.title}')>"
