"""Domain entities — pure Python business objects, no framework dependencies."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as a naive UTC datetime (the form stored in the database)."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


@dataclass
class Audit:
    """Who created / last modified a record, and when.

    Timestamps are naive UTC. ``created`` is filled in by the store on insert
    when left empty and is never overwritten afterwards; ``modified`` is only
    set when the caller sets it.
    """

    created_by: str | None = None
    created: datetime | None = None
    modified_by: str | None = None
    modified: datetime | None = None


@dataclass
class Article:
    """Core domain entity representing a board post."""

    title: str
    content: str
    is_pinned: bool = False
    id: int | None = None
    audit: Audit = field(default_factory=Audit)

    def update(
        self,
        title: str | None = None,
        content: str | None = None,
        is_pinned: bool | None = None,
        modified_by: str | None = None,
        modified: datetime | None = None,
    ) -> None:
        """Apply the given field changes and stamp the modification audit."""
        if title is not None:
            self.title = title
        if content is not None:
            self.content = content
        if is_pinned is not None:
            self.is_pinned = is_pinned
        self.audit.modified_by = modified_by
        self.audit.modified = modified
