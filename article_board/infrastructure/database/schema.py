"""Backend-neutral description of the Articles table.

The table builders render their ``CREATE TABLE`` statements from
``ARTICLE_COLUMNS`` and the ORM model uses the same column names, so the two
stay in step.
"""

from dataclasses import dataclass
from enum import Enum

ARTICLES_TABLE = "Articles"
TITLE_MAX_LENGTH = 255
AUDIT_USER_MAX_LENGTH = 255


class ColumnType(str, Enum):
    INTEGER = "integer"
    STRING = "string"      # bounded text, needs max_length
    TEXT = "text"          # unbounded text
    BOOLEAN = "boolean"
    DATETIME = "datetime"


class ColumnDefault(str, Enum):
    FALSE = "false"
    CURRENT_TIMESTAMP = "current_timestamp"


@dataclass(frozen=True)
class ColumnSpec:
    """One column: name, logical type, nullability, length and store default."""

    name: str
    type: ColumnType
    nullable: bool = True
    max_length: int | None = None
    default: ColumnDefault | None = None
    primary_key: bool = False

    def __post_init__(self) -> None:
        if self.type is ColumnType.STRING and self.max_length is None:
            raise ValueError(f"Column {self.name} is a bounded string but has no max_length")


ARTICLE_COLUMNS: tuple[ColumnSpec, ...] = (
    ColumnSpec("Id", ColumnType.INTEGER, nullable=False, primary_key=True),
    ColumnSpec("Title", ColumnType.STRING, nullable=False, max_length=TITLE_MAX_LENGTH),
    ColumnSpec("Content", ColumnType.TEXT),
    ColumnSpec("IsPinned", ColumnType.BOOLEAN, default=ColumnDefault.FALSE),
    ColumnSpec("CreatedBy", ColumnType.STRING, max_length=AUDIT_USER_MAX_LENGTH),
    ColumnSpec("Created", ColumnType.DATETIME, default=ColumnDefault.CURRENT_TIMESTAMP),
    ColumnSpec("ModifiedBy", ColumnType.STRING, max_length=AUDIT_USER_MAX_LENGTH),
    ColumnSpec("Modified", ColumnType.DATETIME),
)
