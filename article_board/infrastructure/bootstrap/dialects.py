"""SQL dialects for the Articles table builders.

Each dialect knows how to ask its catalog whether the table exists, how to
spell the column types of ``ARTICLE_COLUMNS`` and which audit user the seed
rows are stamped with.
"""

from collections.abc import Callable
from dataclasses import dataclass

from article_board.infrastructure.database.schema import (
    ARTICLE_COLUMNS,
    ARTICLES_TABLE,
    ColumnDefault,
    ColumnSpec,
    ColumnType,
)


@dataclass(frozen=True)
class SeedArticle:
    title: str
    content: str
    is_pinned: bool


SEED_ARTICLES: tuple[SeedArticle, ...] = (
    SeedArticle("Welcome to the Board", "This is the first announcement.", True),
    SeedArticle("Sample Post", "Feel free to write articles here.", False),
)


@dataclass(frozen=True)
class ArticlesTableDialect:
    """Backend-specific SQL for checking, creating, counting and seeding Articles."""

    name: str
    table_ref: str
    table_exists_sql: str
    render_column: Callable[[ColumnSpec], str]
    seed_created_by: tuple[str, ...]
    unicode_prefix: str = ""

    @property
    def create_table_sql(self) -> str:
        columns = ",\n    ".join(self.render_column(c) for c in ARTICLE_COLUMNS)
        return f"CREATE TABLE {self.table_ref}\n(\n    {columns}\n)"

    @property
    def count_rows_sql(self) -> str:
        return f"SELECT COUNT(*) FROM {self.table_ref}"

    @property
    def insert_seed_sql(self) -> str:
        rows = ",\n    ".join(
            "({title}, {content}, {pinned}, {created_by})".format(
                title=self._literal(seed.title),
                content=self._literal(seed.content),
                pinned=1 if seed.is_pinned else 0,
                created_by=self._literal(created_by),
            )
            for seed, created_by in zip(SEED_ARTICLES, self.seed_created_by, strict=True)
        )
        return (
            f"INSERT INTO {self.table_ref} (Title, Content, IsPinned, CreatedBy)\n"
            f"VALUES\n    {rows}"
        )

    def _literal(self, value: str) -> str:
        return "{}'{}'".format(self.unicode_prefix, value.replace("'", "''"))


# ── SQL Server ──────────────────────────────────────────────────────

_SQLSERVER_TYPES = {
    ColumnType.INTEGER: "INT",
    ColumnType.TEXT: "NVARCHAR(MAX)",
    ColumnType.BOOLEAN: "BIT",
    ColumnType.DATETIME: "DATETIME",
}

_SQLSERVER_DEFAULTS = {
    ColumnDefault.FALSE: "DEFAULT(0)",
    ColumnDefault.CURRENT_TIMESTAMP: "DEFAULT(GETUTCDATE())",
}


def _render_sqlserver_column(column: ColumnSpec) -> str:
    if column.type is ColumnType.STRING:
        sql_type = f"NVARCHAR({column.max_length})"
    else:
        sql_type = _SQLSERVER_TYPES[column.type]
    parts = [f"[{column.name}]", sql_type]
    parts.append("NULL" if column.nullable else "NOT NULL")
    if column.primary_key:
        parts.append("PRIMARY KEY IDENTITY(1, 1)")
    if column.default is not None:
        parts.append(_SQLSERVER_DEFAULTS[column.default])
    return " ".join(parts)


SQLSERVER_DIALECT = ArticlesTableDialect(
    name="sqlserver",
    table_ref=f"[dbo].[{ARTICLES_TABLE}]",
    table_exists_sql=(
        "SELECT COUNT(*) FROM INFORMATION_SCHEMA.TABLES "
        f"WHERE TABLE_NAME = '{ARTICLES_TABLE}'"
    ),
    render_column=_render_sqlserver_column,
    seed_created_by=("(System)", "(System)"),
    unicode_prefix="N",
)


# ── SQLite ──────────────────────────────────────────────────────────

_SQLITE_TYPES = {
    ColumnType.INTEGER: "INTEGER",
    ColumnType.STRING: "TEXT",
    ColumnType.TEXT: "TEXT",
    ColumnType.BOOLEAN: "BOOLEAN",
    ColumnType.DATETIME: "DATETIME",
}

_SQLITE_DEFAULTS = {
    ColumnDefault.FALSE: "DEFAULT 0",
    ColumnDefault.CURRENT_TIMESTAMP: "DEFAULT CURRENT_TIMESTAMP",
}


def _render_sqlite_column(column: ColumnSpec) -> str:
    parts = [column.name, _SQLITE_TYPES[column.type]]
    if column.primary_key:
        # INTEGER PRIMARY KEY aliases the rowid; AUTOINCREMENT forbids reuse.
        parts.append("PRIMARY KEY AUTOINCREMENT")
    else:
        parts.append("NULL" if column.nullable else "NOT NULL")
    if column.default is not None:
        parts.append(_SQLITE_DEFAULTS[column.default])
    return " ".join(parts)


SQLITE_DIALECT = ArticlesTableDialect(
    name="sqlite",
    table_ref=ARTICLES_TABLE,
    table_exists_sql=(
        "SELECT COUNT(*) FROM sqlite_master "
        f"WHERE type = 'table' AND name = '{ARTICLES_TABLE}'"
    ),
    render_column=_render_sqlite_column,
    seed_created_by=("admin", "user1"),
)
