"""SQLite bootstrap: a single database file, no tenant fan-out."""

from article_board.config import Settings
from article_board.infrastructure.bootstrap.dialects import SQLITE_DIALECT
from article_board.infrastructure.bootstrap.table_builder import (
    ArticlesTableBuilder,
    TableBuildResult,
    resolve_connection_string,
)
from article_board.infrastructure.database.session import to_sqlite_url


class SqliteArticlesTableBuilder(ArticlesTableBuilder):
    dialect = SQLITE_DIALECT

    def __init__(self, connection_string: str):
        # Always the sqlite dialect, whether given a URL or "Data Source=<path>".
        self._connection_string = to_sqlite_url(connection_string)

    async def build_database(self) -> TableBuildResult:
        return await self.process(self._connection_string, "SQLite DB")


async def run_sqlite_bootstrap(
    settings: Settings,
    connection_string: str | None = None,
) -> TableBuildResult:
    """Startup entry point.

    Raises ConfigurationError when no connection string resolves or when it
    does not point at SQLite.
    """
    builder = SqliteArticlesTableBuilder(resolve_connection_string(settings, connection_string))
    return await builder.build_database()
