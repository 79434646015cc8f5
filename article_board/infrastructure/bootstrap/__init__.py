from .dialects import SEED_ARTICLES, SQLITE_DIALECT, SQLSERVER_DIALECT, ArticlesTableDialect
from .sqlite import SqliteArticlesTableBuilder, run_sqlite_bootstrap
from .sqlserver import SqlServerArticlesTableBuilder, run_sqlserver_bootstrap
from .table_builder import ArticlesTableBuilder, TableBuildResult, resolve_connection_string

__all__ = [
    "SEED_ARTICLES",
    "SQLITE_DIALECT",
    "SQLSERVER_DIALECT",
    "ArticlesTableDialect",
    "ArticlesTableBuilder",
    "TableBuildResult",
    "resolve_connection_string",
    "SqliteArticlesTableBuilder",
    "run_sqlite_bootstrap",
    "SqlServerArticlesTableBuilder",
    "run_sqlserver_bootstrap",
]
