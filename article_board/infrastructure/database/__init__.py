from .base import Base
from .session import (
    DEFAULT_ODBC_DRIVER,
    create_engine_for,
    create_session_factory,
    describe_target,
    session_scope,
    to_async_url,
    to_odbc_connect,
    to_sqlite_url,
)
from .models import ArticleModel

__all__ = [
    "Base",
    "DEFAULT_ODBC_DRIVER",
    "create_engine_for",
    "create_session_factory",
    "describe_target",
    "session_scope",
    "to_async_url",
    "to_odbc_connect",
    "to_sqlite_url",
    "ArticleModel",
]
