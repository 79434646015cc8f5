"""Engine and session helpers.

Nothing here reads settings: callers pass the connection string they
resolved at the composition root, one engine per target database.

Besides SQLAlchemy URLs, two ``Key=Value;`` forms are understood: SqlClient /
ODBC strings for SQL Server (as stored in ``dbo.Tenants``), translated into an
``odbc_connect`` URL for aioodbc, and Microsoft.Data.Sqlite strings
(``Data Source=board.db``), which only the SQLite bootstrap accepts.
"""

import re
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from urllib.parse import quote_plus

from sqlalchemy.engine import make_url
from sqlalchemy.exc import ArgumentError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from article_board.domain.exceptions import ConfigurationError

DEFAULT_ODBC_DRIVER = "ODBC Driver 18 for SQL Server"

_SYNC_TO_ASYNC_PREFIXES = (
    ("sqlite+pysqlite://", "sqlite+aiosqlite://"),
    ("sqlite://", "sqlite+aiosqlite://"),
    ("mssql+pyodbc://", "mssql+aioodbc://"),
    ("mssql://", "mssql+aioodbc://"),
)

_SECRET_PATTERN = re.compile(r"(?i)\b(pwd|password)\s*=\s*[^;]*")

# SqlClient keyword (lower case, single spaces) → ODBC Driver for SQL Server keyword
_ODBC_KEYWORDS: dict[str, str] = {
    "driver": "Driver",
    "server": "Server",
    "data source": "Server",
    "address": "Server",
    "addr": "Server",
    "network address": "Server",
    "database": "Database",
    "initial catalog": "Database",
    "uid": "UID",
    "user id": "UID",
    "user": "UID",
    "pwd": "PWD",
    "password": "PWD",
    "trusted_connection": "Trusted_Connection",
    "integrated security": "Trusted_Connection",
    "encrypt": "Encrypt",
    "trustservercertificate": "TrustServerCertificate",
    "trust server certificate": "TrustServerCertificate",
    "multipleactiveresultsets": "MARS_Connection",
    "multiple active result sets": "MARS_Connection",
    "application name": "APP",
    "app": "APP",
    "applicationintent": "ApplicationIntent",
    "application intent": "ApplicationIntent",
    "multisubnetfailover": "MultiSubnetFailover",
    "multi subnet failover": "MultiSubnetFailover",
    "failover partner": "Failover_Partner",
}

_ODBC_BOOLEAN_KEYWORDS = frozenset({
    "Trusted_Connection",
    "Encrypt",
    "TrustServerCertificate",
    "MARS_Connection",
    "MultiSubnetFailover",
})

# Pooling and client-side options the ODBC driver has no keyword for.
_SQLCLIENT_ONLY_KEYWORDS = frozenset({
    "persist security info",
    "pooling",
    "max pool size",
    "min pool size",
    "connect timeout",
    "connection timeout",
    "connection lifetime",
    "load balance timeout",
    "packet size",
})

_SQLITE_PATH_KEYWORDS = ("data source", "datasource", "filename")


def is_odbc_connection_string(connection_string: str) -> bool:
    """True for ADO/ODBC style ``Key=Value;`` strings rather than URLs."""
    return "://" not in connection_string and "=" in connection_string


def parse_connection_string(connection_string: str) -> list[tuple[str, str]]:
    """Split ``Key=Value;`` pairs in order.

    ``{...}`` values are kept verbatim, braces included; ``"..."`` and
    ``'...'`` values are unquoted. Raises ValueError on an unterminated value.
    """
    source = connection_string.strip()
    pairs: list[tuple[str, str]] = []
    pos = 0
    while pos < len(source):
        eq = source.find("=", pos)
        if eq == -1:
            if source[pos:].strip(" ;"):
                raise ValueError(f"Malformed connection string segment: {source[pos:]!r}")
            break
        key = source[pos:eq].strip(" ;")
        pos = eq + 1
        while pos < len(source) and source[pos] == " ":
            pos += 1

        if pos < len(source) and source[pos] in "{\"'":
            opener = source[pos]
            closer = "}" if opener == "{" else opener
            end = pos + 1
            while True:
                end = source.find(closer, end)
                if end == -1:
                    raise ValueError(f"Unterminated value for {key!r}")
                if source[end + 1 : end + 2] == closer:
                    end += 2
                    continue
                break
            raw = source[pos : end + 1]
            value = raw if opener == "{" else raw[1:-1].replace(closer * 2, closer)
            semi = source.find(";", end + 1)
            pos = len(source) if semi == -1 else semi + 1
        else:
            semi = source.find(";", pos)
            end = len(source) if semi == -1 else semi
            value = source[pos:end].strip()
            pos = end + 1

        if key:
            pairs.append((key, value))
    return pairs


def _normalise_key(key: str) -> str:
    return " ".join(key.lower().split())


def _odbc_value(value: str) -> str:
    if value.startswith("{"):
        return value
    if any(ch in value for ch in ";{}") or value != value.strip():
        return "{" + value.replace("}", "}}") + "}"
    return value


def _odbc_boolean(value: str) -> str:
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "sspi"):
        return "yes"
    if lowered in ("false", "no"):
        return "no"
    return value


def to_odbc_connect(connection_string: str, odbc_driver: str = DEFAULT_ODBC_DRIVER) -> str:
    """Translate a SqlClient-style string into one the ODBC driver accepts.

    Known SqlClient keywords are renamed (``User Id`` → ``UID``,
    ``Initial Catalog`` → ``Database`` ...), booleans become yes/no, pooling
    options are dropped, unknown keywords pass through and ``Driver`` is
    added when absent.
    """
    translated: list[tuple[str, str]] = []
    for key, value in parse_connection_string(connection_string):
        normalised = _normalise_key(key)
        if normalised in _SQLCLIENT_ONLY_KEYWORDS:
            continue
        odbc_key = _ODBC_KEYWORDS.get(normalised, key)
        if odbc_key in _ODBC_BOOLEAN_KEYWORDS:
            value = _odbc_boolean(value)
        translated.append((odbc_key, value))

    if not any(key == "Driver" for key, _ in translated):
        translated.insert(0, ("Driver", "{" + odbc_driver + "}"))
    return ";".join(f"{key}={_odbc_value(value)}" for key, value in translated)


def to_async_url(connection_string: str, odbc_driver: str = DEFAULT_ODBC_DRIVER) -> str:
    """Convert a sync SQLAlchemy URL or a raw SQL Server string to an async URL."""
    connection_string = connection_string.strip()
    if is_odbc_connection_string(connection_string):
        odbc_connect = to_odbc_connect(connection_string, odbc_driver)
        return f"mssql+aioodbc:///?odbc_connect={quote_plus(odbc_connect)}"
    for sync_prefix, async_prefix in _SYNC_TO_ASYNC_PREFIXES:
        if connection_string.startswith(sync_prefix):
            return async_prefix + connection_string[len(sync_prefix):]
    return connection_string


def to_sqlite_url(connection_string: str) -> str:
    """Async SQLite URL from a ``sqlite://`` URL or a ``Data Source=<path>`` string.

    Raises ConfigurationError for anything that does not point at SQLite.
    """
    connection_string = connection_string.strip()
    if "://" in connection_string:
        url = to_async_url(connection_string)
        if not url.startswith("sqlite+aiosqlite://"):
            raise ConfigurationError(
                "default_connection",
                f"Not a SQLite connection string: {describe_target(connection_string)}",
            )
        return url

    try:
        pairs = {_normalise_key(k): v for k, v in parse_connection_string(connection_string)}
    except ValueError as exc:
        raise ConfigurationError("default_connection", str(exc)) from exc
    for keyword in _SQLITE_PATH_KEYWORDS:
        path = pairs.get(keyword, "").strip()
        if path:
            return f"sqlite+aiosqlite:///{path}"
    raise ConfigurationError(
        "default_connection",
        "SQLite connection string has no Data Source: "
        f"{describe_target(connection_string)}",
    )


def describe_target(connection_string: str) -> str:
    """Printable form of a connection string with any password masked."""
    if is_odbc_connection_string(connection_string):
        return _SECRET_PATTERN.sub(r"\1=***", connection_string.strip())
    try:
        return make_url(connection_string).render_as_string(hide_password=True)
    except ArgumentError:
        return "<unparseable connection string>"


def create_engine_for(
    connection_string: str,
    echo: bool = False,
    odbc_driver: str = DEFAULT_ODBC_DRIVER,
) -> AsyncEngine:
    """Create an async engine for one target database."""
    return create_async_engine(
        to_async_url(connection_string, odbc_driver), echo=echo, future=True
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )


@asynccontextmanager
async def session_scope(
    factory: async_sessionmaker[AsyncSession],
) -> AsyncIterator[AsyncSession]:
    """Yield a session for one request; roll back anything uncommitted on error."""
    async with factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
