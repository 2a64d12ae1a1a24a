"""
Shop API Backend: Data Access Layer
====================================

What:  A process-wide async SQLAlchemy engine plus the two calls every
       endpoint needs: run a statement, or call a stored procedure.
How:   `Database.connect()` builds the pooled engine once (from the FastAPI
       lifespan); `execute()` runs `text()` statements with bound parameters;
       `disconnect()` disposes the pool at shutdown.
Who:   Services receive the instance through the `get_database` dependency.

Parameter binding:
    Values are never formatted into statement text. Statements are written
    with `:name` placeholders and SQLAlchemy hands the values to the driver,
    which converts them to its own paramstyle (asyncpg `$1`, pyodbc `?`).
    Stored-procedure calls are rendered from fixed identifiers only:

        mssql:      SET NOCOUNT ON; EXEC AddProduct_sp @pname = :pname, @price = :price
        postgresql: SELECT * FROM AddProduct_sp(pname => :pname, price => :price)

Connection Pooling:
    pool_size / max_overflow / pool_pre_ping come from settings.
    pool_recycle=3600 recycles connections hourly.
"""

import logging
import re
from typing import Any, AsyncGenerator, Dict, List, Mapping, Optional

from sqlalchemy import text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import DBAPIError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from shop_api.config import settings
from shop_api.exceptions import DatabaseError

logger = logging.getLogger(__name__)

Row = Dict[str, Any]

_IDENTIFIER = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


def _is_void_result(name: str, rows: List[Row]) -> bool:
    """A void function selected with SELECT * yields one empty column named after it."""
    if len(rows) != 1 or len(rows[0]) != 1:
        return False
    column, value = next(iter(rows[0].items()))
    return column.lower() == name.lower() and value in (None, "")


def _driver_message(exc: SQLAlchemyError) -> str:
    """Returns the driver's own message, without SQLAlchemy's SQL/params suffix."""
    if isinstance(exc, DBAPIError) and exc.orig is not None:
        return str(exc.orig)
    return str(exc)


class Database:
    """
    Owns the connection pool for the lifetime of the process.

    The engine is created explicitly by `connect()` instead of at import time,
    so importing the application never opens (or even configures) a
    database connection.
    """

    def __init__(self, url: str, **engine_options: Any):
        self.url = url
        self.engine_options = engine_options
        self.dialect = make_url(url).get_backend_name()
        self._engine: Optional[AsyncEngine] = None

    @classmethod
    def from_settings(cls) -> "Database":
        """Builds a Database configured with the pool settings."""
        return cls(
            settings.database_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_pre_ping=settings.db_pool_pre_ping,
            pool_recycle=3600,
            echo=settings.log_level == "DEBUG",
        )

    @property
    def is_connected(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise DatabaseError(
                message="Database is not connected",
                context={"dialect": self.dialect},
            )
        return self._engine

    # ── Lifecycle ─────────────────────────────────────────────────────────
    async def connect(self) -> None:
        """Creates the pooled engine. Idempotent."""
        if self._engine is not None:
            return
        self._engine = create_async_engine(self.url, **self.engine_options)
        logger.info("Database engine created (dialect=%s)", self.dialect)

    async def disconnect(self) -> None:
        """Closes every pooled connection. Safe to call when not connected."""
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        logger.info("Database engine disposed")

    # ── Queries ───────────────────────────────────────────────────────────
    async def execute(
        self,
        statement: str,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> List[Row]:
        """
        Run one statement in its own transaction and return its rows.

        Args:
            statement:  SQL text with `:name` placeholders
            parameters: Values for the placeholders, bound by the driver

        Returns:
            List of dicts keyed by column name; empty when the statement
            produces no result set (e.g. a procedure that only deletes).

        Raises:
            DatabaseError with the raw driver message on any failure.
        """
        engine = self.engine
        try:
            # begin(): commit on success, rollback on error
            async with engine.begin() as conn:
                result = await conn.execute(text(statement), dict(parameters or {}))
                if not result.returns_rows:
                    return []
                return [dict(row) for row in result.mappings().all()]
        except SQLAlchemyError as e:
            message = _driver_message(e)
            logger.error("Statement failed: %s", message)
            raise DatabaseError(
                message=message,
                context={"statement": statement},
            ) from e

    def procedure_statement(self, name: str, parameter_names: List[str]) -> str:
        """
        Render a stored-procedure call for this database's dialect.

        Only identifiers are placed in the text; values travel as
        `:name` bind parameters.
        """
        for identifier in [name, *parameter_names]:
            if not _IDENTIFIER.match(identifier):
                raise ValueError(f"Invalid SQL identifier: {identifier!r}")

        if self.dialect == "mssql":
            args = ", ".join(f"@{p} = :{p}" for p in parameter_names)
            # NOCOUNT keeps DML row counts from arriving ahead of the row set
            return f"SET NOCOUNT ON; EXEC {name} {args}".rstrip()
        if self.dialect == "postgresql":
            args = ", ".join(f"{p} => :{p}" for p in parameter_names)
            return f"SELECT * FROM {name}({args})"
        raise DatabaseError(
            message=f"Stored procedures are not supported by the '{self.dialect}' dialect",
            context={"procedure": name},
        )

    async def call_procedure(
        self,
        name: str,
        parameters: Optional[Mapping[str, Any]] = None,
    ) -> List[Row]:
        """Call stored procedure `name` with named, bound parameters."""
        params = dict(parameters or {})
        statement = self.procedure_statement(name, list(params))
        logger.debug("Calling procedure %s with %d parameters", name, len(params))
        rows = await self.execute(statement, params)
        if self.dialect == "postgresql" and _is_void_result(name, rows):
            return []
        return rows

    async def ping(self) -> bool:
        """Lightweight connectivity check used by /health."""
        try:
            await self.execute("SELECT 1")
        except DatabaseError:
            return False
        return True


# ── Process-wide instance ─────────────────────────────────────────────────
# Connected in main.lifespan at startup, disconnected at shutdown.
database = Database.from_settings()


async def get_database() -> AsyncGenerator[Database, None]:
    """
    FastAPI dependency providing the shared Database.

    Example usage in a route:
        @router.get("/products")
        async def list_products(db: Database = Depends(get_database)):
            return await product_service.list_products(db)
    """
    yield database
