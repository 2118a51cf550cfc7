"""SQLAlchemy-backed implementation of ProductRepository.

Every operation is a single parameterized statement on the ``products``
table, so each one is atomic on its own and no explicit transaction
spans several statements. Engine failures propagate unchanged except
for the two signals that carry domain meaning:

- a unique-key violation on INSERT becomes EntityAlreadyExistsError
- zero matched rows on SELECT/UPDATE/DELETE becomes EntityNotFoundError

Supports SQLite (development, tests) and PostgreSQL via the URL.
"""

from __future__ import annotations

import logging
import threading
from contextlib import nullcontext
from datetime import datetime, timezone

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    insert,
    select,
    text,
    update,
)
from sqlalchemy.engine import URL, Engine, Row, make_url
from sqlalchemy.exc import IntegrityError
from sqlalchemy.pool import StaticPool

from catalog.domain.exceptions import EntityAlreadyExistsError, EntityNotFoundError
from catalog.domain.model.product import Product
from catalog.domain.repository.product_repository import ProductRepository

logger = logging.getLogger(__name__)

metadata = MetaData()

products_table = Table(
    "products",
    metadata,
    Column("id", String(255), primary_key=True),
    Column("name", String(255), nullable=False),
    Column("price", Float, nullable=False),
    Column("created_at", DateTime(timezone=True), nullable=False),
)

# SQLSTATE for unique_violation (PostgreSQL)
UNIQUE_VIOLATION = "23505"

_SQLITE_UNIQUE_ERRORS = {"SQLITE_CONSTRAINT_PRIMARYKEY", "SQLITE_CONSTRAINT_UNIQUE"}

# Seconds a SQLite writer waits for the file lock before failing
SQLITE_BUSY_TIMEOUT = 30


def is_unique_violation(exc: IntegrityError) -> bool:
    """Tell a duplicate-key failure apart from other integrity errors.

    Looks at the DBAPI error wrapped by SQLAlchemy: psycopg exposes
    ``sqlstate``, psycopg2 ``pgcode`` and sqlite3 ``sqlite_errorname``.
    Falls back to SQLite's message text for drivers that expose none.
    """
    orig = exc.orig
    code = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if code is not None:
        return code == UNIQUE_VIOLATION

    sqlite_name = getattr(orig, "sqlite_errorname", None)
    if sqlite_name is not None:
        return sqlite_name in _SQLITE_UNIQUE_ERRORS

    return "UNIQUE constraint failed" in str(orig)


def _is_sqlite_memory(url: URL) -> bool:
    return url.get_backend_name() == "sqlite" and url.database in (None, "", ":memory:")


def build_engine(database_url: str) -> Engine:
    """Create an engine with settings appropriate to the database type.

    File-backed SQLite uses the default pool, one connection per thread.
    In-memory SQLite lives only as long as its connection, so it gets a
    single ``StaticPool`` connection which SqlProductRepository serializes.
    """
    url = make_url(database_url)
    if _is_sqlite_memory(url):
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
    if url.get_backend_name() == "sqlite":
        return create_engine(
            url,
            echo=False,
            connect_args={"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT},
        )
    return create_engine(
        url,
        echo=False,
        pool_pre_ping=True,
        pool_recycle=3600,
    )


class SqlProductRepository(ProductRepository):

    def __init__(self, engine: Engine, create_schema: bool = False) -> None:
        """Wrap an engine, verifying the database answers before returning.

        Raises the engine's own error if the database is unreachable.
        """
        self._engine = engine
        # A StaticPool hands the same connection to every thread.
        if isinstance(engine.pool, StaticPool):
            self._guard = threading.Lock()
        else:
            self._guard = nullcontext()
        with self._guard, self._engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        if create_schema:
            with self._guard:
                metadata.create_all(self._engine)
        logger.info(
            f"Database connection established ({self._engine.dialect.name})"
        )

    @classmethod
    def from_url(cls, database_url: str, create_schema: bool = False) -> SqlProductRepository:
        return cls(build_engine(database_url), create_schema=create_schema)

    # --- ProductRepository interface ------------------------------------------

    def add(self, product: Product) -> None:
        stmt = insert(products_table).values(
            id=product.id,
            name=product.name,
            price=product.price,
            created_at=product.created_at,
        )
        try:
            with self._guard, self._engine.begin() as conn:
                conn.execute(stmt)
        except IntegrityError as exc:
            if is_unique_violation(exc):
                raise EntityAlreadyExistsError(product.id) from exc
            raise

    def get_by_id(self, product_id: str) -> Product:
        stmt = select(products_table).where(products_table.c.id == product_id)
        with self._guard, self._engine.connect() as conn:
            row = conn.execute(stmt).one_or_none()
        if row is None:
            raise EntityNotFoundError(product_id)
        return self._to_product(row)

    def get_all(self) -> list[Product]:
        stmt = select(products_table)
        with self._guard, self._engine.connect() as conn:
            return [self._to_product(row) for row in conn.execute(stmt)]

    def update(self, product: Product) -> None:
        stmt = (
            update(products_table)
            .where(products_table.c.id == product.id)
            .values(name=product.name, price=product.price)
        )
        with self._guard, self._engine.begin() as conn:
            matched = conn.execute(stmt).rowcount
        if matched == 0:
            raise EntityNotFoundError(product.id)

    def delete(self, product_id: str) -> None:
        stmt = delete(products_table).where(products_table.c.id == product_id)
        with self._guard, self._engine.begin() as conn:
            matched = conn.execute(stmt).rowcount
        if matched == 0:
            raise EntityNotFoundError(product_id)

    def close(self) -> None:
        self._engine.dispose()
        logger.info("Database connection closed")

    # --- Mapping helpers ------------------------------------------------------

    @staticmethod
    def _to_product(row: Row) -> Product:
        created_at: datetime = row.created_at
        if created_at.tzinfo is None:
            # SQLite drops the offset; values are always written as UTC.
            created_at = created_at.replace(tzinfo=timezone.utc)
        return Product(
            id=row.id,
            name=row.name,
            price=row.price,
            created_at=created_at,
        )
