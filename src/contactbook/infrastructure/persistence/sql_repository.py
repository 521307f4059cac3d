"""SQL implementation of ContactRepository (SQLAlchemy Core).
Table: contacts(id, first_name, last_name, email UNIQUE NULL, phone NULL).
Every statement binds its values as parameters; text round-trips unchanged.
"""

import re

from sqlalchemy import (
    Column,
    Integer,
    MetaData,
    String,
    Table,
    create_engine,
    delete,
    insert,
    select,
    update,
)
from sqlalchemy.engine import Engine, RowMapping
from sqlalchemy.exc import IntegrityError

from contactbook.application.ports import ConstraintViolation
from contactbook.domain import Contact
from contactbook.infrastructure.config import DatabaseConfig

metadata = MetaData()

contacts_table = Table(
    "contacts",
    metadata,
    Column("id", Integer, primary_key=True, autoincrement=True),
    Column("first_name", String(50), nullable=False),
    Column("last_name", String(50), nullable=False),
    Column("email", String(100), nullable=True, unique=True),
    Column("phone", String(20), nullable=True),
    # Without AUTOINCREMENT SQLite may hand a deleted max id out again.
    sqlite_autoincrement=True,
)

# Largest value of the 32-bit INTEGER id column; larger ids cannot match a row.
MAX_ID = 2**31 - 1

# Native duplicate-key signals.
_UNIQUE_SQLSTATE = "23505"  # PostgreSQL
_UNIQUE_ERROR_NUMBERS = (1062, 2601, 2627)  # MySQL, SQL Server (pymssql)
_SQLSERVER_UNIQUE_TEXT = re.compile(r"\((?:2601|2627)\)")  # SQL Server (pyodbc)
_SQLITE_UNIQUE_TEXT = "UNIQUE constraint failed"


def create_engine_from_config(config: DatabaseConfig) -> Engine:
    """Build an engine from an explicit connection descriptor."""
    return create_engine(
        config.url,
        echo=config.echo,
        pool_pre_ping=config.pool_pre_ping,
    )


def ensure_schema(engine: Engine) -> None:
    """Create the contacts table if missing. Not a migration tool."""
    metadata.create_all(engine)


def _is_unique_violation(exc: IntegrityError) -> bool:
    """True only when the driver reports a duplicate key."""
    orig = exc.orig
    sqlstate = getattr(orig, "sqlstate", None) or getattr(orig, "pgcode", None)
    if sqlstate is not None:
        return sqlstate == _UNIQUE_SQLSTATE
    args = getattr(orig, "args", ()) or ()
    if args and args[0] in _UNIQUE_ERROR_NUMBERS:
        return True
    if len(args) > 1 and isinstance(args[1], str) and _SQLSERVER_UNIQUE_TEXT.search(args[1]):
        return True
    return _SQLITE_UNIQUE_TEXT in str(orig)


def _storable_id(contact_id: int) -> bool:
    return 1 <= contact_id <= MAX_ID


def _row_to_contact(row: RowMapping) -> Contact:
    return Contact(
        id=row["id"],
        first_name=row["first_name"],
        last_name=row["last_name"],
        email=row["email"],
        phone=row["phone"],
    )


def _values(contact: Contact) -> dict:
    return {
        "first_name": contact.first_name,
        "last_name": contact.last_name,
        "email": contact.email,
        "phone": contact.phone,
    }


class SqlContactRepository:
    """Stores contacts in a relational table. One transaction per operation."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    @classmethod
    def from_config(cls, config: DatabaseConfig) -> "SqlContactRepository":
        return cls(create_engine_from_config(config))

    def list_all(self) -> list[Contact]:
        stmt = select(contacts_table).order_by(
            contacts_table.c.last_name,
            contacts_table.c.first_name,
            contacts_table.c.id,
        )
        with self._engine.connect() as conn:
            return [_row_to_contact(row) for row in conn.execute(stmt).mappings()]

    def get_by_id(self, contact_id: int) -> Contact | None:
        if not _storable_id(contact_id):
            return None
        stmt = select(contacts_table).where(contacts_table.c.id == contact_id)
        with self._engine.connect() as conn:
            row = conn.execute(stmt).mappings().first()
        if row is None:
            return None
        return _row_to_contact(row)

    def insert(self, contact: Contact) -> int:
        stmt = insert(contacts_table).values(**_values(contact))
        try:
            with self._engine.begin() as conn:
                new_id = conn.execute(stmt).inserted_primary_key[0]
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise ConstraintViolation("email", contact.email) from exc
            raise
        if new_id is None:
            raise RuntimeError("insert: database did not return a new id")
        return int(new_id)

    def update_by_id(self, contact_id: int, contact: Contact) -> int:
        if not _storable_id(contact_id):
            return 0
        stmt = (
            update(contacts_table)
            .where(contacts_table.c.id == contact_id)
            .values(**_values(contact))
        )
        try:
            with self._engine.begin() as conn:
                affected = conn.execute(stmt).rowcount
        except IntegrityError as exc:
            if _is_unique_violation(exc):
                raise ConstraintViolation("email", contact.email) from exc
            raise
        return affected

    def delete_by_id(self, contact_id: int) -> int:
        if not _storable_id(contact_id):
            return 0
        stmt = delete(contacts_table).where(contacts_table.c.id == contact_id)
        with self._engine.begin() as conn:
            return conn.execute(stmt).rowcount

    def dispose(self) -> None:
        self._engine.dispose()
