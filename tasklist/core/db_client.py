"""Document store client with Mongo-style filters, backed by SQLite."""

import json
import logging
import re
import secrets
from datetime import datetime
from pathlib import Path
from types import TracebackType
from typing import Any, Protocol, Self

import aiosqlite

from tasklist.core.errors import DuplicateKeyError, PersistenceError
from tasklist.core.schema import init_db


logger = logging.getLogger(__name__)


Document = dict[str, Any]
Filter = dict[str, Any]
Update = dict[str, dict[str, Any]]
SortSpec = list[tuple[str, int]]

ASCENDING = 1
DESCENDING = -1

_IDENTIFIER = re.compile(r"^[a-zA-Z_][a-zA-Z0-9_]*$")


class DocumentStore(Protocol):
    """Subset of a Mongo-style collection API used by the repositories."""

    async def find(self, collection: str, filter: Filter, *, sort: SortSpec | None = None) -> list[Document]: ...

    async def find_one(self, collection: str, filter: Filter) -> Document | None: ...

    async def insert_one(self, collection: str, document: Document) -> Document: ...

    async def update_one(self, collection: str, filter: Filter, update: Update) -> int: ...

    async def find_one_and_update(self, collection: str, filter: Filter, update: Update) -> Document | None: ...


def new_object_id() -> str:
    """Generate a 24 hex character document id."""
    return secrets.token_hex(12)


def _validate_identifier(name: str, kind: str) -> None:
    """Validate that a collection or field name contains only alphanumeric characters and underscores."""
    if not _IDENTIFIER.match(name):
        msg = f"Invalid {kind} name: {name}. Only alphanumeric characters and underscores are allowed."
        raise ValueError(msg)


def _to_sql_value(value: Any) -> Any:
    """Convert a Python value to something SQLite can bind."""
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, dict | list):
        return json.dumps(value)
    return value


def build_where(filter: Filter) -> tuple[str, list[Any]]:
    """Translate an equality filter document into a SQL WHERE clause and parameter list.

    ``None`` values match SQL NULL. Operator documents (``{"$gt": ...}``) are not supported.
    """
    conditions = []
    params = []
    for field, value in filter.items():
        _validate_identifier(field, "field")
        if isinstance(value, dict):
            msg = f"Unsupported filter operator for field {field}: {value}"
            raise ValueError(msg)
        if value is None:
            conditions.append(f'"{field}" IS NULL')
        else:
            conditions.append(f'"{field}" = ?')
            params.append(_to_sql_value(value))
    return " AND ".join(conditions), params


def build_set(update: Update) -> tuple[str, list[Any]]:
    """Translate a ``{"$set": {...}}`` update document into a SQL SET clause."""
    if set(update) != {"$set"} or not update["$set"]:
        msg = f"Only non-empty $set updates are supported: {update}"
        raise ValueError(msg)

    assignments = []
    params = []
    for field, value in update["$set"].items():
        _validate_identifier(field, "field")
        if field == "_id":
            raise ValueError("_id is immutable")
        assignments.append(f'"{field}" = ?')
        params.append(_to_sql_value(value))
    return ", ".join(assignments), params


def build_order_by(sort: SortSpec | None) -> str:
    """Translate a sort spec into a SQL ORDER BY clause (empty when unsorted)."""
    if not sort:
        return ""
    parts = []
    for field, direction in sort:
        _validate_identifier(field, "field")
        parts.append(f'"{field}" {"DESC" if direction == DESCENDING else "ASC"}')
    return "ORDER BY " + ", ".join(parts)


class SQLiteDocumentStore:
    """Document store persisting each collection as a SQLite table.

    Usage:
        async with SQLiteDocumentStore("tasklist.db") as store:
            await store.insert_one("tasks", {...})
    """

    def __init__(self, db_path: str) -> None:
        self._db_path = db_path
        self._conn: aiosqlite.Connection | None = None

    async def open(self) -> None:
        """Connect and make sure the schema exists."""
        if self._conn is not None:
            return
        if self._db_path != ":memory:":
            Path(self._db_path).resolve().parent.mkdir(parents=True, exist_ok=True)

        self._conn = await aiosqlite.connect(self._db_path)
        await self._conn.execute("PRAGMA journal_mode = WAL")
        await init_db(self._conn)
        logger.info("Opened SQLite document store", extra={"db_path": self._db_path})

    async def close(self) -> None:
        """Close the connection if it is open."""
        if self._conn is None:
            return
        await self._conn.close()
        self._conn = None
        logger.info("Closed SQLite document store", extra={"db_path": self._db_path})

    async def __aenter__(self) -> Self:
        await self.open()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.close()

    @property
    def connection(self) -> aiosqlite.Connection:
        if self._conn is None:
            raise PersistenceError("Document store is not open. Call open() first.")
        return self._conn

    @staticmethod
    def _rows_to_documents(cursor: aiosqlite.Cursor, rows: list[Any]) -> list[Document]:
        columns = [description[0] for description in cursor.description]
        return [dict(zip(columns, row, strict=True)) for row in rows]

    async def find(self, collection: str, filter: Filter, *, sort: SortSpec | None = None) -> list[Document]:
        """Return every document matching the filter."""
        try:
            _validate_identifier(collection, "collection")
            where_clause, params = build_where(filter)
            where = f"WHERE {where_clause}" if where_clause else ""
            order_by = build_order_by(sort)
            query = f"SELECT * FROM {collection} {where} {order_by}"  # noqa: S608 - identifiers are validated

            cursor = await self.connection.execute(query, params)
            documents = self._rows_to_documents(cursor, list(await cursor.fetchall()))

            logger.debug("Found documents", extra={"collection": collection, "count": len(documents)})
            return documents
        except PersistenceError:
            raise
        except Exception as e:
            logger.error("find_failed", extra={"collection": collection, "error": str(e)})
            raise PersistenceError(f"Failed to query {collection}: {e}") from e

    async def find_one(self, collection: str, filter: Filter) -> Document | None:
        """Return the first document matching the filter, or None."""
        try:
            _validate_identifier(collection, "collection")
            where_clause, params = build_where(filter)
            where = f"WHERE {where_clause}" if where_clause else ""
            query = f"SELECT * FROM {collection} {where} LIMIT 1"  # noqa: S608 - identifiers are validated

            cursor = await self.connection.execute(query, params)
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._rows_to_documents(cursor, [row])[0]
        except PersistenceError:
            raise
        except Exception as e:
            logger.error("find_one_failed", extra={"collection": collection, "error": str(e)})
            raise PersistenceError(f"Failed to query {collection}: {e}") from e

    async def insert_one(self, collection: str, document: Document) -> Document:
        """Insert a document, assigning ``_id`` when absent, and return the stored copy."""
        stored = {"_id": new_object_id(), **document}
        try:
            _validate_identifier(collection, "collection")
            for field in stored:
                _validate_identifier(field, "field")

            columns_str = ", ".join(f'"{field}"' for field in stored)
            placeholders_str = ", ".join("?" for _ in stored)
            values = [_to_sql_value(value) for value in stored.values()]

            columns = f"({columns_str}) VALUES ({placeholders_str})"
            query = f"INSERT INTO {collection} {columns}"  # noqa: S608 - identifiers are validated
            await self.connection.execute(query, values)
            await self.connection.commit()
        except PersistenceError:
            raise
        except aiosqlite.IntegrityError as e:
            if "UNIQUE" in str(e):
                logger.warning("insert_duplicate_key", extra={"collection": collection, "error": str(e)})
                raise DuplicateKeyError(f"Duplicate key in {collection}: {e}") from e
            logger.error("insert_failed", extra={"collection": collection, "error": str(e)})
            raise PersistenceError(f"Failed to insert into {collection}: {e}") from e
        except Exception as e:
            logger.error("insert_failed", extra={"collection": collection, "error": str(e)})
            raise PersistenceError(f"Failed to insert into {collection}: {e}") from e

        logger.info("Inserted document", extra={"collection": collection, "document_id": stored["_id"]})
        return await self.find_one(collection, {"_id": stored["_id"]}) or stored

    async def update_one(self, collection: str, filter: Filter, update: Update) -> int:
        """Apply the update to the first matching document and return the modified count."""
        try:
            _validate_identifier(collection, "collection")
            set_clause, set_params = build_set(update)
            where_clause, where_params = build_where(filter)
            where = f"WHERE {where_clause}" if where_clause else ""

            query = (
                f"UPDATE {collection} SET {set_clause} "  # noqa: S608 - identifiers are validated
                f"WHERE rowid = (SELECT rowid FROM {collection} {where} LIMIT 1)"
            )
            cursor = await self.connection.execute(query, [*set_params, *where_params])
            await self.connection.commit()

            modified = max(cursor.rowcount, 0)
            logger.info("Updated documents", extra={"collection": collection, "modified": modified})
            return modified
        except PersistenceError:
            raise
        except Exception as e:
            logger.error("update_one_failed", extra={"collection": collection, "error": str(e)})
            raise PersistenceError(f"Failed to update {collection}: {e}") from e

    async def find_one_and_update(self, collection: str, filter: Filter, update: Update) -> Document | None:
        """Atomically update the first matching document and return it as updated, or None."""
        try:
            _validate_identifier(collection, "collection")
            set_clause, set_params = build_set(update)
            where_clause, where_params = build_where(filter)
            where = f"WHERE {where_clause}" if where_clause else ""

            query = (
                f"UPDATE {collection} SET {set_clause} "  # noqa: S608 - identifiers are validated
                f"WHERE rowid = (SELECT rowid FROM {collection} {where} LIMIT 1) RETURNING *"
            )
            cursor = await self.connection.execute(query, [*set_params, *where_params])
            row = await cursor.fetchone()
            documents = self._rows_to_documents(cursor, [row]) if row is not None else []
            await cursor.close()
            await self.connection.commit()

            if not documents:
                return None
            logger.info("Updated document", extra={"collection": collection, "document_id": documents[0]["_id"]})
            return documents[0]
        except PersistenceError:
            raise
        except Exception as e:
            logger.error("find_one_and_update_failed", extra={"collection": collection, "error": str(e)})
            raise PersistenceError(f"Failed to update {collection}: {e}") from e
