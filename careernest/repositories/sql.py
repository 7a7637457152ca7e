"""
SQL Store
Store backend issuing parameterized SQL through the databases driver
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from databases import Database
from sqlalchemy import JSON, Boolean, DateTime, Table

from careernest.database import metadata
from careernest.repositories.base import UNIQUE_KEYS, DuplicateKeyError, Store

# Register table definitions on the shared metadata
import careernest.models  # noqa: F401

logger = logging.getLogger(__name__)


def _table(collection: str) -> Table:
    table = metadata.tables.get(collection)
    if table is None:
        raise KeyError(f"Unknown collection: {collection}")
    return table


def _column(table: Table, name: str) -> str:
    if name not in table.c:
        raise KeyError(f"Unknown column {name!r} on {table.name}")
    return name


def _equality(table: Table, criteria: Dict[str, Any], prefix: str, params: dict) -> List[str]:
    clauses = []
    for i, (key, value) in enumerate(criteria.items()):
        column = _column(table, key)
        if value is None:
            clauses.append(f"{column} IS NULL")
        else:
            param = f"{prefix}{i}"
            clauses.append(f"{column} = :{param}")
            params[param] = _encode_value(table, key, value)
    return clauses


def build_where(
    table: Table,
    where: Optional[Dict[str, Any]],
    any_of: Optional[List[Dict[str, Any]]],
) -> Tuple[str, dict]:
    """Build a WHERE clause (without the keyword) and its parameters"""
    params: dict = {}
    clauses = _equality(table, where or {}, "w_", params)

    if any_of is not None:
        if not any_of:
            clauses.append("1 = 0")
        else:
            groups = []
            for g, criteria in enumerate(any_of):
                parts = _equality(table, criteria, f"o{g}_", params)
                groups.append("(" + " AND ".join(parts or ["1 = 1"]) + ")")
            clauses.append("(" + " OR ".join(groups) + ")")

    return " AND ".join(clauses), params


def build_select(
    collection: str,
    where: Optional[Dict[str, Any]] = None,
    any_of: Optional[List[Dict[str, Any]]] = None,
    order_by: Optional[str] = None,
    descending: bool = False,
    limit: Optional[int] = None,
    offset: int = 0,
    count_only: bool = False,
) -> Tuple[str, dict]:
    """Build a SELECT statement for a collection"""
    table = _table(collection)
    where_clause, params = build_where(table, where, any_of)

    query = f"SELECT {'COUNT(*) AS count' if count_only else '*'} FROM {table.name}"
    if where_clause:
        query += f" WHERE {where_clause}"
    if order_by and not count_only:
        query += f" ORDER BY {_column(table, order_by)} {'DESC' if descending else 'ASC'}"
    if limit is not None and not count_only:
        query += " LIMIT :limit OFFSET :offset"
        params["limit"] = limit
        params["offset"] = offset
    return query, params


def _encode_value(table: Table, key: str, value: Any) -> Any:
    column_type = table.c[key].type
    if isinstance(column_type, JSON) and value is not None:
        return json.dumps(value)
    return value


def _decode_row(table: Table, row: dict) -> dict:
    decoded = {}
    for key, value in row.items():
        column = table.c.get(key)
        if column is None or value is None:
            decoded[key] = value
            continue
        if isinstance(column.type, JSON) and isinstance(value, str):
            try:
                value = json.loads(value)
            except json.JSONDecodeError:
                value = None
        elif isinstance(column.type, DateTime):
            if isinstance(value, str):
                value = datetime.fromisoformat(value)
            if value.tzinfo is None:
                value = value.replace(tzinfo=timezone.utc)
        elif isinstance(column.type, Boolean):
            value = bool(value)
        decoded[key] = value
    return decoded


def _is_unique_violation(exc: Exception) -> bool:
    name = type(exc).__name__
    if name in {"UniqueViolationError", "IntegrityError"}:
        return "unique" in str(exc).lower() or name == "UniqueViolationError"
    return False


class SqlStore(Store):
    """Store implementation over a databases.Database connection pool"""

    def __init__(self, database: Database):
        self.database = database

    async def connect(self) -> None:
        if not self.database.is_connected:
            await self.database.connect()
            logger.info("SQL store connected")

    async def disconnect(self) -> None:
        if self.database.is_connected:
            await self.database.disconnect()
            logger.info("SQL store disconnected")

    async def insert(self, collection: str, document: Dict[str, Any]) -> Dict[str, Any]:
        table = _table(collection)
        now = datetime.now(timezone.utc)
        values = {k: v for k, v in document.items() if k in table.c}
        for stamp in ("created_at", "updated_at"):
            if stamp in table.c and values.get(stamp) is None:
                values[stamp] = now

        columns = ", ".join(_column(table, k) for k in values)
        placeholders = ", ".join(f":{k}" for k in values)
        params = {k: _encode_value(table, k, v) for k, v in values.items()}

        try:
            await self.database.execute(
                f"INSERT INTO {table.name} ({columns}) VALUES ({placeholders})",
                params
            )
        except Exception as e:
            if _is_unique_violation(e):
                raise DuplicateKeyError(collection, self._guess_fields(collection, str(e))) from e
            raise

        return await self.get(collection, values["id"])

    async def find(
        self,
        collection: str,
        where: Optional[Dict[str, Any]] = None,
        any_of: Optional[List[Dict[str, Any]]] = None,
        order_by: Optional[str] = None,
        descending: bool = False,
        limit: Optional[int] = None,
        offset: int = 0,
    ) -> List[Dict[str, Any]]:
        table = _table(collection)
        query, params = build_select(collection, where, any_of, order_by, descending, limit, offset)
        rows = await self.database.fetch_all(query, params)
        return [_decode_row(table, dict(row._mapping)) for row in rows]

    async def count(
        self,
        collection: str,
        where: Optional[Dict[str, Any]] = None,
        any_of: Optional[List[Dict[str, Any]]] = None,
    ) -> int:
        query, params = build_select(collection, where, any_of, count_only=True)
        total = await self.database.fetch_val(query, params)
        return int(total or 0)

    async def update(self, collection: str, document_id: str, changes: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        table = _table(collection)
        values = {k: v for k, v in changes.items() if k in table.c and k != "id"}
        if "updated_at" in table.c:
            values.setdefault("updated_at", datetime.now(timezone.utc))
        if not values:
            return await self.get(collection, document_id)

        assignments = ", ".join(f"{_column(table, k)} = :set_{k}" for k in values)
        params = {f"set_{k}": _encode_value(table, k, v) for k, v in values.items()}
        params["id"] = document_id

        try:
            await self.database.execute(
                f"UPDATE {table.name} SET {assignments} WHERE id = :id",
                params
            )
        except Exception as e:
            if _is_unique_violation(e):
                raise DuplicateKeyError(collection, self._guess_fields(collection, str(e))) from e
            raise

        return await self.get(collection, document_id)

    async def delete(self, collection: str, where: Dict[str, Any]) -> int:
        table = _table(collection)
        where_clause, params = build_where(table, where, None)
        total = await self.count(collection, where)
        query = f"DELETE FROM {table.name}"
        if where_clause:
            query += f" WHERE {where_clause}"
        await self.database.execute(query, params)
        return total

    @staticmethod
    def _guess_fields(collection: str, message: str) -> tuple:
        message = message.lower()
        for fields in UNIQUE_KEYS.get(collection, []):
            if all(f in message for f in fields):
                return fields
        return ()
