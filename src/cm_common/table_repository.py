"""Raw-SQL repository shared by every panel table.

All statements are bound text() SQL. Table and column names come from
each module's persistence.py, never from the request: payload keys are
checked against the column whitelist before any SQL is built.
"""

import uuid
from collections.abc import Iterable, Mapping
from typing import Any, Protocol

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.datetime_utils import utc_now


class RecordRepositoryProtocol(Protocol):
    async def list_all(self, db: AsyncSession) -> list[dict[str, Any]]: ...

    async def get_by_id(self, db: AsyncSession, record_id: str) -> dict[str, Any] | None: ...

    async def insert(self, db: AsyncSession, values: Mapping[str, Any]) -> str: ...

    async def update(
        self, db: AsyncSession, record_id: str, values: Mapping[str, Any]
    ) -> bool: ...

    async def delete(self, db: AsyncSession, record_id: str) -> bool: ...


class TableRepository:
    def __init__(self, table: str, columns: Iterable[str], order_by: str) -> None:
        self.table = table
        self.columns = frozenset(columns)
        self._list_sql = text(f"SELECT * FROM {table} ORDER BY {order_by}")
        self._get_sql = text(f"SELECT * FROM {table} WHERE id = :id")
        self._delete_sql = text(f"DELETE FROM {table} WHERE id = :id")

    def _column_names(self, values: Mapping[str, Any]) -> list[str]:
        unknown = set(values) - self.columns
        if unknown:
            raise ValueError(f"Unknown column(s) for {self.table}: {sorted(unknown)}")
        return list(values)

    async def list_all(self, db: AsyncSession) -> list[dict[str, Any]]:
        result = await db.execute(self._list_sql)
        return [dict(row) for row in result.mappings().all()]

    async def get_by_id(self, db: AsyncSession, record_id: str) -> dict[str, Any] | None:
        result = await db.execute(self._get_sql, {"id": record_id})
        row = result.mappings().first()
        return dict(row) if row is not None else None

    async def insert(self, db: AsyncSession, values: Mapping[str, Any]) -> str:
        names = ["id", *self._column_names(values), "created_at", "updated_at"]
        record_id = uuid.uuid4().hex
        now = utc_now()
        params = {**values, "id": record_id, "created_at": now, "updated_at": now}

        sql = text(
            f"INSERT INTO {self.table} ({', '.join(names)}) "
            f"VALUES ({', '.join(':' + n for n in names)})"
        )
        await db.execute(sql, params)
        return record_id

    async def update(
        self, db: AsyncSession, record_id: str, values: Mapping[str, Any]
    ) -> bool:
        assignments = [f"{name} = :{name}" for name in self._column_names(values)]
        assignments.append("updated_at = :updated_at")
        params = {**values, "id": record_id, "updated_at": utc_now()}

        sql = text(f"UPDATE {self.table} SET {', '.join(assignments)} WHERE id = :id")
        result = await db.execute(sql, params)
        return bool(result.rowcount)

    async def delete(self, db: AsyncSession, record_id: str) -> bool:
        result = await db.execute(self._delete_sql, {"id": record_id})
        return bool(result.rowcount)
