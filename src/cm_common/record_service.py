"""RecordService: thin CRUD composition over a table repository.

The router passes the db session; the service commits after a
successful write. A write rejected by a table constraint (for example a
leader_id or member_id that points at no row) is rolled back and
reported as InvalidInputError, since the bad value came from the client.
Any other failure leaves the transaction to be rolled back when the
session closes.
"""

import logging
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.cm_common.errors import EmptyUpdateError, InvalidInputError, RecordNotFoundError
from src.cm_common.table_repository import RecordRepositoryProtocol

logger = logging.getLogger("cm.records")

# PostgreSQL: 'Key (leader_id)=(...) is not present in table "members"'
_KEY_DETAIL = re.compile(r"Key \((\w+)\)=")
_CONSTRAINT_NAME = re.compile(r'constraint "(\w+)"')

MISSING_REFERENCE = "Referenced record does not exist"
CONSTRAINT_VIOLATION = "Value violates a data constraint"


def constraint_error(exc: IntegrityError, values: Mapping[str, Any]) -> InvalidInputError:
    """Map an IntegrityError to a field-level InvalidInputError.

    The offending column is taken from the error's key detail or, failing
    that, from the constraint name (e.g. "ministries_leader_id_fkey").
    """
    text = str(exc.orig if exc.orig is not None else exc)
    field = ""

    key = _KEY_DETAIL.search(text)
    if key and key.group(1) in values:
        field = key.group(1)
    else:
        constraint = _CONSTRAINT_NAME.search(text)
        if constraint:
            # Longest column name first: a short name may sit inside a longer one
            for name in sorted(values, key=len, reverse=True):
                if f"_{name}_" in f"_{constraint.group(1)}_":
                    field = name
                    break

    message = MISSING_REFERENCE if "foreign key" in text.lower() else CONSTRAINT_VIOLATION
    return InvalidInputError([{"field": field, "message": message}])


class RecordService:
    def __init__(self, entity: str, repo: RecordRepositoryProtocol) -> None:
        self.entity = entity
        self._repo = repo

    async def list_records(self, db: AsyncSession) -> list[dict[str, Any]]:
        return await self._repo.list_all(db)

    async def get_record(self, db: AsyncSession, record_id: str) -> dict[str, Any]:
        record = await self._repo.get_by_id(db, record_id)
        if record is None:
            raise RecordNotFoundError(self.entity, record_id)
        return record

    async def create_record(
        self,
        db: AsyncSession,
        payload: BaseModel,
        created_by: str | None = None,
    ) -> str:
        values = payload.model_dump()
        if created_by is not None:
            values["created_by"] = created_by

        try:
            record_id = await self._repo.insert(db, values)
            await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            logger.info("%s create rejected by constraint: %s", self.entity, exc.orig)
            raise constraint_error(exc, values) from None
        logger.info("%s created: %s", self.entity, record_id)
        return record_id

    async def update_record(
        self, db: AsyncSession, record_id: str, payload: BaseModel
    ) -> None:
        # Only fields the client actually sent; an explicit null clears a column
        values = payload.model_dump(exclude_unset=True)
        if not values:
            raise EmptyUpdateError()

        try:
            updated = await self._repo.update(db, record_id, values)
            if updated:
                await db.commit()
        except IntegrityError as exc:
            await db.rollback()
            logger.info("%s %s update rejected by constraint: %s", self.entity, record_id, exc.orig)
            raise constraint_error(exc, values) from None

        if not updated:
            raise RecordNotFoundError(self.entity, record_id)
        logger.info("%s updated: %s (%s)", self.entity, record_id, ", ".join(sorted(values)))

    async def delete_record(self, db: AsyncSession, record_id: str) -> None:
        if not await self._repo.delete(db, record_id):
            raise RecordNotFoundError(self.entity, record_id)
        await db.commit()
        logger.info("%s deleted: %s", self.entity, record_id)
