"""
Tenant-scoped data access used by the import orchestrator.

Every operation takes the organization id explicitly and filters (or stamps)
``organization_id`` with it; there is no way to read or write another
tenant's rows through this interface.
"""

from __future__ import annotations

import logging
import uuid
from decimal import Decimal
from typing import Any, Mapping, Protocol

from sqlalchemy import Float, Numeric, Uuid, insert, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from bulkimport.db.base import Base
from bulkimport.models import (
    Customer,
    CustomerContact,
    CustomerServiceLocation,
    Invoice,
    Job,
    Vehicle,
)

logger = logging.getLogger(__name__)

TABLE_MODELS: dict[str, type[Base]] = {
    "customers": Customer,
    "customer_contacts": CustomerContact,
    "customer_service_locations": CustomerServiceLocation,
    "vehicles": Vehicle,
    "jobs": Job,
    "invoices": Invoice,
}


class TenantDataStore(Protocol):
    async def find_one(
        self, table: str, org_id: str, field: str, value: Any
    ) -> Mapping[str, Any] | None:
        """Return the first row of ``table`` in ``org_id`` where ``field == value``."""
        ...

    async def insert(self, table: str, org_id: str, values: Mapping[str, Any]) -> str:
        """Insert one row owned by ``org_id`` and return its id."""
        ...

    async def update_by_id(
        self, table: str, org_id: str, record_id: str, values: Mapping[str, Any]
    ) -> int:
        """Update the row with ``record_id`` in ``org_id``; return rows matched."""
        ...


class SqlAlchemyTenantStore:
    """
    TenantDataStore over an AsyncSession.

    Each write commits on its own, and any failed statement (read or write) is
    rolled back before re-raising, so a failed row never leaves the session
    unusable for the next one.
    """

    def __init__(self, db: AsyncSession) -> None:
        self._db = db

    async def find_one(
        self, table: str, org_id: str, field: str, value: Any
    ) -> Mapping[str, Any] | None:
        model = _model_for(table)
        column = model.__table__.columns[field]
        stmt = (
            select(model.__table__)
            .where(
                model.__table__.c.organization_id == org_id,
                column == _coerce(column, value),
            )
            .limit(1)
        )
        try:
            row = (await self._db.execute(stmt)).mappings().first()
        except Exception:
            # A failed statement aborts the transaction; later rows need a clean one.
            await self._db.rollback()
            raise
        return dict(row) if row is not None else None

    async def insert(self, table: str, org_id: str, values: Mapping[str, Any]) -> str:
        model = _model_for(table)
        record_id = values.get("id") or str(uuid.uuid4())
        payload = _bind(model, {**values, "id": record_id, "organization_id": org_id})
        try:
            await self._db.execute(insert(model.__table__).values(**payload))
            await self._db.commit()
        except Exception:
            await self._db.rollback()
            raise
        logger.debug("Inserted %s/%s for org %s", table, record_id, org_id)
        return str(record_id)

    async def update_by_id(
        self, table: str, org_id: str, record_id: str, values: Mapping[str, Any]
    ) -> int:
        model = _model_for(table)
        changes = {k: v for k, v in values.items() if k not in ("id", "organization_id")}
        changes["organization_id"] = org_id
        payload = _bind(model, changes)
        stmt = (
            update(model.__table__)
            .where(
                model.__table__.c.id == _coerce(model.__table__.c.id, record_id),
                model.__table__.c.organization_id == org_id,
            )
            .values(**payload)
        )
        try:
            result = await self._db.execute(stmt)
            await self._db.commit()
        except Exception:
            await self._db.rollback()
            raise
        return result.rowcount


def _model_for(table: str) -> type[Base]:
    try:
        return TABLE_MODELS[table]
    except KeyError:
        raise KeyError(f"No importable table named '{table}'") from None


def _bind(model: type[Base], values: Mapping[str, Any]) -> dict[str, Any]:
    columns = model.__table__.columns
    unknown = [name for name in values if name not in columns]
    if unknown:
        raise KeyError(f"{model.__tablename__} has no column(s) {', '.join(unknown)}")
    return {name: _coerce(columns[name], value) for name, value in values.items()}


def _coerce(column: Any, value: Any) -> Any:
    if isinstance(column.type, Uuid) and isinstance(value, str):
        return uuid.UUID(value)
    # Numeric(12, 2) columns bind Decimal; repr keeps 19.99 from becoming 19.989999...
    if (
        isinstance(column.type, Numeric)
        and not isinstance(column.type, Float)
        and isinstance(value, float)
    ):
        return Decimal(repr(value))
    return value
