"""
Bulk import orchestration.

Runs parsed CSV rows for one entity type through validation, tenant-scoped
foreign-key checks and persistence, and tallies the outcome per row.

Failure policy:
  - A missing organization or unsupported entity type rejects the whole
    import (CSVImportError) before the data store is touched.
  - Everything else is a row-level error. A failing row is reported with its
    source row number and never stops the rows after it.

Rows are processed one at a time and do not see each other's writes, so an
import is safe to re-run: rows with an ``id`` update in place, rows without
one are inserted again.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Mapping, Sequence

from bulkimport.imports.errors import CSVImportError
from bulkimport.imports.registry import EntityType, ImportTarget, get_import_target
from bulkimport.imports.store import TenantDataStore
from bulkimport.schemas.imports import ImportResult, ImportRowError

logger = logging.getLogger(__name__)

# rows[0] is the line after the header, i.e. row 2 of the file.
FIRST_DATA_ROW = 2


async def run_import(
    store: TenantDataStore,
    *,
    entity_type: EntityType | str,
    org_id: str | None,
    user_id: str | None,
    rows: Sequence[Mapping[str, Any]],
) -> ImportResult:
    """
    Import ``rows`` as ``entity_type`` records owned by ``org_id``.

    Args:
        store:       Tenant-scoped data store for this request.
        entity_type: One of EntityType.
        org_id:      Authenticated tenant; never taken from row data.
        user_id:     Acting user, for logging.
        rows:        ParsedCsv.rows, in file order.

    Raises:
        CSVImportError: no organization, or unsupported entity type.
    """

    if not org_id or not org_id.strip():
        raise CSVImportError("An organization is required to import data.")

    try:
        target = get_import_target(entity_type)
    except ValueError:
        raise CSVImportError(f"Unsupported import type '{entity_type}'.") from None

    errors: list[ImportRowError] = []
    failed_rows = 0

    for row_number, record in enumerate(rows, start=FIRST_DATA_ROW):
        row_errors = await _import_row(
            store,
            target=target,
            org_id=org_id,
            record=record,
            row_number=row_number,
        )
        if row_errors:
            failed_rows += 1
            errors.extend(row_errors)

    total_rows = len(rows)
    result = ImportResult(
        ok=failed_rows == 0,
        total_rows=total_rows,
        success_rows=total_rows - failed_rows,
        failed_rows=failed_rows,
        errors=errors,
    )
    logger.info(
        "CSV import finished type=%s org=%s user=%s total=%d success=%d failed=%d",
        target.entity_type.value,
        org_id,
        user_id,
        result.total_rows,
        result.success_rows,
        result.failed_rows,
    )
    return result


async def _import_row(
    store: TenantDataStore,
    *,
    target: ImportTarget,
    org_id: str,
    record: Mapping[str, Any],
    row_number: int,
) -> list[ImportRowError]:
    outcome = target.validator(record)
    if not outcome.ok:
        return [
            ImportRowError(row_number=row_number, field=error.field, message=error.message)
            for error in outcome.errors
        ]

    entity = dict(outcome.value or {})
    entity["organization_id"] = org_id

    # ── Foreign keys: must exist inside this tenant ──
    fk_errors: list[ImportRowError] = []
    for rule in outcome.foreign_keys:
        try:
            referenced = await store.find_one(rule.table, org_id, "id", entity[rule.field])
        except Exception as exc:
            logger.warning(
                "FK lookup failed row=%d table=%s org=%s: %s", row_number, rule.table, org_id, exc
            )
            fk_errors.append(
                ImportRowError(
                    row_number=row_number,
                    field=rule.field,
                    message=f"Could not verify {rule.field}: {_describe(exc)}",
                )
            )
            continue
        if referenced is None:
            fk_errors.append(
                ImportRowError(row_number=row_number, field=rule.field, message=rule.message)
            )
    if fk_errors:
        return fk_errors

    # ── Persist: update by id, otherwise insert ──
    record_id = entity.pop("id", None)
    try:
        if record_id:
            matched = await store.update_by_id(target.table, org_id, record_id, entity)
            if matched == 0:
                return [
                    ImportRowError(
                        row_number=row_number,
                        field="id",
                        message=f"No {target.entity_type.value} record with id {record_id} exists in this organization",
                    )
                ]
        else:
            values = {**target.schema.defaults, **entity, "id": str(uuid.uuid4())}
            await store.insert(target.table, org_id, values)
    except Exception as exc:
        logger.warning(
            "Row %d of %s import failed to persist (org=%s): %s",
            row_number,
            target.entity_type.value,
            org_id,
            exc,
        )
        return [
            ImportRowError(
                row_number=row_number,
                field=None,
                message=f"Failed to save row: {_describe(exc)}",
            )
        ]

    return []


def _describe(exc: Exception) -> str:
    # SQLAlchemy wraps the driver error; its message is the useful part.
    orig = getattr(exc, "orig", None)
    return str(orig if orig is not None else exc)
