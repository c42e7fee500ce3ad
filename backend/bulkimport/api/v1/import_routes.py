"""CSV bulk import endpoints for customers, contacts, locations, vehicles, jobs, and invoices."""
import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.datastructures import UploadFile

from bulkimport.core.config import settings
from bulkimport.core.deps import TenantContext, get_tenant_context
from bulkimport.core.limiter import limiter
from bulkimport.db.session import get_session
from bulkimport.imports.errors import CSVImportError
from bulkimport.imports.orchestrator import run_import
from bulkimport.imports.parser import parse_csv
from bulkimport.imports.registry import IMPORT_TARGETS, EntityType
from bulkimport.imports.store import SqlAlchemyTenantStore
from bulkimport.schemas.imports import (
    CsvEnvelope,
    ForeignKeyOut,
    ImportResult,
    ImportTypeListResponse,
    ImportTypeOut,
)
from bulkimport.services import audit as audit_svc

logger = logging.getLogger(__name__)

router = APIRouter()


# ─── Helpers ───

async def _read_csv_body(request: Request) -> str | bytes:
    """Return the CSV payload from a raw, JSON-envelope, or multipart body."""
    max_bytes = settings.IMPORT_MAX_BODY_BYTES
    too_large = HTTPException(
        status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
        detail=f"Request body exceeds the {max_bytes} byte limit",
    )

    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        raise too_large

    # Chunked uploads carry no Content-Length, so count bytes as they arrive.
    received = bytearray()
    async for chunk in request.stream():
        received.extend(chunk)
        if len(received) > max_bytes:
            raise too_large
    body = bytes(received)

    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == "multipart/form-data":
        form = await Request(request.scope, receive=_replay(body)).form()
        try:
            upload = form.get("file")
            if not isinstance(upload, UploadFile):
                raise HTTPException(
                    status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                    detail="Multipart uploads must include a 'file' field",
                )
            return await upload.read()
        finally:
            await form.close()

    if content_type == "application/json":
        try:
            return CsvEnvelope.model_validate_json(body).csv
        except ValidationError:
            raise HTTPException(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                detail="JSON body must be an object with a 'csv' string",
            )
    return body


def _replay(body: bytes):
    """ASGI receive callable that hands an already-read body to the form parser."""
    async def receive():
        return {"type": "http.request", "body": body, "more_body": False}
    return receive


async def _record_audit(
    db: AsyncSession,
    tenant: TenantContext,
    entity_type: EntityType,
    result: ImportResult,
) -> None:
    try:
        await audit_svc.log_async(
            db,
            organization_id=tenant.org_id,
            action=f"import.{entity_type.value}",
            entity_type=entity_type.value,
            actor_id=tenant.user_id,
            after=result.model_dump(exclude={"errors"}),
            notes=f"{result.success_rows} of {result.total_rows} rows imported",
        )
    except Exception as exc:
        await db.rollback()
        logger.warning("Import audit entry not written org=%s type=%s: %s", tenant.org_id, entity_type.value, exc)


# ─── GET /import/types ───

@router.get("/types", response_model=ImportTypeListResponse, summary="Describe importable entity types")
async def list_import_types():
    items = [
        ImportTypeOut(
            entity_type=target.entity_type.value,
            fields=list(target.schema.allowed_fields),
            required_fields=list(target.schema.required_fields),
            foreign_keys=[
                ForeignKeyOut(field=rule.field, table=rule.table)
                for rule in target.schema.foreign_keys
            ],
        )
        for target in IMPORT_TARGETS.values()
    ]
    return ImportTypeListResponse(
        items=items,
        max_rows=settings.IMPORT_MAX_ROWS,
        max_columns=settings.IMPORT_MAX_COLUMNS,
    )


# ─── GET /import/{entity_type}/template ───

@router.get("/{entity_type}/template", summary="Download an empty CSV template")
async def download_template(entity_type: EntityType):
    header = ",".join(IMPORT_TARGETS[entity_type].schema.allowed_fields)
    return PlainTextResponse(
        header + "\n",
        media_type="text/csv",
        headers={
            "Content-Disposition": f'attachment; filename="{entity_type.value}_import_template.csv"'
        },
    )


# ─── POST /import/{entity_type} ───

@router.post(
    "/{entity_type}",
    response_model=ImportResult,
    responses={400: {"description": "CSV rejected, or one or more rows failed"}},
    summary="Bulk import records from CSV",
)
@limiter.limit(settings.IMPORT_RATE_LIMIT)
async def import_records(
    request: Request,
    entity_type: EntityType,
    db: Annotated[AsyncSession, Depends(get_session)],
    tenant: Annotated[TenantContext, Depends(get_tenant_context)],
):
    content = await _read_csv_body(request)

    try:
        parsed = parse_csv(
            content,
            max_rows=settings.IMPORT_MAX_ROWS,
            max_columns=settings.IMPORT_MAX_COLUMNS,
        )
        result = await run_import(
            SqlAlchemyTenantStore(db),
            entity_type=entity_type,
            org_id=tenant.org_id,
            user_id=tenant.user_id,
            rows=parsed.rows,
        )
    except CSVImportError as exc:
        logger.info("CSV import rejected type=%s org=%s: %s", entity_type.value, tenant.org_id, exc.message)
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=exc.message)

    await _record_audit(db, tenant, entity_type, result)

    if result.ok:
        return result
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=result.model_dump(mode="json", by_alias=True),
    )
