"""Audit log helper: append-only writes to audit_logs table."""
import json
import logging
import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from bulkimport.models.audit import AuditLog

logger = logging.getLogger(__name__)


async def log_async(
    db: AsyncSession,
    organization_id: str,
    action: str,
    entity_type: str,
    entity_id: uuid.UUID | str | None = None,
    actor_id: str | None = None,
    after: Any | None = None,
    notes: str | None = None,
) -> AuditLog:
    """Write and commit a single audit log entry.

    Args:
        db: Async session for the current request.
        organization_id: Tenant the action happened in.
        action: Short verb, e.g. 'import.customers'.
        entity_type: Table/domain name, e.g. 'customers'.
        entity_id: PK of the affected record, if there is exactly one.
        actor_id: User who performed the action (None for system actions).
        after: JSON-serialisable snapshot describing the outcome.
        notes: Free-text annotation.
    """
    entry = AuditLog(
        organization_id=organization_id,
        actor_id=actor_id,
        action=action,
        entity_type=entity_type,
        entity_id=uuid.UUID(str(entity_id)) if entity_id else None,
        after_state=json.dumps(after, default=str) if after is not None else None,
        notes=notes,
    )
    db.add(entry)
    await db.commit()
    logger.debug("Audit: %s %s/%s org=%s", action, entity_type, entity_id, organization_id)
    return entry
