"""Tests for the audit log helper."""
import json
import uuid
from unittest.mock import AsyncMock, MagicMock

import pytest

from bulkimport.models.audit import AuditLog
from bulkimport.services import audit as audit_svc


def make_mock_session():
    session = MagicMock()
    session.commit = AsyncMock()
    return session


@pytest.mark.asyncio
async def test_log_async_adds_and_commits_entry():
    session = make_mock_session()

    entry = await audit_svc.log_async(
        session,
        organization_id="org_a",
        action="import.customers",
        entity_type="customers",
        actor_id="user_1",
        after={"ok": True, "total_rows": 3},
        notes="3 of 3 rows imported",
    )

    session.add.assert_called_once_with(entry)
    session.commit.assert_awaited_once()
    assert isinstance(entry, AuditLog)
    assert entry.organization_id == "org_a"
    assert entry.entity_id is None
    assert json.loads(entry.after_state) == {"ok": True, "total_rows": 3}


@pytest.mark.asyncio
async def test_log_async_accepts_string_entity_id():
    session = make_mock_session()
    record_id = uuid.uuid4()

    entry = await audit_svc.log_async(
        session, "org_a", "import.jobs", "jobs", entity_id=str(record_id)
    )

    assert entry.entity_id == record_id
    assert entry.after_state is None


@pytest.mark.asyncio
async def test_log_async_propagates_commit_failure():
    session = make_mock_session()
    session.commit = AsyncMock(side_effect=RuntimeError("db down"))

    with pytest.raises(RuntimeError):
        await audit_svc.log_async(session, "org_a", "import.jobs", "jobs")
