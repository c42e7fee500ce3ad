"""Shared fixtures: an in-memory tenant store and a rate limiter that never trips."""
import pytest

from bulkimport.core.limiter import limiter

ORG_A = "org_a"
ORG_B = "org_b"

CUSTOMER_A = "0b3f6a1e-8a53-4a43-9d3c-6f0f2a1c7e01"
CUSTOMER_B = "5d9e2c44-1f7b-4b8e-a0c2-3e6f9b8d4a02"
VEHICLE_A = "9a1c3e5f-7b2d-4f60-8e1a-2c4b6d8f0a03"


class FakeTenantStore:
    """Dict-backed TenantDataStore that records every call it receives."""

    def __init__(self, records: dict[str, list[dict]] | None = None):
        self.records = {table: [dict(row) for row in rows] for table, rows in (records or {}).items()}
        self.lookups: list[tuple] = []
        self.inserted: list[tuple[str, dict]] = []
        self.updated: list[tuple[str, str, dict]] = []

    async def find_one(self, table, org_id, field, value):
        self.lookups.append((table, org_id, field, value))
        for row in self.records.get(table, []):
            if row["organization_id"] == org_id and row.get(field) == value:
                return dict(row)
        return None

    async def insert(self, table, org_id, values):
        row = {**values, "organization_id": org_id}
        self.records.setdefault(table, []).append(row)
        self.inserted.append((table, row))
        return row["id"]

    async def update_by_id(self, table, org_id, record_id, values):
        for row in self.records.get(table, []):
            if row["id"] == record_id and row["organization_id"] == org_id:
                row.update(values)
                self.updated.append((table, record_id, dict(values)))
                return 1
        return 0


@pytest.fixture
def tenant_records():
    """One customer in each of two tenants, and a vehicle in tenant A."""
    return {
        "customers": [
            {"id": CUSTOMER_A, "organization_id": ORG_A, "name": "Acme Portable Toilets"},
            {"id": CUSTOMER_B, "organization_id": ORG_B, "name": "Beta Events"},
        ],
        "vehicles": [
            {"id": VEHICLE_A, "organization_id": ORG_A, "license_plate": "TRK-001"},
        ],
    }


@pytest.fixture
def store(tenant_records):
    return FakeTenantStore(tenant_records)


@pytest.fixture(autouse=True)
def _disable_rate_limit():
    limiter.enabled = False
    yield
    limiter.enabled = True
