"""
Importable entity types.

``IMPORT_TARGETS`` is the single place that decides what can be bulk imported:
each ``EntityType`` maps to its validator schema, the table it writes to, and
the validator built from that schema at import time.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass

from bulkimport.imports.validator import (
    ForeignKeyRule,
    RowValidator,
    ValidatorSchema,
    create_validator,
)
from bulkimport.models.customer import CONTACT_TYPES, CUSTOMER_TYPES
from bulkimport.models.invoice import INVOICE_STATUSES
from bulkimport.models.job import JOB_TYPES


class EntityType(str, enum.Enum):
    customers = "customers"
    customer_contacts = "customer_contacts"
    service_locations = "service_locations"
    vehicles = "vehicles"
    jobs = "jobs"
    invoices = "invoices"


@dataclass(frozen=True)
class ImportTarget:
    entity_type: EntityType
    table: str
    schema: ValidatorSchema
    validator: RowValidator


_CUSTOMER_FK = ForeignKeyRule(
    field="customer_id",
    table="customers",
    message="customer_id does not match a customer in this organization",
)

CUSTOMER_SCHEMA = ValidatorSchema(
    allowed_fields=(
        "id", "name", "customer_type", "email", "phone", "notes", "important_information",
        "billing_street", "billing_street2", "billing_city", "billing_state", "billing_zip",
        "service_street", "service_street2", "service_city", "service_state", "service_zip",
        "balance", "credit_not_approved", "deposit_required",
    ),
    required_fields=("name",),
    uuid_fields=("id",),
    numeric_fields=("balance",),
    boolean_fields=("credit_not_approved", "deposit_required"),
    enum_fields={"customer_type": CUSTOMER_TYPES},
)

CUSTOMER_CONTACT_SCHEMA = ValidatorSchema(
    allowed_fields=(
        "id", "customer_id", "contact_type", "first_name", "last_name",
        "email", "phone", "title", "is_primary", "notes",
    ),
    required_fields=("customer_id", "first_name", "last_name"),
    uuid_fields=("id", "customer_id"),
    boolean_fields=("is_primary",),
    enum_fields={"contact_type": CONTACT_TYPES},
    foreign_keys=(_CUSTOMER_FK,),
    defaults={"contact_type": "other"},
)

SERVICE_LOCATION_SCHEMA = ValidatorSchema(
    allowed_fields=(
        "id", "customer_id", "location_name", "location_description",
        "street", "street2", "city", "state", "zip",
        "contact_person", "contact_phone", "access_instructions", "notes",
        "gps_lat", "gps_lng", "is_default",
    ),
    required_fields=("customer_id", "location_name"),
    uuid_fields=("id", "customer_id"),
    numeric_fields=("gps_lat", "gps_lng"),
    boolean_fields=("is_default",),
    foreign_keys=(_CUSTOMER_FK,),
)

VEHICLE_SCHEMA = ValidatorSchema(
    allowed_fields=(
        "id", "license_plate", "make", "model", "year", "vin", "nickname",
        "vehicle_type", "fuel_type", "current_mileage", "purchase_cost",
        "purchase_date", "notes",
    ),
    required_fields=("license_plate", "make", "model"),
    uuid_fields=("id",),
    numeric_fields=("year", "current_mileage", "purchase_cost"),
    integer_fields=("year", "current_mileage"),
    date_fields=("purchase_date",),
    defaults={"status": "active"},
)

JOB_SCHEMA = ValidatorSchema(
    allowed_fields=(
        "id", "job_number", "job_type", "customer_id", "vehicle_id", "parent_job_id",
        "scheduled_date", "scheduled_time", "total_price", "notes", "special_instructions",
    ),
    required_fields=("customer_id", "job_number", "job_type", "scheduled_date"),
    uuid_fields=("id", "customer_id", "vehicle_id", "parent_job_id"),
    numeric_fields=("total_price",),
    date_fields=("scheduled_date",),
    enum_fields={"job_type": JOB_TYPES},
    foreign_keys=(
        _CUSTOMER_FK,
        ForeignKeyRule(
            field="vehicle_id",
            table="vehicles",
            message="vehicle_id does not match a vehicle in this organization",
        ),
        ForeignKeyRule(
            field="parent_job_id",
            table="jobs",
            message="parent_job_id does not match a job in this organization",
        ),
    ),
    defaults={"status": "assigned"},
)

INVOICE_SCHEMA = ValidatorSchema(
    allowed_fields=(
        "id", "invoice_number", "customer_id", "status", "amount", "subtotal",
        "tax_amount", "additional_fees", "discount_type", "discount_value",
        "due_date", "terms", "notes",
    ),
    required_fields=("customer_id", "amount", "due_date"),
    uuid_fields=("id", "customer_id"),
    numeric_fields=("amount", "subtotal", "tax_amount", "additional_fees", "discount_value"),
    date_fields=("due_date",),
    enum_fields={"status": INVOICE_STATUSES, "discount_type": ("percentage", "fixed")},
    foreign_keys=(_CUSTOMER_FK,),
    defaults={"status": "unpaid"},
)


def _target(entity_type: EntityType, table: str, schema: ValidatorSchema) -> ImportTarget:
    return ImportTarget(
        entity_type=entity_type,
        table=table,
        schema=schema,
        validator=create_validator(schema),
    )


IMPORT_TARGETS: dict[EntityType, ImportTarget] = {
    EntityType.customers: _target(EntityType.customers, "customers", CUSTOMER_SCHEMA),
    EntityType.customer_contacts: _target(
        EntityType.customer_contacts, "customer_contacts", CUSTOMER_CONTACT_SCHEMA
    ),
    EntityType.service_locations: _target(
        EntityType.service_locations, "customer_service_locations", SERVICE_LOCATION_SCHEMA
    ),
    EntityType.vehicles: _target(EntityType.vehicles, "vehicles", VEHICLE_SCHEMA),
    EntityType.jobs: _target(EntityType.jobs, "jobs", JOB_SCHEMA),
    EntityType.invoices: _target(EntityType.invoices, "invoices", INVOICE_SCHEMA),
}


def get_import_target(entity_type: EntityType | str) -> ImportTarget:
    """Resolve an entity-type tag; raises ValueError for unsupported types."""
    return IMPORT_TARGETS[EntityType(entity_type)]
