"""create tenant import tables

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 09:12:40.118305

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = 'a1b2c3d4e5f6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

CUSTOMER_TYPES = (
    'commercial', 'construction', 'emergency_disaster_relief', 'events_festivals',
    'municipal_government', 'not_selected', 'private_events_weddings', 'sports_recreation',
)


def _tenant_columns() -> list[sa.Column]:
    return [
        sa.Column('id', sa.UUID(), server_default=sa.text('gen_random_uuid()'), nullable=False),
        sa.Column('organization_id', sa.String(length=64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
    ]


def upgrade() -> None:
    op.create_table('customers',
        *_tenant_columns(),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('customer_type', sa.Enum(*CUSTOMER_TYPES, name='customer_type'), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('important_information', sa.Text(), nullable=True),
        sa.Column('billing_street', sa.String(length=255), nullable=True),
        sa.Column('billing_street2', sa.String(length=255), nullable=True),
        sa.Column('billing_city', sa.String(length=100), nullable=True),
        sa.Column('billing_state', sa.String(length=50), nullable=True),
        sa.Column('billing_zip', sa.String(length=20), nullable=True),
        sa.Column('service_street', sa.String(length=255), nullable=True),
        sa.Column('service_street2', sa.String(length=255), nullable=True),
        sa.Column('service_city', sa.String(length=100), nullable=True),
        sa.Column('service_state', sa.String(length=50), nullable=True),
        sa.Column('service_zip', sa.String(length=20), nullable=True),
        sa.Column('balance', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('credit_not_approved', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('deposit_required', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_customers'))
    )
    op.create_index(op.f('ix_customers_organization_id'), 'customers', ['organization_id'], unique=False)
    op.create_index(op.f('ix_customers_name'), 'customers', ['name'], unique=False)

    op.create_table('customer_contacts',
        *_tenant_columns(),
        sa.Column('customer_id', sa.UUID(), nullable=False),
        sa.Column('contact_type', sa.String(length=50), server_default='other', nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('title', sa.String(length=100), nullable=True),
        sa.Column('is_primary', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], name=op.f('fk_customer_contacts_customer_id_customers')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_customer_contacts'))
    )
    op.create_index(op.f('ix_customer_contacts_organization_id'), 'customer_contacts', ['organization_id'], unique=False)
    op.create_index(op.f('ix_customer_contacts_customer_id'), 'customer_contacts', ['customer_id'], unique=False)

    op.create_table('customer_service_locations',
        *_tenant_columns(),
        sa.Column('customer_id', sa.UUID(), nullable=False),
        sa.Column('location_name', sa.String(length=255), nullable=False),
        sa.Column('location_description', sa.Text(), nullable=True),
        sa.Column('street', sa.String(length=255), nullable=True),
        sa.Column('street2', sa.String(length=255), nullable=True),
        sa.Column('city', sa.String(length=100), nullable=True),
        sa.Column('state', sa.String(length=50), nullable=True),
        sa.Column('zip', sa.String(length=20), nullable=True),
        sa.Column('contact_person', sa.String(length=255), nullable=True),
        sa.Column('contact_phone', sa.String(length=50), nullable=True),
        sa.Column('access_instructions', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('gps_lat', sa.Numeric(precision=9, scale=6), nullable=True),
        sa.Column('gps_lng', sa.Numeric(precision=9, scale=6), nullable=True),
        sa.Column('is_default', sa.Boolean(), server_default=sa.text('false'), nullable=False),
        sa.Column('is_active', sa.Boolean(), server_default=sa.text('true'), nullable=False),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], name=op.f('fk_customer_service_locations_customer_id_customers')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_customer_service_locations'))
    )
    op.create_index(op.f('ix_customer_service_locations_organization_id'), 'customer_service_locations', ['organization_id'], unique=False)
    op.create_index(op.f('ix_customer_service_locations_customer_id'), 'customer_service_locations', ['customer_id'], unique=False)

    op.create_table('vehicles',
        *_tenant_columns(),
        sa.Column('license_plate', sa.String(length=20), nullable=False),
        sa.Column('make', sa.String(length=100), nullable=False),
        sa.Column('model', sa.String(length=100), nullable=False),
        sa.Column('year', sa.Integer(), nullable=True),
        sa.Column('vin', sa.String(length=32), nullable=True),
        sa.Column('nickname', sa.String(length=100), nullable=True),
        sa.Column('vehicle_type', sa.String(length=50), nullable=True),
        sa.Column('fuel_type', sa.String(length=50), nullable=True),
        sa.Column('status', sa.String(length=50), server_default='active', nullable=False),
        sa.Column('current_mileage', sa.Integer(), nullable=True),
        sa.Column('purchase_cost', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('purchase_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_vehicles'))
    )
    op.create_index(op.f('ix_vehicles_organization_id'), 'vehicles', ['organization_id'], unique=False)
    op.create_index(op.f('ix_vehicles_license_plate'), 'vehicles', ['license_plate'], unique=False)

    op.create_table('jobs',
        *_tenant_columns(),
        sa.Column('job_number', sa.String(length=50), nullable=False),
        sa.Column('job_type', sa.String(length=50), nullable=False),
        sa.Column('status', sa.String(length=50), server_default='assigned', nullable=False),
        sa.Column('customer_id', sa.UUID(), nullable=False),
        sa.Column('vehicle_id', sa.UUID(), nullable=True),
        sa.Column('parent_job_id', sa.UUID(), nullable=True),
        sa.Column('scheduled_date', sa.Date(), nullable=False),
        sa.Column('scheduled_time', sa.String(length=20), nullable=True),
        sa.Column('total_price', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('special_instructions', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], name=op.f('fk_jobs_customer_id_customers')),
        sa.ForeignKeyConstraint(['vehicle_id'], ['vehicles.id'], name=op.f('fk_jobs_vehicle_id_vehicles')),
        sa.ForeignKeyConstraint(['parent_job_id'], ['jobs.id'], name=op.f('fk_jobs_parent_job_id_jobs')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_jobs'))
    )
    op.create_index(op.f('ix_jobs_organization_id'), 'jobs', ['organization_id'], unique=False)
    op.create_index(op.f('ix_jobs_job_number'), 'jobs', ['job_number'], unique=False)
    op.create_index(op.f('ix_jobs_customer_id'), 'jobs', ['customer_id'], unique=False)
    op.create_index(op.f('ix_jobs_vehicle_id'), 'jobs', ['vehicle_id'], unique=False)
    op.create_index(op.f('ix_jobs_scheduled_date'), 'jobs', ['scheduled_date'], unique=False)

    op.create_table('invoices',
        *_tenant_columns(),
        sa.Column('invoice_number', sa.String(length=100), nullable=True),
        sa.Column('customer_id', sa.UUID(), nullable=False),
        sa.Column('status', sa.String(length=50), server_default='unpaid', nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('subtotal', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('tax_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('additional_fees', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('discount_type', sa.String(length=20), nullable=True),
        sa.Column('discount_value', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('terms', sa.String(length=100), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['customer_id'], ['customers.id'], name=op.f('fk_invoices_customer_id_customers')),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_invoices'))
    )
    op.create_index(op.f('ix_invoices_organization_id'), 'invoices', ['organization_id'], unique=False)
    op.create_index(op.f('ix_invoices_invoice_number'), 'invoices', ['invoice_number'], unique=False)
    op.create_index(op.f('ix_invoices_customer_id'), 'invoices', ['customer_id'], unique=False)
    op.create_index(op.f('ix_invoices_due_date'), 'invoices', ['due_date'], unique=False)

    op.create_table('audit_logs',
        *_tenant_columns(),
        sa.Column('actor_id', sa.String(length=64), nullable=True),
        sa.Column('action', sa.String(length=100), nullable=False),
        sa.Column('entity_type', sa.String(length=100), nullable=False),
        sa.Column('entity_id', sa.UUID(), nullable=True),
        sa.Column('after_state', sa.Text(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_audit_logs'))
    )
    op.create_index(op.f('ix_audit_logs_organization_id'), 'audit_logs', ['organization_id'], unique=False)
    op.create_index(op.f('ix_audit_logs_action'), 'audit_logs', ['action'], unique=False)
    op.create_index(op.f('ix_audit_logs_entity_type'), 'audit_logs', ['entity_type'], unique=False)
    op.create_index(op.f('ix_audit_logs_entity_id'), 'audit_logs', ['entity_id'], unique=False)


def downgrade() -> None:
    op.drop_table('audit_logs')
    op.drop_table('invoices')
    op.drop_table('jobs')
    op.drop_table('vehicles')
    op.drop_table('customer_service_locations')
    op.drop_table('customer_contacts')
    op.drop_table('customers')
    sa.Enum(name='customer_type').drop(op.get_bind(), checkfirst=True)
