import uuid

from sqlalchemy import Boolean, ForeignKey, Numeric, String, Text
from sqlalchemy import Enum as SAEnum
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bulkimport.db.base import Base, OrganizationMixin, TimestampMixin, UUIDMixin

CUSTOMER_TYPES = (
    "commercial",
    "construction",
    "emergency_disaster_relief",
    "events_festivals",
    "municipal_government",
    "not_selected",
    "private_events_weddings",
    "sports_recreation",
)

CONTACT_TYPES = (
    "primary",
    "billing",
    "service",
    "site_manager",
    "admin",
    "emergency",
    "manager",
    "accounting",
    "other",
)


class Customer(Base, UUIDMixin, OrganizationMixin, TimestampMixin):
    __tablename__ = "customers"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    customer_type: Mapped[str | None] = mapped_column(
        SAEnum(*CUSTOMER_TYPES, name="customer_type"), nullable=True
    )
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    important_information: Mapped[str | None] = mapped_column(Text, nullable=True)

    billing_street: Mapped[str | None] = mapped_column(String(255), nullable=True)
    billing_street2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    billing_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    billing_state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    billing_zip: Mapped[str | None] = mapped_column(String(20), nullable=True)

    service_street: Mapped[str | None] = mapped_column(String(255), nullable=True)
    service_street2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    service_city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    service_state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    service_zip: Mapped[str | None] = mapped_column(String(20), nullable=True)

    balance: Mapped[float | None] = mapped_column(Numeric(12, 2), nullable=True)
    credit_not_approved: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    deposit_required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    contacts: Mapped[list["CustomerContact"]] = relationship("CustomerContact", back_populates="customer")
    service_locations: Mapped[list["CustomerServiceLocation"]] = relationship(
        "CustomerServiceLocation", back_populates="customer"
    )


class CustomerContact(Base, UUIDMixin, OrganizationMixin, TimestampMixin):
    __tablename__ = "customer_contacts"

    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False, index=True
    )
    contact_type: Mapped[str] = mapped_column(String(50), nullable=False, default="other")
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    title: Mapped[str | None] = mapped_column(String(100), nullable=True)
    is_primary: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    customer: Mapped["Customer"] = relationship("Customer", back_populates="contacts")


class CustomerServiceLocation(Base, UUIDMixin, OrganizationMixin, TimestampMixin):
    __tablename__ = "customer_service_locations"

    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False, index=True
    )
    location_name: Mapped[str] = mapped_column(String(255), nullable=False)
    location_description: Mapped[str | None] = mapped_column(Text, nullable=True)
    street: Mapped[str | None] = mapped_column(String(255), nullable=True)
    street2: Mapped[str | None] = mapped_column(String(255), nullable=True)
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    state: Mapped[str | None] = mapped_column(String(50), nullable=True)
    zip: Mapped[str | None] = mapped_column(String(20), nullable=True)
    contact_person: Mapped[str | None] = mapped_column(String(255), nullable=True)
    contact_phone: Mapped[str | None] = mapped_column(String(50), nullable=True)
    access_instructions: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
    gps_lat: Mapped[float | None] = mapped_column(Numeric(9, 6), nullable=True)
    gps_lng: Mapped[float | None] = mapped_column(Numeric(9, 6), nullable=True)
    is_default: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    customer: Mapped["Customer"] = relationship("Customer", back_populates="service_locations")
