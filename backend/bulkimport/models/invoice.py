import uuid
from datetime import date

from sqlalchemy import Date, ForeignKey, Numeric, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from bulkimport.db.base import Base, OrganizationMixin, TimestampMixin, UUIDMixin

INVOICE_STATUSES = ("draft", "unpaid", "sent", "paid", "overdue", "cancelled")


class Invoice(Base, UUIDMixin, OrganizationMixin, TimestampMixin):
    __tablename__ = "invoices"

    invoice_number: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    customer_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), ForeignKey("customers.id"), nullable=False, index=True
    )
    status: Mapped[str] = mapped_column(String(50), nullable=False, default="unpaid")
    amount: Mapped[float] = mapped_column(Numeric(12, 2), nullable=False)
    subtotal: Mapped[float | None] = mapped_column(Numeric(12, 2), nullable=True)
    tax_amount: Mapped[float | None] = mapped_column(Numeric(12, 2), nullable=True)
    additional_fees: Mapped[float | None] = mapped_column(Numeric(12, 2), nullable=True)
    discount_type: Mapped[str | None] = mapped_column(String(20), nullable=True)  # percentage, fixed
    discount_value: Mapped[float | None] = mapped_column(Numeric(12, 2), nullable=True)
    due_date: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    terms: Mapped[str | None] = mapped_column(String(100), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
