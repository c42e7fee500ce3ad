import uuid

from sqlalchemy import String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from bulkimport.db.base import Base, OrganizationMixin, TimestampMixin, UUIDMixin


class AuditLog(Base, UUIDMixin, OrganizationMixin, TimestampMixin):
    """Append-only trail of tenant-scoped actions such as bulk imports."""

    __tablename__ = "audit_logs"

    actor_id: Mapped[str | None] = mapped_column(String(64), nullable=True)  # auth-provider user id
    action: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    entity_type: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    entity_id: Mapped[uuid.UUID | None] = mapped_column(UUID(as_uuid=True), nullable=True, index=True)
    after_state: Mapped[str | None] = mapped_column(Text, nullable=True)  # JSON snapshot
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
