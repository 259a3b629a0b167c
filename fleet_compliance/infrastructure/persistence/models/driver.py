"""Driver and driver compliance document ORM models (read by the engine)."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from fleet_compliance.infrastructure.persistence.database import Base
from fleet_compliance.infrastructure.persistence.models.mixins import (
    MultiTenantModel,
    SoftDeleteMixin,
)


class Driver(MultiTenantModel, SoftDeleteMixin, Base):
    """Fleet driver. Table: driver. Soft-deleted drivers are never evaluated."""

    __tablename__ = "driver"

    first_name: Mapped[str] = mapped_column(String, nullable=False)
    last_name: Mapped[str] = mapped_column(String, nullable=False)
    email: Mapped[str | None] = mapped_column(String, nullable=True)
    license_number: Mapped[str | None] = mapped_column(String, nullable=True)

    documents: Mapped[list["DriverComplianceDocument"]] = relationship(
        back_populates="driver", lazy="noload"
    )


class DriverComplianceDocument(MultiTenantModel, SoftDeleteMixin, Base):
    """Compliance document on file for a driver (license, medical card, ...)."""

    __tablename__ = "driver_compliance_document"

    driver_id: Mapped[str] = mapped_column(
        String, ForeignKey("driver.id", ondelete="CASCADE"), nullable=False
    )
    doc_type: Mapped[str] = mapped_column(String, nullable=False)
    expires_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    # Review status set by the host application; the engine classifies by expiry only.
    status: Mapped[str | None] = mapped_column(String, nullable=True)
    file_path: Mapped[str | None] = mapped_column(String, nullable=True)

    driver: Mapped[Driver] = relationship(back_populates="documents", lazy="noload")

    __table_args__ = (
        Index("ix_driver_compliance_document_tenant_driver", "tenant_id", "driver_id"),
    )
