"""Compliance snapshot ORM model. Append-only point-in-time history."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    Boolean,
    Connection,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    event,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, Mapper, mapped_column
from sqlalchemy.sql import func

from fleet_compliance.infrastructure.persistence.database import Base
from fleet_compliance.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TenantMixin,
)


class ComplianceSnapshot(CuidMixin, TenantMixin, Base):
    """One evaluation result at computed_at. driver_id NULL = tenant rollup row."""

    __tablename__ = "compliance_snapshot"

    driver_id: Mapped[str | None] = mapped_column(
        String, ForeignKey("driver.id", ondelete="CASCADE"), nullable=True
    )
    compliance_score: Mapped[int] = mapped_column(Integer, nullable=False)
    compliant: Mapped[bool] = mapped_column(Boolean, nullable=False)
    expired_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    expiring_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    missing_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    computed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    details_json: Mapped[dict[str, Any]] = mapped_column(JSONB, nullable=False)

    __table_args__ = (
        Index(
            "ix_compliance_snapshot_tenant_driver_computed",
            "tenant_id",
            "driver_id",
            "computed_at",
        ),
    )


@event.listens_for(ComplianceSnapshot, "before_update")
def _prevent_snapshot_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: ComplianceSnapshot
) -> None:
    """Snapshots are append-only; updates are forbidden."""
    raise ValueError("Compliance snapshots are immutable and cannot be updated.")


@event.listens_for(ComplianceSnapshot, "before_delete")
def _prevent_snapshot_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: ComplianceSnapshot
) -> None:
    """Snapshots are history; they cannot be deleted."""
    raise ValueError("Compliance snapshots cannot be deleted.")
