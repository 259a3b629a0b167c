"""Compliance alert ORM model. Append-only; one row per dedupe key per tenant."""

from datetime import datetime
from typing import Any

from sqlalchemy import (
    CheckConstraint,
    Connection,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    event,
)
from sqlalchemy.orm import Mapped, Mapper, mapped_column
from sqlalchemy.sql import func

from fleet_compliance.domain.enums import AlertType
from fleet_compliance.infrastructure.persistence.database import Base
from fleet_compliance.infrastructure.persistence.models.mixins import (
    CuidMixin,
    TenantMixin,
)


class ComplianceAlert(CuidMixin, TenantMixin, Base):
    """Record that an alert condition was raised. No update/delete."""

    __tablename__ = "compliance_alert"

    driver_id: Mapped[str] = mapped_column(
        String, ForeignKey("driver.id", ondelete="CASCADE"), nullable=False, index=True
    )
    doc_id: Mapped[str] = mapped_column(
        String,
        ForeignKey("driver_compliance_document.id", ondelete="CASCADE"),
        nullable=False,
    )
    alert_type: Mapped[str] = mapped_column(String, nullable=False)
    alert_window_days: Mapped[int] = mapped_column(Integer, nullable=False)
    sent_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    channel: Mapped[str] = mapped_column(String, nullable=False)
    dedupe_key: Mapped[str] = mapped_column(String, nullable=False)

    __table_args__ = (
        UniqueConstraint("tenant_id", "dedupe_key", name="uq_compliance_alert_dedupe"),
        CheckConstraint(
            "alert_type IN ({})".format(
                ", ".join("'{}'".format(v) for v in AlertType.values())
            ),
            name="compliance_alert_type_check",
        ),
        CheckConstraint(
            "alert_window_days >= 0", name="compliance_alert_window_days_check"
        ),
    )


@event.listens_for(ComplianceAlert, "before_update")
def _prevent_alert_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: ComplianceAlert
) -> None:
    """Alerts are append-only; updates are forbidden."""
    raise ValueError("Compliance alerts are immutable and cannot be updated.")


@event.listens_for(ComplianceAlert, "before_delete")
def _prevent_alert_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: ComplianceAlert
) -> None:
    """Alerts are the dedupe history; deleting one would re-send it."""
    raise ValueError("Compliance alerts cannot be deleted.")
