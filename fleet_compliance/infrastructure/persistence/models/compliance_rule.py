"""Compliance rule ORM model: required document types per (tenant, role)."""

from sqlalchemy import Boolean, CheckConstraint, Integer, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from fleet_compliance.infrastructure.persistence.database import Base
from fleet_compliance.infrastructure.persistence.models.mixins import MultiTenantModel


class ComplianceRule(MultiTenantModel, Base):
    """One rule per (tenant, role, doc_type). alert_windows is a JSON int list."""

    __tablename__ = "compliance_rule"

    role: Mapped[str] = mapped_column(String, nullable=False)
    doc_type: Mapped[str] = mapped_column(String, nullable=False)
    required: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)
    grace_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    alert_windows: Mapped[list[int]] = mapped_column(JSONB, nullable=False)

    __table_args__ = (
        UniqueConstraint(
            "tenant_id", "role", "doc_type", name="uq_compliance_rule_tenant_role_doc"
        ),
        CheckConstraint("grace_days >= 0", name="compliance_rule_grace_days_check"),
    )
