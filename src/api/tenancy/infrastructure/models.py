"""SQLAlchemy ORM models for the tenancy bounded context."""

from datetime import datetime

from sqlalchemy import DateTime, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from infrastructure.database.models import Base
from tenancy.domain.value_objects import (
    TenancyWarning,
    TenancyWarningRecord,
    WarnType,
)


class TenancyWarningModel(Base):
    """ORM model for the tenancy_warnings table.

    Append-only log of soft-mode warnings, written only when
    TENANCY_WARN_PERSIST is enabled.
    """

    __tablename__ = "tenancy_warnings"
    __table_args__ = (
        Index("tenancy_warnings_occurred_at_idx", "occurred_at"),
        Index("tenancy_warnings_warn_type_idx", "warn_type"),
        Index("tenancy_warnings_tenant_idx", "effective_tenant_id"),
    )

    id: Mapped[str] = mapped_column(String(26), primary_key=True)  # ULID
    occurred_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False
    )
    route: Mapped[str] = mapped_column(Text, nullable=False)
    method: Mapped[str] = mapped_column(String(16), nullable=False)
    warn_type: Mapped[str] = mapped_column(String(32), nullable=False)
    actor_user_id: Mapped[str | None] = mapped_column(String(255), nullable=True)
    effective_tenant_id: Mapped[str | None] = mapped_column(
        String(255), nullable=True
    )
    resource_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    @classmethod
    def from_record(cls, record: TenancyWarningRecord) -> "TenancyWarningModel":
        warning = record.warning
        return cls(
            id=record.id,
            occurred_at=record.occurred_at,
            route=warning.route,
            method=warning.method,
            warn_type=warning.warn_type.value,
            actor_user_id=warning.actor_user_id,
            effective_tenant_id=warning.effective_tenant_id,
            resource_id=warning.resource_id,
            notes=warning.notes,
        )

    def to_record(self) -> TenancyWarningRecord:
        return TenancyWarningRecord(
            warning=TenancyWarning(
                route=self.route,
                method=self.method,
                warn_type=WarnType(self.warn_type),
                actor_user_id=self.actor_user_id,
                effective_tenant_id=self.effective_tenant_id,
                resource_id=self.resource_id,
                notes=self.notes,
            ),
            id=self.id,
            occurred_at=self.occurred_at,
        )

    def __repr__(self) -> str:
        """Return string representation."""
        return (
            f"<TenancyWarningModel(id={self.id}, warn_type={self.warn_type}, "
            f"route={self.method} {self.route})>"
        )
