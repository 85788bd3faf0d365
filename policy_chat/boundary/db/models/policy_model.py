"""
Policy and coverage ORM models.

Structured fields produced by the extraction pipeline. Read-only from the
chat core, which projects them into PolicyContextSnapshot per turn.

Dependencies: sqlalchemy, policy_chat.boundary.db.base
System role: Structured policy data store
"""

from datetime import date
from decimal import Decimal
from uuid import UUID

from sqlalchemy import JSON, Date, ForeignKey, Numeric, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from policy_chat.boundary.db.base import Base, TimestampMixin, UUIDMixin


class PolicyModel(Base, UUIDMixin, TimestampMixin):
    """
    Policy ORM model.

    Attributes:
        tenant_id: Owning tenant
        source_document_id: Document the policy was extracted from
        coverages: Coverage rows (cascade delete)
    """

    __tablename__ = "policies"

    tenant_id: Mapped[UUID] = mapped_column(Uuid(as_uuid=True), nullable=False, index=True)
    source_document_id: Mapped[UUID | None] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("documents.id", ondelete="SET NULL"),
        nullable=True,
    )
    policy_number: Mapped[str | None] = mapped_column(String(100), nullable=True)
    carrier_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    insured_name: Mapped[str | None] = mapped_column(String(255), nullable=True)
    policy_status: Mapped[str | None] = mapped_column(String(50), nullable=True)
    effective_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    expiration_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    total_premium: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    extraction_confidence: Mapped[Decimal | None] = mapped_column(Numeric(5, 4), nullable=True)

    coverages = relationship(
        "CoverageModel",
        back_populates="policy",
        cascade="all, delete-orphan",
        order_by="CoverageModel.created_at",
    )


class CoverageModel(Base, UUIDMixin, TimestampMixin):
    """
    Coverage row attached to a policy.

    coverage_type holds a CoverageType value; unknown values read as OTHER.
    """

    __tablename__ = "coverages"

    policy_id: Mapped[UUID] = mapped_column(
        Uuid(as_uuid=True),
        ForeignKey("policies.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    coverage_type: Mapped[str] = mapped_column(String(50), nullable=False)
    coverage_subtype: Mapped[str | None] = mapped_column(String(100), nullable=True)
    each_occurrence_limit: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    aggregate_limit: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    deductible: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    premium: Mapped[Decimal | None] = mapped_column(Numeric(14, 2), nullable=True)
    details: Mapped[dict | None] = mapped_column(JSON, nullable=True)

    policy = relationship("PolicyModel", back_populates="coverages")
