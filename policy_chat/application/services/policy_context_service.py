"""
Policy context service.

Loads structured policy fields and coverages and projects them into
read-only snapshots for prompt assembly.

Dependencies: sqlalchemy, policy_chat.boundary.db, policy_chat.models
System role: Policy store reader for the chat orchestrator
"""

import logging
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from policy_chat.boundary.db.CRUD.policy_crud import policy_crud
from policy_chat.boundary.db.models.policy_model import CoverageModel, PolicyModel
from policy_chat.core.exceptions import PolicyContextError
from policy_chat.models.policy import CoverageSnapshot, CoverageType, PolicyContextSnapshot

logger = logging.getLogger(__name__)


def to_coverage_snapshot(coverage: CoverageModel) -> CoverageSnapshot:
    return CoverageSnapshot(
        coverage_type=CoverageType.parse(coverage.coverage_type),
        coverage_subtype=coverage.coverage_subtype,
        each_occurrence_limit=coverage.each_occurrence_limit,
        aggregate_limit=coverage.aggregate_limit,
        deductible=coverage.deductible,
        premium=coverage.premium,
        details=coverage.details,
    )


def to_policy_snapshot(policy: PolicyModel) -> PolicyContextSnapshot:
    return PolicyContextSnapshot(
        policy_id=policy.id,
        policy_number=policy.policy_number,
        carrier_name=policy.carrier_name,
        insured_name=policy.insured_name,
        policy_status=policy.policy_status,
        effective_date=policy.effective_date,
        expiration_date=policy.expiration_date,
        total_premium=policy.total_premium,
        extraction_confidence=policy.extraction_confidence,
        coverages=[to_coverage_snapshot(coverage) for coverage in policy.coverages],
    )


class PolicyContextService:
    """Reads policy snapshots for a tenant."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def load_snapshots(
        self,
        tenant_id: UUID,
        policy_ids: list[UUID],
    ) -> list[PolicyContextSnapshot]:
        """
        Load snapshots for the given policies, in the given order.

        Args:
            tenant_id: Tenant isolation filter
            policy_ids: Policies to load; unknown IDs are skipped

        Returns:
            list[PolicyContextSnapshot]: One per found policy

        Raises:
            PolicyContextError: If the policy store query fails
        """
        if not policy_ids:
            return []

        try:
            policies = await policy_crud.get_with_coverages(self.db, tenant_id, policy_ids)
        except SQLAlchemyError as e:
            logger.error(f"{__name__}:load_snapshots - Policy query failed: {e}")
            raise PolicyContextError(
                "Failed to load policy context",
                details={"policy_count": len(policy_ids)},
            ) from e

        snapshots = [to_policy_snapshot(policy) for policy in policies]
        logger.info(
            f"{__name__}:load_snapshots - Loaded {len(snapshots)}/{len(policy_ids)} policies"
        )
        return snapshots
