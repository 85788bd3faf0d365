"""
Policy CRUD operations.

Tenant-scoped reads of policies with their coverages eagerly loaded.

Dependencies: sqlalchemy, policy_chat.boundary.db.models
System role: Policy store read interface
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from policy_chat.boundary.db.CRUD.base_crud import BaseCRUD
from policy_chat.boundary.db.models.policy_model import PolicyModel


class PolicyCRUD(BaseCRUD[PolicyModel]):
    """CRUD operations for PolicyModel."""

    def __init__(self) -> None:
        super().__init__(PolicyModel)

    async def get_with_coverages(
        self,
        session: AsyncSession,
        tenant_id: UUID,
        policy_ids: list[UUID],
    ) -> list[PolicyModel]:
        """
        Retrieve policies with coverages, in the order of `policy_ids`.

        Args:
            session: Async database session
            tenant_id: Tenant isolation filter
            policy_ids: Policy UUIDs to load; unknown IDs are skipped

        Returns:
            Found policies ordered as requested
        """
        if not policy_ids:
            return []

        stmt = (
            select(PolicyModel)
            .where(PolicyModel.tenant_id == tenant_id, PolicyModel.id.in_(policy_ids))
            .options(selectinload(PolicyModel.coverages))
        )
        result = await session.execute(stmt)
        by_id = {policy.id: policy for policy in result.scalars().all()}
        return [by_id[policy_id] for policy_id in policy_ids if policy_id in by_id]


policy_crud = PolicyCRUD()
