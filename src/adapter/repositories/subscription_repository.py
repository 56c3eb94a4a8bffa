"""SQLAlchemy Subscription Repository Implementation

Implements subscription persistence using SQLAlchemy async session.
"""

from datetime import datetime
from typing import Optional, List
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.domain.subscription import Subscription, SubscriptionStatus


class SqlAlchemySubscriptionRepository(SubscriptionRepository):
    """
    SQLAlchemy implementation of SubscriptionRepository

    Uses async session for database operations.
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, subscription_id: int, for_update: bool = False) -> Optional[Subscription]:
        """
        Retrieve subscription by ID

        Args:
            subscription_id: Subscription ID
            for_update: If True, locks the row so only one decision is applied

        Returns:
            Subscription if found, None otherwise
        """
        statement = select(Subscription).where(Subscription.id == subscription_id)

        if for_update:
            statement = statement.with_for_update()

        result = await self.session.execute(statement)
        return result.scalar_one_or_none()

    async def list_all(self, status: Optional[SubscriptionStatus] = None) -> List[Subscription]:
        statement = select(Subscription)

        if status:
            statement = statement.where(Subscription.status == status)

        statement = statement.order_by(Subscription.created_at.desc(), Subscription.id.desc())
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def list_by_email(self, email: str) -> List[Subscription]:
        statement = (
            select(Subscription)
            .where(Subscription.email == email)
            .order_by(Subscription.created_at.desc(), Subscription.id.desc())
        )
        result = await self.session.execute(statement)
        return list(result.scalars().all())

    async def create(self, subscription: Subscription) -> Subscription:
        """
        Create a new subscription

        Args:
            subscription: Subscription entity to persist

        Returns:
            Created Subscription with generated ID
        """
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def update(self, subscription: Subscription) -> Subscription:
        subscription.updated_at = datetime.utcnow()
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription
