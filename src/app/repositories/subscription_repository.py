"""Subscription Repository Interface

Defines the contract for subscription persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional, List
from src.domain.subscription import Subscription, SubscriptionStatus


class SubscriptionRepository(ABC):
    """
    Repository interface for Subscription persistence

    Provides access to plot applications for the subscription workflow.
    """

    @abstractmethod
    async def get_by_id(self, subscription_id: int, for_update: bool = False) -> Optional[Subscription]:
        """
        Retrieve subscription by ID

        Args:
            subscription_id: Subscription ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Subscription if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_all(self, status: Optional[SubscriptionStatus] = None) -> List[Subscription]:
        """
        Retrieve all subscriptions, newest first

        Args:
            status: Optional filter by status

        Returns:
            List of subscriptions
        """
        pass

    @abstractmethod
    async def list_by_email(self, email: str) -> List[Subscription]:
        """
        Retrieve subscriptions submitted with an email, newest first

        Args:
            email: Applicant email

        Returns:
            List of subscriptions
        """
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """
        Create a new subscription

        Args:
            subscription: Subscription entity to persist

        Returns:
            Created Subscription with generated ID
        """
        pass

    @abstractmethod
    async def update(self, subscription: Subscription) -> Subscription:
        """
        Update an existing subscription

        Args:
            subscription: Subscription entity with updated values

        Returns:
            Updated Subscription
        """
        pass
