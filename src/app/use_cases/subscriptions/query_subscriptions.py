"""Subscription query use cases (read-only)"""

from typing import Optional
from libs.result import Result, Return, Error
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.use_cases import error_codes
from src.domain.subscription import SubscriptionStatus
from .dtos import SubscriptionDTO, SubscriptionListResponseDTO


class ListSubscriptions:
    """Use Case: List all subscriptions, newest first"""

    def __init__(self, subscription_repo: SubscriptionRepository):
        self.subscription_repo = subscription_repo

    async def execute(self, status: Optional[SubscriptionStatus] = None) -> Result[SubscriptionListResponseDTO]:
        try:
            subscriptions = await self.subscription_repo.list_all(status)
            return Return.ok(
                SubscriptionListResponseDTO(
                    subscriptions=[SubscriptionDTO.model_validate(s) for s in subscriptions],
                    count=len(subscriptions),
                )
            )
        except Exception as e:
            return Return.err(error_codes.from_exception(e, "LIST_SUBSCRIPTIONS_FAILED", "Failed to list subscriptions"))


class GetSubscription:
    """Use Case: Retrieve one subscription"""

    def __init__(self, subscription_repo: SubscriptionRepository):
        self.subscription_repo = subscription_repo

    async def execute(self, subscription_id: int) -> Result[SubscriptionDTO]:
        try:
            subscription = await self.subscription_repo.get_by_id(subscription_id)
            if not subscription:
                return Return.err(
                    error_codes.not_found(error_codes.SUBSCRIPTION_NOT_FOUND, "Subscription", subscription_id)
                )
            return Return.ok(SubscriptionDTO.model_validate(subscription))
        except Exception as e:
            return Return.err(error_codes.from_exception(e, "GET_SUBSCRIPTION_FAILED", "Failed to retrieve subscription"))


class ListSubscriptionsByEmail:
    """Use Case: List the subscriptions submitted with an email address"""

    def __init__(self, subscription_repo: SubscriptionRepository):
        self.subscription_repo = subscription_repo

    async def execute(self, email: Optional[str]) -> Result[SubscriptionListResponseDTO]:
        if not email or not email.strip():
            return Return.err(Error(code=error_codes.VALIDATION_ERROR, message="Email parameter is required"))

        try:
            subscriptions = await self.subscription_repo.list_by_email(email.strip())
            return Return.ok(
                SubscriptionListResponseDTO(
                    subscriptions=[SubscriptionDTO.model_validate(s) for s in subscriptions],
                    count=len(subscriptions),
                )
            )
        except Exception as e:
            return Return.err(error_codes.from_exception(e, "LIST_SUBSCRIPTIONS_FAILED", "Failed to list subscriptions"))
