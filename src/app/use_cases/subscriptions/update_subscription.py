"""UpdateSubscription Use Case

Edits the applicant details of a subscription. Status, plots and price only
change through submit, approve and reject.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.use_cases import error_codes
from .dtos import SubscriptionDTO, UpdateSubscriptionCommandDTO

logger = logging.getLogger(__name__)


class UpdateSubscription:

    def __init__(self, uow: UnitOfWork, subscription_repo: SubscriptionRepository):
        self.uow = uow
        self.subscription_repo = subscription_repo

    async def execute(self, command: UpdateSubscriptionCommandDTO) -> Result[SubscriptionDTO]:
        changes = command.model_dump(exclude={"subscription_id"}, exclude_none=True)
        if not changes:
            return Return.err(Error(code=error_codes.VALIDATION_ERROR, message="No fields to update"))

        try:
            subscription = await self.subscription_repo.get_by_id(command.subscription_id, for_update=True)
            if not subscription:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.SUBSCRIPTION_NOT_FOUND, "Subscription", command.subscription_id)
                )

            for field, value in changes.items():
                setattr(subscription, field, value)
            subscription = await self.subscription_repo.update(subscription)

            await self.uow.commit()

            logger.info(f"Updated subscription {subscription.id}: {', '.join(sorted(changes))}")
            return Return.ok(SubscriptionDTO.model_validate(subscription))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to update subscription {command.subscription_id}: {e}")
            return Return.err(
                error_codes.from_exception(e, "UPDATE_SUBSCRIPTION_FAILED", "Failed to update subscription")
            )
