"""RejectSubscription Use Case

Rejects a pending subscription and returns all of its plots to Available.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.plot_repository import PlotRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.use_cases import error_codes
from src.app.use_cases.plots.dtos import to_plot_dto
from src.domain import plot_state
from src.domain.subscription import SubscriptionStatus
from .dtos import SubscriptionDTO, SubscriptionResultDTO
from .plots import lock_plots, subscription_plot_ids

logger = logging.getLogger(__name__)


class RejectSubscription:
    """
    Use Case: Reject a pending subscription

    Business Rules:
    1. Only pending subscriptions can be rejected (Conflict otherwise)
    2. Every plot in plot_ids goes back to Available with owner cleared
    3. Rejection is terminal
    """

    def __init__(
        self,
        uow: UnitOfWork,
        plot_repo: PlotRepository,
        subscription_repo: SubscriptionRepository,
    ):
        self.uow = uow
        self.plot_repo = plot_repo
        self.subscription_repo = subscription_repo

    async def execute(self, subscription_id: int) -> Result[SubscriptionResultDTO]:
        try:
            # Step 1: Get subscription with lock
            subscription = await self.subscription_repo.get_by_id(subscription_id, for_update=True)
            if not subscription:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.SUBSCRIPTION_NOT_FOUND, "Subscription", subscription_id)
                )

            # Step 2: Check subscription is pending
            if subscription.status != SubscriptionStatus.PENDING:
                await self.uow.rollback()
                logger.warning(f"Refused to reject subscription {subscription.id}: already {subscription.status.value}")
                return Return.err(
                    Error(
                        code=error_codes.SUBSCRIPTION_NOT_PENDING,
                        message=f"Subscription {subscription.id} is already {subscription.status.value}",
                        reason="Only pending subscriptions can be rejected",
                    )
                )

            # Step 3: Lock plots
            plots, missing = await lock_plots(self.plot_repo, subscription_plot_ids(subscription))
            if missing:
                await self.uow.rollback()
                return Return.err(missing)

            # Step 4: Release plots
            now = datetime.utcnow()
            plot_state.reject(plots, now)
            plots = await self.plot_repo.save_all(plots)

            # Step 5: Mark subscription rejected
            subscription.status = SubscriptionStatus.REJECTED
            subscription.decided_at = now
            subscription = await self.subscription_repo.update(subscription)

            # Step 6: Commit transaction
            await self.uow.commit()

            logger.info(f"Rejected subscription {subscription.id}; released {len(plots)} plot(s)")

            return Return.ok(
                SubscriptionResultDTO(
                    subscription=SubscriptionDTO.model_validate(subscription),
                    plots=[to_plot_dto(p) for p in plots],
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to reject subscription {subscription_id}: {e}")
            return Return.err(
                error_codes.from_exception(e, "REJECT_SUBSCRIPTION_FAILED", "Failed to reject subscription")
            )
