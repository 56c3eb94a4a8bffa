"""SubmitSubscription Use Case

Records an application for one or more plots and reserves every requested
plot in the same transaction.
"""

import logging
from decimal import Decimal
from typing import Dict, List, Optional, Sequence
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.blob_store import BlobStore, Upload
from src.app.repositories.plot_repository import PlotRepository
from src.app.repositories.subscription_repository import SubscriptionRepository
from src.app.use_cases import error_codes
from src.app.use_cases.plots.dtos import to_plot_dto
from src.domain import plot_state
from src.domain.financials import to_money, ZERO
from src.domain.plot import Plot, PlotStatus
from src.domain.subscription import Subscription, SubscriptionStatus
from .dtos import SubmitSubscriptionCommandDTO, SubscriptionDTO, SubscriptionResultDTO
from .plots import lock_plots

logger = logging.getLogger(__name__)

SUBSCRIPTION_UPLOADS = "subscriptions"

# Upload field name -> Subscription reference attribute
UPLOAD_FIELDS = {
    "passport_photo": "passport_photo_ref",
    "identification_file": "identification_file_ref",
    "signature_file": "signature_file_ref",
}


def price_plots(
    plots: Sequence[Plot],
    caller_prices: Sequence[str],
    default_price: Decimal,
) -> tuple[Decimal, List[str]]:
    """
    Total and per-plot prices for a subscription

    Plot prices are used when they add up to more than zero. Otherwise the
    caller's price list is summed, and if that is empty or zero every plot
    costs default_price.
    """
    plot_prices = [to_money(plot.price) for plot in plots]
    total = sum(plot_prices, ZERO)
    if total > ZERO:
        return total, [str(p) for p in plot_prices]

    numeric = [to_money(p) for p in caller_prices if str(p).strip()]
    total = sum(numeric, ZERO)
    if total > ZERO:
        return total, [str(p) for p in numeric]

    default = to_money(default_price)
    return default * len(plots), [str(default)] * len(plots)


class SubmitSubscription:
    """
    Use Case: Submit a subscription

    Business Rules:
    1. At least one plot; duplicates collapse, order kept (first is primary)
    2. Every plot must exist and be Available; checked under row locks
       and claimed again when saved, so a conflict leaves no subscription
    3. price = sum of plot prices, with caller list and per-plot default
       as fallbacks
    4. Subscription insert and plot reservations commit together

    Flow:
    1. Normalize plot ids
    2. Lock plots, check existence and availability
    3. Compute price
    4. Insert subscription
    5. Reserve plots for the subscription
    6. Store uploaded documents
    7. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        plot_repo: PlotRepository,
        subscription_repo: SubscriptionRepository,
        blob_store: BlobStore,
        default_plot_price: Decimal,
    ):
        self.uow = uow
        self.plot_repo = plot_repo
        self.subscription_repo = subscription_repo
        self.blob_store = blob_store
        self.default_plot_price = to_money(default_plot_price)

    async def execute(
        self,
        command: SubmitSubscriptionCommandDTO,
        uploads: Optional[Dict[str, Upload]] = None,
    ) -> Result[SubscriptionResultDTO]:
        # Step 1: Normalize plot ids
        plot_ids = list(dict.fromkeys(command.plot_ids))
        if not plot_ids:
            return Return.err(
                Error(
                    code=error_codes.VALIDATION_ERROR,
                    message="At least one plot must be selected",
                )
            )

        try:
            # Step 2: Lock plots and check every one before writing
            plots, missing = await lock_plots(self.plot_repo, plot_ids)
            if missing:
                await self.uow.rollback()
                return Return.err(missing)

            plot_state.require_status(plots, [PlotStatus.AVAILABLE], "reserved")

            # Step 3: Compute price
            price, price_per_plot = price_plots(plots, command.price_per_plot, self.default_plot_price)

            # Step 4: Insert subscription
            details = command.model_dump(exclude={"plot_ids", "price_per_plot"})
            subscription = await self.subscription_repo.create(
                Subscription(
                    **details,
                    status=SubscriptionStatus.PENDING,
                    plot_ids=plot_ids,
                    plot_id=plot_ids[0],
                    price=price,
                    price_per_plot=price_per_plot,
                )
            )

            # Step 5: Reserve plots for the subscription
            plot_state.reserve(plots, subscription.name, subscription.id)
            plots = await self.plot_repo.save_all(plots)

            # Step 6: Store uploaded documents once the plots are held
            stored = False
            for field, attribute in UPLOAD_FIELDS.items():
                upload = (uploads or {}).get(field)
                if upload is not None:
                    setattr(subscription, attribute, await self.blob_store.store_upload(SUBSCRIPTION_UPLOADS, upload))
                    stored = True
            if stored:
                subscription = await self.subscription_repo.update(subscription)

            # Step 7: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Subscription {subscription.id} submitted by {subscription.email} for plots "
                f"{', '.join(p.number for p in plots)}; price={price}"
            )

            return Return.ok(
                SubscriptionResultDTO(
                    subscription=SubscriptionDTO.model_validate(subscription),
                    plots=[to_plot_dto(p) for p in plots],
                )
            )

        except plot_state.PlotTransitionError as e:
            await self.uow.rollback()
            logger.warning(f"Subscription by {command.email} refused: {e}")
            return Return.err(error_codes.from_exception(e, "SUBMIT_SUBSCRIPTION_FAILED", "Failed to submit subscription"))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to submit subscription for {command.email}: {e}")
            return Return.err(error_codes.from_exception(e, "SUBMIT_SUBSCRIPTION_FAILED", "Failed to submit subscription"))
