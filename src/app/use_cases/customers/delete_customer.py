"""DeleteCustomer Use Case

Removes a customer together with its payments, payment requests and login
account, and returns its plots to Available.
"""

import logging
from datetime import datetime
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.payment_request_repository import PaymentRequestRepository
from src.app.repositories.plot_repository import PlotRepository
from src.app.use_cases import error_codes
from src.domain import plot_state
from .dtos import DeleteCustomerResultDTO
from .plots import lock_held_plots

logger = logging.getLogger(__name__)


class DeleteCustomer:
    """
    Use Case: Delete a customer

    Flow:
    1. Get customer with lock (NotFound if absent)
    2. Release plots still held by the customer
    3. Delete payments and payment requests
    4. Delete customer, then its login account
    5. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: AccountRepository,
        customer_repo: CustomerRepository,
        payment_repo: PaymentRepository,
        request_repo: PaymentRequestRepository,
        plot_repo: PlotRepository,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.customer_repo = customer_repo
        self.payment_repo = payment_repo
        self.request_repo = request_repo
        self.plot_repo = plot_repo

    async def execute(self, customer_id: int) -> Result[DeleteCustomerResultDTO]:
        try:
            # Step 1: Get customer with lock
            customer = await self.customer_repo.get_by_id(customer_id, for_update=True)
            if not customer:
                await self.uow.rollback()
                return Return.err(error_codes.not_found(error_codes.CUSTOMER_NOT_FOUND, "Customer", customer_id))

            # Step 2: Release plots
            plots = await lock_held_plots(self.plot_repo, customer)
            plot_state.release(plots, datetime.utcnow())
            await self.plot_repo.save_all(plots)

            # Step 3: Delete ledger and requests
            deleted_payments = await self.payment_repo.delete_by_customer(customer.id)
            await self.request_repo.delete_by_customer(customer.id)

            # Step 4: Delete customer and account
            account_id = customer.account_id
            await self.customer_repo.delete(customer)
            if account_id is not None:
                await self.account_repo.delete(account_id)

            # Step 5: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Deleted customer {customer_id}; released {len(plots)} plot(s), "
                f"removed {deleted_payments} payment(s)"
            )

            return Return.ok(
                DeleteCustomerResultDTO(
                    deleted_customer_id=customer_id,
                    released_plots=[p.number for p in plots],
                    deleted_payments=deleted_payments,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to delete customer {customer_id}: {e}")
            return Return.err(error_codes.from_exception(e, "DELETE_CUSTOMER_FAILED", "Failed to delete customer"))
