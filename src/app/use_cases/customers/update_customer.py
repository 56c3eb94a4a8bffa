"""UpdateCustomer Use Case

Edits a customer. Plot list or name changes move plot ownership; balance and
status are recomputed from the full ledger on every update.
"""

import logging
from datetime import datetime
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.repositories.plot_repository import PlotRepository
from src.app.use_cases import error_codes
from src.app.use_cases.payments.ledger import recompute_balance
from src.domain import plot_state
from src.domain.financials import ZERO, to_money
from .details import to_details_dto
from .dtos import CustomerDetailsDTO, UpdateCustomerCommandDTO
from .plots import lock_held_plots, lock_plots_by_number, normalize_numbers

logger = logging.getLogger(__name__)

PROFILE_FIELDS = ("contact", "date_taken", "payment_schedule", "plot_size", "location")


class UpdateCustomer:
    """
    Use Case: Update a customer

    Business Rules:
    1. initial_deposit >= 0 and total_price > 0 when supplied
    2. New plots not already held must be Available; previously held plots
       are released before the new list is sold
    3. A name change renames the linked account and the plots' owner
    4. Balance/status always recomputed over the full ledger
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: AccountRepository,
        customer_repo: CustomerRepository,
        payment_repo: PaymentRepository,
        plot_repo: PlotRepository,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.customer_repo = customer_repo
        self.payment_repo = payment_repo
        self.plot_repo = plot_repo

    async def execute(self, command: UpdateCustomerCommandDTO) -> Result[CustomerDetailsDTO]:
        # Step 1: Validate supplied fields
        if command.initial_deposit is not None and to_money(command.initial_deposit) < ZERO:
            return Return.err(Error(code=error_codes.VALIDATION_ERROR, message="initial_deposit must not be negative"))
        if command.total_price is not None and to_money(command.total_price) <= ZERO:
            return Return.err(Error(code=error_codes.VALIDATION_ERROR, message="total_price must be greater than 0"))
        if command.name is not None and not command.name.strip():
            return Return.err(Error(code=error_codes.VALIDATION_ERROR, message="name must not be empty"))

        try:
            # Step 2: Get customer with lock
            customer = await self.customer_repo.get_by_id(command.customer_id, for_update=True)
            if not customer:
                await self.uow.rollback()
                return Return.err(
                    error_codes.not_found(error_codes.CUSTOMER_NOT_FOUND, "Customer", command.customer_id)
                )

            new_name = command.name.strip() if command.name is not None else customer.name
            new_numbers = (
                normalize_numbers(command.plots_held) if command.plots_held is not None else list(customer.plots_held or [])
            )

            # Step 3: Reassign plots when the plot list or the holder name changes
            if command.plots_held is not None or new_name != customer.name:
                previous_plots = await lock_held_plots(self.plot_repo, customer)
                new_plots, missing = await lock_plots_by_number(self.plot_repo, new_numbers)
                if missing:
                    await self.uow.rollback()
                    return Return.err(missing)

                now = datetime.utcnow()
                plot_state.reassign(previous_plots, new_plots, new_name, now)
                released = [p for p in previous_plots if p.id not in {n.id for n in new_plots}]
                await self.plot_repo.save_all(released + new_plots)
                customer.plots_held = new_numbers

            # Step 4: Apply field changes
            if new_name != customer.name:
                customer.name = new_name
                if customer.account_id is not None:
                    account = await self.account_repo.get_by_id(customer.account_id)
                    if account:
                        account.name = new_name
                        await self.account_repo.update(account)

            for field in PROFILE_FIELDS:
                value = getattr(command, field)
                if value is not None:
                    setattr(customer, field, value)
            if command.price_per_plot is not None:
                customer.price_per_plot = [str(to_money(p)) for p in command.price_per_plot]
            if command.initial_deposit is not None:
                customer.initial_deposit = to_money(command.initial_deposit)
            if command.total_price is not None:
                customer.total_price = to_money(command.total_price)

            customer = await self.customer_repo.update(customer)

            # Step 5: Recompute financials over the full ledger
            payments = await self.payment_repo.list_by_customer(customer.id)
            customer, financials = await recompute_balance(
                customer, self.customer_repo, self.payment_repo, payments
            )

            # Step 6: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Updated customer {customer.id}; plots={', '.join(customer.plots_held) or '-'} "
                f"balance={financials.balance} status={financials.status.value}"
            )
            return Return.ok(to_details_dto(customer, payments, financials))

        except plot_state.PlotTransitionError as e:
            await self.uow.rollback()
            logger.warning(f"Plot reassignment for customer {command.customer_id} refused: {e}")
            return Return.err(error_codes.from_exception(e, "UPDATE_CUSTOMER_FAILED", "Failed to update customer"))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to update customer {command.customer_id}: {e}")
            return Return.err(error_codes.from_exception(e, "UPDATE_CUSTOMER_FAILED", "Failed to update customer"))
