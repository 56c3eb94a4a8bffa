"""CreateCustomer Use Case

Onboards a buyer: login account, customer record with initial financials,
and the sale of the listed plots, in one transaction.
"""

import logging
from decimal import Decimal
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.services.authenticator import Authenticator
from src.app.repositories.account_repository import AccountRepository
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.plot_repository import PlotRepository
from src.app.use_cases import error_codes
from src.domain import plot_state
from src.domain.account import AccountRole, AuthenticationAccount
from src.domain.customer import Customer
from src.domain.plot import PlotStatus
from src.domain.financials import ZERO, compute_financials, to_money, total_price_for
from .details import to_details_dto
from .dtos import CreateCustomerCommandDTO, CreateCustomerResultDTO, DefaultCredentialDTO
from .plots import lock_plots_by_number, normalize_numbers

logger = logging.getLogger(__name__)


class CreateCustomer:
    """
    Use Case: Create a customer

    Business Rules:
    1. name, email and contact are required
    2. Email must not belong to another account or customer (Conflict)
    3. total_price > 0: given, or derived from price_per_plot, or from the
       listed plots' own prices
    4. A new login account gets the contact number as password; an
       existing self-registered customer login is linked instead
    5. Listed plots must be Available and move straight to Sold
    6. Balance/status computed from the deposit with an empty ledger

    Flow:
    1. Validate input
    2. Check email is free
    3. Lock plots and derive total price
    4. Create login account
    5. Create customer with initial financials
    6. Sell plots to the customer
    7. Commit transaction
    """

    def __init__(
        self,
        uow: UnitOfWork,
        account_repo: AccountRepository,
        customer_repo: CustomerRepository,
        plot_repo: PlotRepository,
        authenticator: Authenticator,
    ):
        self.uow = uow
        self.account_repo = account_repo
        self.customer_repo = customer_repo
        self.plot_repo = plot_repo
        self.authenticator = authenticator

    async def execute(self, command: CreateCustomerCommandDTO) -> Result[CreateCustomerResultDTO]:
        # Step 1: Validate input
        name = (command.name or "").strip()
        email = (command.email or "").strip().lower()
        contact = (command.contact or "").strip()
        if not name or not email or not contact:
            return Return.err(
                Error(
                    code=error_codes.VALIDATION_ERROR,
                    message="Name, email, and contact are required fields",
                )
            )
        if to_money(command.initial_deposit) < ZERO:
            return Return.err(
                Error(code=error_codes.VALIDATION_ERROR, message="initial_deposit must not be negative")
            )

        plot_numbers = normalize_numbers(command.plots_held)

        try:
            # Step 2: Check email is free (a self-registered customer login is reused)
            account = await self.account_repo.get_by_email(email)
            if await self.customer_repo.get_by_email(email) or (
                account and (account.role != AccountRole.CUSTOMER or await self.customer_repo.get_by_account_id(account.id))
            ):
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=error_codes.EMAIL_ALREADY_REGISTERED,
                        message="User with this email already exists",
                    )
                )

            # Step 3: Lock plots and derive total price
            plots, missing = await lock_plots_by_number(self.plot_repo, plot_numbers)
            if missing:
                await self.uow.rollback()
                return Return.err(missing)

            total_price = self._total_price(command, plots)
            if total_price <= ZERO:
                await self.uow.rollback()
                return Return.err(
                    Error(
                        code=error_codes.VALIDATION_ERROR,
                        message="total_price must be greater than 0",
                        reason="Give total_price, price_per_plot or plots that carry a price",
                    )
                )

            plot_state.require_status(plots, [PlotStatus.AVAILABLE], "sold")

            # Step 4: Create login account unless the customer already registered one
            login = None
            if account is None:
                account = await self.account_repo.create(
                    AuthenticationAccount(
                        name=name,
                        email=email,
                        password_hash=self.authenticator.hash_secret(contact),
                        role=AccountRole.CUSTOMER,
                    )
                )
                login = DefaultCredentialDTO(email=email, password=contact)

            # Step 5: Create customer with initial financials
            customer = Customer(
                account_id=account.id,
                name=name,
                email=email,
                contact=contact,
                plots_held=plot_numbers,
                price_per_plot=[str(to_money(p)) for p in command.price_per_plot],
                initial_deposit=to_money(command.initial_deposit),
                total_price=total_price,
                date_taken=command.date_taken,
                payment_schedule=command.payment_schedule,
                plot_size=command.plot_size,
                location=command.location,
            )
            financials = compute_financials(customer, [], previous_status=None)
            customer.balance = financials.balance
            customer.status = financials.status
            customer = await self.customer_repo.create(customer)

            # Step 6: Sell plots to the customer
            plot_state.direct_sell(plots, customer.name)
            await self.plot_repo.save_all(plots)

            # Step 7: Commit transaction
            await self.uow.commit()

            logger.info(
                f"Created customer {customer.id} ({customer.email}) with plots {', '.join(plot_numbers) or '-'}; "
                f"balance={financials.balance} status={financials.status.value}"
            )

            return Return.ok(
                CreateCustomerResultDTO(
                    customer=to_details_dto(customer, [], financials),
                    login=login,
                )
            )

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create customer {email}: {e}")
            return Return.err(error_codes.from_exception(e, "CREATE_CUSTOMER_FAILED", "Failed to create customer"))

    def _total_price(self, command: CreateCustomerCommandDTO, plots) -> Decimal:
        if command.total_price is not None:
            return to_money(command.total_price)
        from_list = total_price_for(len(plots) or len(command.price_per_plot), command.price_per_plot)
        if from_list > ZERO:
            return from_list
        return sum((to_money(p.price) for p in plots), ZERO)
