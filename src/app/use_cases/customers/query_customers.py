"""Customer read use cases

Reads recompute financials from the ledger; stored values found to have
drifted are corrected and committed before the response is returned.
"""

import logging
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.use_cases import error_codes
from .details import load_details
from .dtos import CustomerDetailsDTO, CustomerListResponseDTO

logger = logging.getLogger(__name__)


class GetCustomer:
    """Use Case: Retrieve a customer with payments and financial details"""

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.payment_repo = payment_repo

    async def execute(self, customer_id: int) -> Result[CustomerDetailsDTO]:
        try:
            customer = await self.customer_repo.get_by_id(customer_id, for_update=True)
            if not customer:
                await self.uow.rollback()
                return Return.err(error_codes.not_found(error_codes.CUSTOMER_NOT_FOUND, "Customer", customer_id))

            details, drifted = await load_details(customer, self.customer_repo, self.payment_repo)
            if drifted:
                await self.uow.commit()
                logger.warning(f"Corrected stored balance of customer {customer_id} to {details.balance}")

            return Return.ok(details)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(error_codes.from_exception(e, "GET_CUSTOMER_FAILED", "Failed to retrieve customer"))


class GetCustomerByAccount:
    """Use Case: Retrieve the customer record linked to a login account"""

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.payment_repo = payment_repo

    async def execute(self, account_id: int) -> Result[CustomerDetailsDTO]:
        try:
            customer = await self.customer_repo.get_by_account_id(account_id)
            if not customer:
                return Return.err(
                    error_codes.not_found(error_codes.CUSTOMER_NOT_FOUND, "Customer for account", account_id)
                )
            return await GetCustomer(self.uow, self.customer_repo, self.payment_repo).execute(customer.id)

        except Exception as e:
            await self.uow.rollback()
            return Return.err(error_codes.from_exception(e, "GET_CUSTOMER_FAILED", "Failed to retrieve customer"))


class ListCustomers:
    """Use Case: List every customer with payments and financial details"""

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.payment_repo = payment_repo

    async def execute(self) -> Result[CustomerListResponseDTO]:
        try:
            customers = await self.customer_repo.list_all()

            details = []
            corrected = 0
            for customer in customers:
                dto, drifted = await load_details(customer, self.customer_repo, self.payment_repo)
                details.append(dto)
                corrected += int(drifted)

            if corrected:
                await self.uow.commit()
                logger.warning(f"Corrected stored balances of {corrected} customer(s) while listing")

            return Return.ok(CustomerListResponseDTO(customers=details, count=len(details)))

        except Exception as e:
            await self.uow.rollback()
            return Return.err(error_codes.from_exception(e, "LIST_CUSTOMERS_FAILED", "Failed to list customers"))
