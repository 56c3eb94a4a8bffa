"""ReconcileBalances Use Case

Recomputes every customer's balance and status from the payment ledger and
corrects stored values that drifted.
"""

import logging
import time
from datetime import datetime
from libs.result import Result, Return
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.customer_repository import CustomerRepository
from src.app.repositories.payment_repository import PaymentRepository
from src.app.use_cases import error_codes
from src.domain.financials import compute_financials, to_money
from .dtos import BalanceDiscrepancyDTO, ReconciliationResultDTO

logger = logging.getLogger(__name__)


class ReconcileBalances:
    """
    Use Case: Reconcile stored customer balances against the ledger

    Business Rules:
    1. Every customer is recomputed with compute_financials
    2. A customer whose stored balance or status differs is a discrepancy
    3. With correct=True, discrepancies are persisted in one transaction
    4. Running it twice in a row finds nothing the second time

    Flow:
    1. Get all customers
    2. For each customer:
       a. Get the customer's payments
       b. Recompute financials
       c. If mismatch, record discrepancy (and correct it)
    3. Commit corrections
    4. Return reconciliation result
    """

    def __init__(
        self,
        uow: UnitOfWork,
        customer_repo: CustomerRepository,
        payment_repo: PaymentRepository,
    ):
        self.uow = uow
        self.customer_repo = customer_repo
        self.payment_repo = payment_repo

    async def execute(self, correct: bool = True) -> Result[ReconciliationResultDTO]:
        """
        Execute balance reconciliation

        Args:
            correct: Persist recomputed values for customers that drifted

        Returns:
            Result[ReconciliationResultDTO]: Reconciliation result with any discrepancies
        """
        start_time = time.time()
        reconciliation_time = datetime.utcnow()

        try:
            logger.info("Starting customer balance reconciliation")

            # Step 1: Get all customers
            customers = await self.customer_repo.list_all()
            total_customers = len(customers)

            logger.info(f"Found {total_customers} customers to reconcile")

            # Step 2: Check each customer for discrepancies
            discrepancies: list[BalanceDiscrepancyDTO] = []

            for customer in customers:
                payments = await self.payment_repo.list_by_customer(customer.id)
                financials = compute_financials(customer, payments, previous_status=customer.status)

                stored_balance = to_money(customer.balance)
                if stored_balance == financials.balance and customer.status == financials.status:
                    continue

                discrepancies.append(
                    BalanceDiscrepancyDTO(
                        customer_id=customer.id,
                        customer_name=customer.name,
                        stored_balance=stored_balance,
                        computed_balance=financials.balance,
                        stored_status=customer.status.value,
                        computed_status=financials.status.value,
                    )
                )

                logger.warning(
                    f"Discrepancy found for customer {customer.id}: "
                    f"stored_balance={stored_balance}, computed_balance={financials.balance}, "
                    f"stored_status={customer.status.value}, computed_status={financials.status.value}"
                )

                if correct:
                    await self.customer_repo.update_financials(customer, financials)

            # Step 3: Commit corrections
            if correct and discrepancies:
                await self.uow.commit()

            # Step 4: Build response
            execution_time_ms = int((time.time() - start_time) * 1000)

            response = ReconciliationResultDTO(
                total_customers_checked=total_customers,
                discrepancies_found=len(discrepancies),
                corrected=bool(correct and discrepancies),
                discrepancies=discrepancies,
                reconciliation_time=reconciliation_time,
                execution_time_ms=execution_time_ms,
            )

            if discrepancies:
                logger.warning(
                    f"Reconciliation complete. Found {len(discrepancies)} discrepancies "
                    f"out of {total_customers} customers in {execution_time_ms}ms"
                )
            else:
                logger.info(
                    f"Reconciliation complete. All {total_customers} customers balanced "
                    f"in {execution_time_ms}ms"
                )

            return Return.ok(response)

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Balance reconciliation failed: {e}")
            return Return.err(
                error_codes.from_exception(e, "RECONCILIATION_FAILED", "Failed to reconcile customer balances")
            )
