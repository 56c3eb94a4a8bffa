"""Balance Reconciliation Background Worker

Periodically recomputes every customer's balance and status from the
payment ledger and corrects stored values that drifted.
"""

import asyncio
import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from src.adapter.repositories.customer_repository import SqlAlchemyCustomerRepository
from src.adapter.repositories.payment_repository import SqlAlchemyPaymentRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases.payments import ReconcileBalances, ReconciliationResultDTO

logger = logging.getLogger(__name__)


class BalanceReconcilerWorker:
    """
    Background worker for customer balance reconciliation

    Usage:
        # Run once
        worker = BalanceReconcilerWorker()
        result = await worker.run_once()

        # Run continuously
        await worker.run_forever(interval_seconds=86400)
    """

    def __init__(self, db_uri: Optional[str] = None, correct: bool = True):
        """
        Args:
            db_uri: Database URI (defaults to ApplicationConfig.DB_URI)
            correct: Persist recomputed values; False only reports
        """
        self.db_uri = db_uri or ApplicationConfig.DB_URI
        self.correct = correct

        self.engine = create_async_engine(self.db_uri, echo=False, future=True)
        self.async_session_factory = sessionmaker(
            self.engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
        )

        logger.info("BalanceReconcilerWorker initialized")

    async def run_once(self) -> ReconciliationResultDTO:
        if not ApplicationConfig.RECONCILIATION_ENABLED:
            logger.info("Balance reconciliation is disabled, skipping")
            return ReconciliationResultDTO(
                total_customers_checked=0,
                discrepancies_found=0,
                corrected=False,
                discrepancies=[],
                reconciliation_time=datetime.utcnow(),
                execution_time_ms=0,
            )

        async with self.async_session_factory() as session:
            use_case = ReconcileBalances(
                uow=SqlAlchemyUnitOfWork(session),
                customer_repo=SqlAlchemyCustomerRepository(session),
                payment_repo=SqlAlchemyPaymentRepository(session),
            )

            result = await use_case.execute(correct=self.correct)

            if result.is_err():
                logger.error(f"Reconciliation failed: {result.error.message}")
                raise RuntimeError(f"Reconciliation failed: {result.error.message}")

            response = result.value

            if response.discrepancies_found > 0:
                action = "corrected" if response.corrected else "found"
                logger.warning(f"{response.discrepancies_found} customer balances {action}")
                for d in response.discrepancies:
                    logger.warning(
                        f"  - Customer {d.customer_id} ({d.customer_name}): "
                        f"stored={d.stored_balance}/{d.stored_status}, "
                        f"ledger={d.computed_balance}/{d.computed_status}"
                    )

            return response

    async def run_forever(self, interval_seconds: int = 86400):
        logger.info(f"Starting continuous balance reconciliation with {interval_seconds}s interval")

        while True:
            try:
                result = await self.run_once()
                logger.info(
                    f"Reconciliation cycle complete. "
                    f"Checked {result.total_customers_checked} customers, "
                    f"found {result.discrepancies_found} discrepancies "
                    f"in {result.execution_time_ms}ms"
                )
            except Exception as e:
                logger.error(f"Reconciliation cycle failed: {e}")

            await asyncio.sleep(interval_seconds)

    async def shutdown(self):
        await self.engine.dispose()
        logger.info("BalanceReconcilerWorker shutdown complete")


async def main():
    """
    Entry point for running the worker as a standalone script

    Usage:
        python -m src.worker.balance_reconciler --once
        python -m src.worker.balance_reconciler --once --dry-run
        python -m src.worker.balance_reconciler --interval 3600
    """
    import argparse

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    parser = argparse.ArgumentParser(description="Customer Balance Reconciliation Worker")
    parser.add_argument("--once", action="store_true", help="Run once and exit")
    parser.add_argument("--dry-run", action="store_true", help="Report discrepancies without correcting them")
    parser.add_argument(
        "--interval", type=int, default=ApplicationConfig.RECONCILIATION_INTERVAL_SECONDS,
        help="Interval between runs in seconds (default: RECONCILIATION_INTERVAL_SECONDS)"
    )
    args = parser.parse_args()

    worker = BalanceReconcilerWorker(correct=not args.dry_run)

    try:
        if args.once:
            result = await worker.run_once()
            print("Reconciliation complete:")
            print(f"  Customers checked: {result.total_customers_checked}")
            print(f"  Discrepancies found: {result.discrepancies_found}")
            print(f"  Corrected: {result.corrected}")
            print(f"  Execution time: {result.execution_time_ms}ms")
            for d in result.discrepancies:
                print(
                    f"  - Customer {d.customer_id}: "
                    f"stored={d.stored_balance}, ledger={d.computed_balance}"
                )
        else:
            await worker.run_forever(interval_seconds=args.interval)
    except KeyboardInterrupt:
        logger.info("Received shutdown signal")
    finally:
        await worker.shutdown()


if __name__ == "__main__":
    asyncio.run(main())
