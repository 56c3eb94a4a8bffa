"""SQLAlchemy implementation of PaymentRepository

Payments are flushed immediately so a ledger read later in the same
transaction includes them.
"""

from datetime import datetime
from typing import List, Optional
from sqlmodel import select
from sqlalchemy import delete
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_repository import PaymentRepository
from src.domain.payment import Payment


class SqlAlchemyPaymentRepository(PaymentRepository):
    """SQLAlchemy implementation of PaymentRepository"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def get_by_id(self, payment_id: int, for_update: bool = False) -> Optional[Payment]:
        stmt = select(Payment).where(Payment.id == payment_id)

        if for_update:
            # Refresh a copy already read without the lock
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_by_customer(self, customer_id: int) -> List[Payment]:
        """
        Retrieve all payments of a customer

        Args:
            customer_id: Customer ID

        Returns:
            Payments ordered by payment date (newest first), then ID
        """
        stmt = (
            select(Payment)
            .where(Payment.customer_id == customer_id)
            .order_by(Payment.payment_date.desc(), Payment.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_all(self) -> List[Payment]:
        stmt = select(Payment).order_by(Payment.created_at.desc(), Payment.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, payment: Payment) -> Payment:
        payment.updated_at = datetime.utcnow()
        self.session.add(payment)
        await self.session.flush()
        await self.session.refresh(payment)
        return payment

    async def delete(self, payment: Payment) -> None:
        await self.session.delete(payment)
        await self.session.flush()

    async def delete_by_customer(self, customer_id: int) -> int:
        stmt = delete(Payment).where(Payment.customer_id == customer_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
