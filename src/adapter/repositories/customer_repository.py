"""SQLAlchemy implementation of CustomerRepository

Provides persistence for Customer entities with pessimistic locking support
so concurrent payment operations on one customer are serialized.
"""

from datetime import datetime
from typing import List, Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.customer_repository import CustomerRepository
from src.domain.customer import Customer
from src.domain.financials import Financials


class SqlAlchemyCustomerRepository(CustomerRepository):
    """
    SQLAlchemy implementation of CustomerRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE
    - Balance/status written only from computed Financials
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, customer_id: int, for_update: bool = False) -> Optional[Customer]:
        """
        Retrieve customer by ID with optional row-level locking

        Args:
            customer_id: Customer ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            Customer if found, None otherwise
        """
        stmt = select(Customer).where(Customer.id == customer_id)

        if for_update:
            stmt = stmt.with_for_update()

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[Customer]:
        stmt = select(Customer).where(Customer.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_account_id(self, account_id: int) -> Optional[Customer]:
        stmt = select(Customer).where(Customer.account_id == account_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self) -> List[Customer]:
        stmt = select(Customer).order_by(Customer.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def create(self, customer: Customer) -> Customer:
        """
        Create a new customer

        Args:
            customer: Customer entity to persist

        Returns:
            Created Customer with generated ID
        """
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    async def update(self, customer: Customer) -> Customer:
        customer.updated_at = datetime.utcnow()
        self.session.add(customer)
        await self.session.flush()
        await self.session.refresh(customer)
        return customer

    async def update_financials(self, customer: Customer, financials: Financials) -> Customer:
        """
        Persist recomputed balance and status

        Note:
            Should be called within a transaction with the customer already locked
        """
        customer.balance = financials.balance
        customer.status = financials.status
        return await self.update(customer)

    async def delete(self, customer: Customer) -> None:
        await self.session.delete(customer)
        await self.session.flush()
