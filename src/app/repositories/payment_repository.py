"""Payment Repository Interface

Defines the contract for payment ledger persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.payment import Payment


class PaymentRepository(ABC):
    """
    Repository interface for Payment persistence

    Reads of a customer's payments inside a transaction see the writes
    already flushed by the same transaction.
    """

    @abstractmethod
    async def create(self, payment: Payment) -> Payment:
        """
        Create a new payment

        Args:
            payment: Payment entity to persist

        Returns:
            Created Payment with generated ID
        """
        pass

    @abstractmethod
    async def get_by_id(self, payment_id: int, for_update: bool = False) -> Optional[Payment]:
        """
        Retrieve payment by ID

        Args:
            payment_id: Payment ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Payment if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_by_customer(self, customer_id: int) -> List[Payment]:
        """
        Retrieve the full ledger of a customer, newest payment date first

        Args:
            customer_id: Customer ID

        Returns:
            List of payments
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Payment]:
        """
        Retrieve all payments, most recently created first

        Returns:
            List of payments
        """
        pass

    @abstractmethod
    async def update(self, payment: Payment) -> Payment:
        pass

    @abstractmethod
    async def delete(self, payment: Payment) -> None:
        pass

    @abstractmethod
    async def delete_by_customer(self, customer_id: int) -> int:
        """
        Delete every payment of a customer

        Args:
            customer_id: Customer ID

        Returns:
            Number of payments deleted
        """
        pass
