"""Customer Repository Interface

Defines the contract for customer persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.customer import Customer
from src.domain.financials import Financials


class CustomerRepository(ABC):
    """
    Repository interface for Customer persistence

    Methods that mutate balances should be preceded by a locked read
    (for_update=True) so concurrent payment operations on the same customer
    are serialized.
    """

    @abstractmethod
    async def get_by_id(self, customer_id: int, for_update: bool = False) -> Optional[Customer]:
        """
        Retrieve customer by ID

        Args:
            customer_id: Customer ID
            for_update: If True, lock the row with SELECT FOR UPDATE

        Returns:
            Customer if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[Customer]:
        """
        Retrieve customer by email

        Args:
            email: Customer email (unique)

        Returns:
            Customer if found, None otherwise
        """
        pass

    @abstractmethod
    async def get_by_account_id(self, account_id: int) -> Optional[Customer]:
        """
        Retrieve the customer linked to a login account

        Args:
            account_id: AuthenticationAccount ID

        Returns:
            Customer if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_all(self) -> List[Customer]:
        """
        Retrieve all customers ordered by ID

        Returns:
            List of customers
        """
        pass

    @abstractmethod
    async def create(self, customer: Customer) -> Customer:
        """
        Create a new customer

        Args:
            customer: Customer entity to persist

        Returns:
            Created Customer with generated ID

        Raises:
            IntegrityError: If the email is already registered
        """
        pass

    @abstractmethod
    async def update(self, customer: Customer) -> Customer:
        """
        Update an existing customer

        Args:
            customer: Customer entity with updated values

        Returns:
            Updated Customer
        """
        pass

    @abstractmethod
    async def update_financials(self, customer: Customer, financials: Financials) -> Customer:
        """
        Persist recomputed balance and status

        Args:
            customer: Customer to update
            financials: Output of compute_financials for the customer's full ledger

        Returns:
            Updated Customer
        """
        pass

    @abstractmethod
    async def delete(self, customer: Customer) -> None:
        """
        Delete a customer record

        Args:
            customer: Customer to delete
        """
        pass
