"""Authentication Account Repository Interface

Defines the contract for login account persistence operations.
"""

from abc import ABC, abstractmethod
from typing import Optional
from src.domain.account import AuthenticationAccount


class AccountRepository(ABC):
    """Repository interface for AuthenticationAccount persistence"""

    @abstractmethod
    async def get_by_id(self, account_id: int) -> Optional[AuthenticationAccount]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[AuthenticationAccount]:
        """
        Retrieve account by email (emails are unique across roles)

        Args:
            email: Login email

        Returns:
            AuthenticationAccount if found, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, account: AuthenticationAccount) -> AuthenticationAccount:
        """
        Create a new account

        Raises:
            IntegrityError: If the email is already registered
        """
        pass

    @abstractmethod
    async def update(self, account: AuthenticationAccount) -> AuthenticationAccount:
        pass

    @abstractmethod
    async def delete(self, account_id: int) -> None:
        pass
