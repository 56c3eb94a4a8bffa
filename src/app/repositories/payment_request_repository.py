"""Payment Request Repository Interface"""

from abc import ABC, abstractmethod
from typing import List, Optional
from src.domain.payment_request import PaymentRequest, PaymentRequestStatus, RejectedPayment


class PaymentRequestRepository(ABC):
    """Repository interface for PaymentRequest persistence and rejection audit rows"""

    @abstractmethod
    async def create(self, request: PaymentRequest) -> PaymentRequest:
        pass

    @abstractmethod
    async def get_by_id(self, request_id: int, for_update: bool = False) -> Optional[PaymentRequest]:
        """
        Retrieve payment request by ID

        Args:
            request_id: PaymentRequest ID
            for_update: If True, lock the row so only one decision can be applied

        Returns:
            PaymentRequest if found, None otherwise
        """
        pass

    @abstractmethod
    async def list_all(self, status: Optional[PaymentRequestStatus] = None) -> List[PaymentRequest]:
        pass

    @abstractmethod
    async def list_by_customer(self, customer_id: int) -> List[PaymentRequest]:
        pass

    @abstractmethod
    async def update(self, request: PaymentRequest) -> PaymentRequest:
        pass

    @abstractmethod
    async def add_rejection_audit(self, audit: RejectedPayment) -> RejectedPayment:
        """
        Record an audit copy of a rejected request

        The write is isolated in a savepoint; a failure here leaves the
        surrounding transaction usable.
        """
        pass

    @abstractmethod
    async def delete_by_customer(self, customer_id: int) -> int:
        """Delete every request of a customer; returns the number deleted"""
        pass
