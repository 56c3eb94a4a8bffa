"""SQLAlchemy implementation of PaymentRequestRepository"""

import logging
from datetime import datetime
from typing import List, Optional
from sqlmodel import select
from sqlalchemy import delete
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.payment_request_repository import PaymentRequestRepository
from src.domain.payment_request import PaymentRequest, PaymentRequestStatus, RejectedPayment

logger = logging.getLogger(__name__)


class SqlAlchemyPaymentRequestRepository(PaymentRequestRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, request: PaymentRequest) -> PaymentRequest:
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def get_by_id(self, request_id: int, for_update: bool = False) -> Optional[PaymentRequest]:
        """
        Retrieve payment request by ID with optional row-level locking

        Args:
            request_id: PaymentRequest ID
            for_update: If True, locks the row with SELECT FOR UPDATE

        Returns:
            PaymentRequest if found, None otherwise
        """
        stmt = select(PaymentRequest).where(PaymentRequest.id == request_id)

        if for_update:
            # Refresh a copy already read without the lock
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self, status: Optional[PaymentRequestStatus] = None) -> List[PaymentRequest]:
        stmt = select(PaymentRequest)

        if status:
            stmt = stmt.where(PaymentRequest.status == status)

        stmt = stmt.order_by(PaymentRequest.created_at.desc(), PaymentRequest.id.desc())
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_customer(self, customer_id: int) -> List[PaymentRequest]:
        stmt = (
            select(PaymentRequest)
            .where(PaymentRequest.customer_id == customer_id)
            .order_by(PaymentRequest.created_at.desc(), PaymentRequest.id.desc())
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def update(self, request: PaymentRequest) -> PaymentRequest:
        request.updated_at = datetime.utcnow()
        self.session.add(request)
        await self.session.flush()
        await self.session.refresh(request)
        return request

    async def add_rejection_audit(self, audit: RejectedPayment) -> RejectedPayment:
        """
        Record an audit copy of a rejected request inside a SAVEPOINT

        Raises:
            SQLAlchemyError: If the insert fails (the savepoint is rolled back,
                the outer transaction is untouched)
        """
        async with self.session.begin_nested():
            self.session.add(audit)
            await self.session.flush()
        logger.debug(f"Recorded rejection audit for payment request {audit.payment_request_id}")
        return audit

    async def delete_by_customer(self, customer_id: int) -> int:
        stmt = delete(PaymentRequest).where(PaymentRequest.customer_id == customer_id)
        result = await self.session.execute(stmt)
        await self.session.flush()
        return result.rowcount or 0
