"""SQLAlchemy Authentication Account Repository Implementation"""

from datetime import datetime
from typing import Optional
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.account_repository import AccountRepository
from src.domain.account import AuthenticationAccount


class SqlAlchemyAccountRepository(AccountRepository):

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, account_id: int) -> Optional[AuthenticationAccount]:
        stmt = select(AuthenticationAccount).where(AuthenticationAccount.id == account_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> Optional[AuthenticationAccount]:
        stmt = select(AuthenticationAccount).where(AuthenticationAccount.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def create(self, account: AuthenticationAccount) -> AuthenticationAccount:
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def update(self, account: AuthenticationAccount) -> AuthenticationAccount:
        account.updated_at = datetime.utcnow()
        self.session.add(account)
        await self.session.flush()
        await self.session.refresh(account)
        return account

    async def delete(self, account_id: int) -> None:
        account = await self.get_by_id(account_id)
        if account:
            await self.session.delete(account)
            await self.session.flush()
