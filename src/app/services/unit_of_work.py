"""Unit of Work Interface

Commit/rollback boundary shared by the repositories of one operation.
"""

from abc import ABC, abstractmethod


class UnitOfWork(ABC):
    """
    Transaction boundary for a use case

    Repositories used by the same use case share the unit of work's session,
    so everything flushed by them is committed or rolled back together.
    """

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    @abstractmethod
    async def commit(self) -> None:
        pass

    @abstractmethod
    async def rollback(self) -> None:
        pass
