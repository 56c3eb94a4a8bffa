"""Integration tests for plot exclusivity under concurrent transactions

Two transactions on separate connections of a file-backed database both read
plot A-1 as Available before either writes. Exactly one may take the plot;
the other fails with PLOT_UNAVAILABLE and leaves nothing behind.
"""

import asyncio
import pytest
import pytest_asyncio
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.adapter.repositories import (
    SqlAlchemyAccountRepository,
    SqlAlchemyCustomerRepository,
    SqlAlchemyPlotRepository,
    SqlAlchemySubscriptionRepository,
)
from src.adapter.services.authenticator import PasslibJoseAuthenticator
from src.adapter.services.blob_store import LocalBlobStore
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.app.use_cases import error_codes
from src.app.use_cases.customers import CreateCustomer, CreateCustomerCommandDTO
from src.app.use_cases.subscriptions import SubmitSubscription, SubmitSubscriptionCommandDTO
from src.domain.customer import Customer
from src.domain.plot import Plot, PlotStatus
from src.domain.subscription import Subscription
import src.domain  # noqa: F401


class Rendezvous:
    """Lets no party continue until every party has arrived"""

    def __init__(self, parties: int):
        self.parties = parties
        self.arrived = 0
        self.everyone_here = asyncio.Event()

    async def arrive(self):
        self.arrived += 1
        if self.arrived == self.parties:
            self.everyone_here.set()
        await asyncio.wait_for(self.everyone_here.wait(), timeout=5)


class ReadThenWaitPlotRepository(SqlAlchemyPlotRepository):
    """Plot repository that holds each caller after its plot read"""

    def __init__(self, session: AsyncSession, rendezvous: Rendezvous):
        super().__init__(session)
        self.rendezvous = rendezvous

    async def get_by_ids(self, plot_ids, for_update=False):
        plots = await super().get_by_ids(plot_ids, for_update)
        await self.rendezvous.arrive()
        return plots

    async def get_by_numbers(self, numbers, for_update=False):
        plots = await super().get_by_numbers(numbers, for_update)
        await self.rendezvous.arrive()
        return plots


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """Separate connections to one database file, configured like the service"""
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'plots.db'}", echo=False, future=True)

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)

    await engine.dispose()


async def add_plot(session_factory, number="A-1") -> Plot:
    async with session_factory() as session:
        plot = Plot(number=number, price=Decimal("4500"))
        session.add(plot)
        await session.commit()
        await session.refresh(plot)
        return plot


async def count(session_factory, model) -> int:
    async with session_factory() as session:
        result = await session.execute(select(func.count()).select_from(model))
        return result.scalar_one()


async def load_plot(session_factory, plot_id) -> Plot:
    async with session_factory() as session:
        return await session.get(Plot, plot_id)


async def submit_subscription(session_factory, rendezvous, plot_id, name, tmp_path):
    async with session_factory() as session:
        use_case = SubmitSubscription(
            SqlAlchemyUnitOfWork(session),
            ReadThenWaitPlotRepository(session, rendezvous),
            SqlAlchemySubscriptionRepository(session),
            LocalBlobStore(str(tmp_path)),
            Decimal("50000"),
        )
        return await use_case.execute(
            SubmitSubscriptionCommandDTO(
                name=name,
                email=f"{name.lower()}@example.com",
                plot_ids=[plot_id],
                agreed_to_terms=True,
            )
        )


async def create_customer(session_factory, rendezvous, number, name):
    async with session_factory() as session:
        use_case = CreateCustomer(
            SqlAlchemyUnitOfWork(session),
            SqlAlchemyAccountRepository(session),
            SqlAlchemyCustomerRepository(session),
            ReadThenWaitPlotRepository(session, rendezvous),
            PasslibJoseAuthenticator(secret="test-secret"),
        )
        return await use_case.execute(
            CreateCustomerCommandDTO(
                name=name,
                email=f"{name.lower()}@example.com",
                contact="08030000000",
                plots_held=[number],
                total_price=Decimal("4500"),
            )
        )


@pytest.mark.asyncio
class TestPlotExclusivity:

    async def test_concurrent_subscriptions_reserve_plot_once(self, file_session_factory, tmp_path):
        """
        Given: Available plot A-1
        When: Two applicants submit for it and both read it before either writes
        Then: One subscription holds the plot; the other is PLOT_UNAVAILABLE
        """
        plot = await add_plot(file_session_factory)
        rendezvous = Rendezvous(parties=2)

        results = await asyncio.gather(
            submit_subscription(file_session_factory, rendezvous, plot.id, "Alice", tmp_path),
            submit_subscription(file_session_factory, rendezvous, plot.id, "Bola", tmp_path),
        )

        succeeded = [r for r in results if r.is_ok()]
        failed = [r for r in results if r.is_err()]
        assert len(succeeded) == 1
        assert len(failed) == 1
        assert failed[0].error.code == error_codes.PLOT_UNAVAILABLE

        winner = succeeded[0].value.subscription
        stored = await load_plot(file_session_factory, plot.id)
        assert await count(file_session_factory, Subscription) == 1
        assert stored.status == PlotStatus.RESERVED
        assert stored.reserved_by == winner.id
        assert stored.owner == winner.name

    async def test_subscription_and_direct_sale_take_plot_once(self, file_session_factory, tmp_path):
        plot = await add_plot(file_session_factory)
        rendezvous = Rendezvous(parties=2)

        subscribed, sold = await asyncio.gather(
            submit_subscription(file_session_factory, rendezvous, plot.id, "Alice", tmp_path),
            create_customer(file_session_factory, rendezvous, plot.number, "Bola"),
        )

        assert [subscribed.is_ok(), sold.is_ok()].count(True) == 1
        loser = sold if subscribed.is_ok() else subscribed
        assert loser.error.code == error_codes.PLOT_UNAVAILABLE

        stored = await load_plot(file_session_factory, plot.id)
        if subscribed.is_ok():
            assert stored.status == PlotStatus.RESERVED
            assert stored.owner == "Alice"
            assert await count(file_session_factory, Customer) == 0
        else:
            assert stored.status == PlotStatus.SOLD
            assert stored.owner == "Bola"
            assert await count(file_session_factory, Subscription) == 0
