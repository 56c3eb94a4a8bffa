"""SQLAlchemy implementation of PlotRepository

Batch reads return plots in the order they were asked for and can lock the
rows with SELECT FOR UPDATE ahead of a state transition.
"""

from typing import List, Optional, Sequence
from sqlalchemy import inspect, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession
from src.app.repositories.plot_repository import PlotRepository
from src.domain.plot import Plot, PlotStatus
from src.domain.plot_state import PlotTransitionError


class SqlAlchemyPlotRepository(PlotRepository):
    """
    SQLAlchemy implementation of PlotRepository

    Features:
    - Pessimistic locking via SELECT FOR UPDATE on batch reads
    - Rows locked in primary key order to avoid lock-order deadlocks
    - Compare-and-set on status when saving, for backends without row locks
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, plot: Plot) -> Plot:
        self.session.add(plot)
        await self.session.flush()
        await self.session.refresh(plot)
        return plot

    async def get_by_id(self, plot_id: int) -> Optional[Plot]:
        stmt = select(Plot).where(Plot.id == plot_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_number(self, number: str) -> Optional[Plot]:
        stmt = select(Plot).where(Plot.number == number)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def list_all(self, status: Optional[PlotStatus] = None) -> List[Plot]:
        stmt = select(Plot)

        if status:
            stmt = stmt.where(Plot.status == status)

        stmt = stmt.order_by(Plot.number)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_by_ids(self, plot_ids: Sequence[int], for_update: bool = False) -> List[Plot]:
        """
        Retrieve plots by ID with optional row-level locking

        Args:
            plot_ids: Plot IDs
            for_update: If True, locks the rows with SELECT FOR UPDATE

        Returns:
            Plots in the order of plot_ids (missing IDs are omitted)
        """
        if not plot_ids:
            return []

        stmt = select(Plot).where(Plot.id.in_(list(plot_ids))).order_by(Plot.id)

        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        by_id = {plot.id: plot for plot in result.scalars().all()}
        return [by_id[plot_id] for plot_id in dict.fromkeys(plot_ids) if plot_id in by_id]

    async def get_by_numbers(self, numbers: Sequence[str], for_update: bool = False) -> List[Plot]:
        """
        Retrieve plots by number with optional row-level locking

        Args:
            numbers: Plot numbers
            for_update: If True, locks the rows with SELECT FOR UPDATE

        Returns:
            Plots in the order of numbers (missing numbers are omitted)
        """
        if not numbers:
            return []

        stmt = select(Plot).where(Plot.number.in_(list(numbers))).order_by(Plot.id)

        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        by_number = {plot.number: plot for plot in result.scalars().all()}
        return [by_number[number] for number in dict.fromkeys(numbers) if number in by_number]

    async def get_by_owner(self, owner: str, for_update: bool = False) -> List[Plot]:
        stmt = select(Plot).where(Plot.owner == owner).order_by(Plot.id)

        if for_update:
            stmt = stmt.with_for_update().execution_options(populate_existing=True)

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def save_all(self, plots: Sequence[Plot]) -> List[Plot]:
        """
        Flush plot state changes

        Every plot is first claimed with a compare-and-set on the status it
        was read with. SQLite ignores SELECT FOR UPDATE, so this claim is what
        keeps a plot from being taken by two transactions there; on
        PostgreSQL the rows are already locked and the claim always matches.

        Raises:
            PlotTransitionError: a plot no longer has the status it was read with

        Note:
            Should be called within a transaction with the plots already locked
        """
        with self.session.no_autoflush:
            for plot in plots:
                await self._claim(plot)

        for plot in plots:
            self.session.add(plot)
        await self.session.flush()
        return list(plots)

    async def _claim(self, plot: Plot) -> None:
        history = inspect(plot).attrs.status.history
        read_status = history.deleted[0] if history.deleted else plot.status

        stmt = (
            update(Plot)
            .where(Plot.id == plot.id, Plot.status == read_status)
            .values(status=read_status)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)

        if result.rowcount != 1:
            raise PlotTransitionError(plot.number, "was taken by another transaction")
