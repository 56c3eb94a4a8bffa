"""Plot Repository Interface

Defines the contract for plot persistence operations.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence
from src.domain.plot import Plot, PlotStatus


class PlotRepository(ABC):
    """
    Repository interface for Plot persistence

    Batch reads used before a state transition take row locks
    (for_update=True) so two concurrent reservations of the same plot cannot
    both observe it as Available.
    """

    @abstractmethod
    async def create(self, plot: Plot) -> Plot:
        """
        Create a new plot

        Raises:
            IntegrityError: If the plot number already exists
        """
        pass

    @abstractmethod
    async def get_by_id(self, plot_id: int) -> Optional[Plot]:
        pass

    @abstractmethod
    async def get_by_number(self, number: str) -> Optional[Plot]:
        pass

    @abstractmethod
    async def list_all(self, status: Optional[PlotStatus] = None) -> List[Plot]:
        pass

    @abstractmethod
    async def get_by_ids(self, plot_ids: Sequence[int], for_update: bool = False) -> List[Plot]:
        """
        Retrieve plots by ID, in the order of plot_ids

        Args:
            plot_ids: Plot IDs
            for_update: If True, lock the rows with SELECT FOR UPDATE

        Returns:
            Plots found (missing IDs are omitted)
        """
        pass

    @abstractmethod
    async def get_by_numbers(self, numbers: Sequence[str], for_update: bool = False) -> List[Plot]:
        """
        Retrieve plots by number, in the order of numbers

        Args:
            numbers: Plot numbers
            for_update: If True, lock the rows with SELECT FOR UPDATE

        Returns:
            Plots found (missing numbers are omitted)
        """
        pass

    @abstractmethod
    async def get_by_owner(self, owner: str, for_update: bool = False) -> List[Plot]:
        """
        Retrieve plots currently held by an owner name

        Args:
            owner: Holder name
            for_update: If True, lock the rows with SELECT FOR UPDATE

        Returns:
            List of plots
        """
        pass

    @abstractmethod
    async def save_all(self, plots: Sequence[Plot]) -> List[Plot]:
        """
        Flush state changes made to plots by the plot state machine

        Args:
            plots: Plots to persist

        Returns:
            The persisted plots

        Raises:
            PlotTransitionError: a plot was moved by another transaction
                since it was read
        """
        pass
