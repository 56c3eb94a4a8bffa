"""Plot state machine

Transitions between Available, Reserved and Sold. Each transition takes a
batch of plots and checks every precondition before touching any plot, so a
batch either moves as a whole or not at all.

    Available --reserve--> Reserved --approve--> Sold
    Available --direct_sell--> Sold
    Reserved | Sold --reject--> Available
    any --release--> Available        (administrative rollback)
"""

from datetime import datetime
from typing import Iterable, List, Optional, Sequence
from src.domain.plot import Plot, PlotStatus


class PlotTransitionError(Exception):
    """A plot in the batch does not satisfy the transition's precondition."""

    def __init__(self, plot_number: str, reason: str):
        self.plot_number = plot_number
        self.reason = reason
        super().__init__(f"Plot {plot_number} {reason}")


def require_status(plots: Sequence[Plot], allowed: Iterable[PlotStatus], action: str) -> None:
    """Raise PlotTransitionError for the first plot whose status is not allowed."""
    allowed = set(allowed)
    for plot in plots:
        if plot.status not in allowed:
            raise PlotTransitionError(
                plot.number,
                f"is {plot.status.value.lower()} and cannot be {action}",
            )


def reserve(plots: Sequence[Plot], holder: str, subscription_id: Optional[int], now: Optional[datetime] = None) -> List[Plot]:
    """Hold Available plots for a pending subscription."""
    require_status(plots, [PlotStatus.AVAILABLE], "reserved")
    now = now or datetime.utcnow()
    for plot in plots:
        plot.status = PlotStatus.RESERVED
        plot.owner = holder
        plot.reserved_by = subscription_id
        plot.reserved_at = now
        plot.updated_at = now
    return list(plots)


def approve(plots: Sequence[Plot], now: Optional[datetime] = None) -> List[Plot]:
    """Complete the sale of Reserved plots."""
    require_status(plots, [PlotStatus.RESERVED], "sold")
    now = now or datetime.utcnow()
    for plot in plots:
        plot.status = PlotStatus.SOLD
        plot.sold_at = now
        plot.updated_at = now
    return list(plots)


def reject(plots: Sequence[Plot], now: Optional[datetime] = None) -> List[Plot]:
    """Return Reserved or Sold plots to Available."""
    require_status(plots, [PlotStatus.RESERVED, PlotStatus.SOLD], "released")
    return release(plots, now)


def direct_sell(plots: Sequence[Plot], holder: str, now: Optional[datetime] = None) -> List[Plot]:
    """Sell Available plots without a reservation step (admin-recorded sale)."""
    require_status(plots, [PlotStatus.AVAILABLE], "sold")
    now = now or datetime.utcnow()
    for plot in plots:
        plot.status = PlotStatus.SOLD
        plot.owner = holder
        plot.reserved_by = None
        plot.reserved_at = now
        plot.sold_at = now
        plot.updated_at = now
    return list(plots)


def release(plots: Sequence[Plot], now: Optional[datetime] = None) -> List[Plot]:
    """Reset plots to Available whatever their current state."""
    now = now or datetime.utcnow()
    for plot in plots:
        plot.status = PlotStatus.AVAILABLE
        plot.owner = None
        plot.reserved_by = None
        plot.reserved_at = None
        plot.sold_at = None
        plot.updated_at = now
    return list(plots)


def reassign(
    previous_plots: Sequence[Plot],
    new_plots: Sequence[Plot],
    holder: str,
    now: Optional[datetime] = None,
) -> List[Plot]:
    """
    Move a holder from previous_plots to new_plots

    Plots in new_plots that the holder already had may be kept; every other
    new plot must be Available. The previous plots are released before the
    new ones are sold.
    """
    previous_ids = {plot.id for plot in previous_plots}
    require_status(
        [plot for plot in new_plots if plot.id not in previous_ids],
        [PlotStatus.AVAILABLE],
        "sold",
    )
    now = now or datetime.utcnow()
    release(previous_plots, now)
    return direct_sell(new_plots, holder, now)
