"""Plot set resolution shared by the subscription use cases"""

from typing import List, Optional, Sequence
from libs.result import Error
from src.app.repositories.plot_repository import PlotRepository
from src.app.use_cases import error_codes
from src.domain.plot import Plot
from src.domain.subscription import Subscription


def subscription_plot_ids(subscription: Subscription) -> List[int]:
    """Plot ids of a subscription; records without plot_ids fall back to plot_id."""
    if subscription.plot_ids:
        return list(subscription.plot_ids)
    if subscription.plot_id is not None:
        return [subscription.plot_id]
    return []


async def lock_plots(plot_repo: PlotRepository, plot_ids: Sequence[int]) -> tuple[List[Plot], Optional[Error]]:
    """
    Lock every plot in plot_ids

    Returns:
        (plots, None) when all plots exist, otherwise ([], PLOT_NOT_FOUND error)
    """
    plots = await plot_repo.get_by_ids(plot_ids, for_update=True)
    missing = [plot_id for plot_id in plot_ids if plot_id not in {p.id for p in plots}]
    if missing:
        return [], Error(
            code=error_codes.PLOT_NOT_FOUND,
            message=f"Plot(s) not found: {', '.join(str(m) for m in missing)}",
        )
    return plots, None
