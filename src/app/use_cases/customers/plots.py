"""Plot lookups shared by the customer use cases"""

from typing import List, Optional, Sequence, Tuple
from libs.result import Error
from src.app.repositories.plot_repository import PlotRepository
from src.app.use_cases import error_codes
from src.domain.customer import Customer
from src.domain.plot import Plot


def normalize_numbers(numbers: Sequence[str]) -> List[str]:
    """Strip plot numbers, drop blanks and duplicates, keep order."""
    return list(dict.fromkeys(n.strip() for n in numbers if n and n.strip()))


async def lock_plots_by_number(
    plot_repo: PlotRepository,
    numbers: Sequence[str],
) -> Tuple[List[Plot], Optional[Error]]:
    plots = await plot_repo.get_by_numbers(numbers, for_update=True)
    found = {p.number for p in plots}
    missing = [n for n in numbers if n not in found]
    if missing:
        return [], Error(
            code=error_codes.PLOT_NOT_FOUND,
            message=f"Plot(s) not found: {', '.join(missing)}",
        )
    return plots, None


async def lock_held_plots(plot_repo: PlotRepository, customer: Customer) -> List[Plot]:
    """Plots listed on the customer that are still owned under the customer's name."""
    plots = await plot_repo.get_by_numbers(customer.plots_held or [], for_update=True)
    return [p for p in plots if p.owner == customer.name]
