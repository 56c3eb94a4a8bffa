"""Plot query use cases (read-only)"""

from typing import Optional
from libs.result import Result, Return
from src.app.repositories.plot_repository import PlotRepository
from src.app.use_cases import error_codes
from src.domain.plot import PlotStatus
from .dtos import PlotDTO, PlotListResponseDTO, to_plot_dto


class ListPlots:
    """Use Case: List plots ordered by number, optionally filtered by status"""

    def __init__(self, plot_repo: PlotRepository):
        self.plot_repo = plot_repo

    async def execute(self, status: Optional[PlotStatus] = None) -> Result[PlotListResponseDTO]:
        try:
            plots = await self.plot_repo.list_all(status)
            return Return.ok(PlotListResponseDTO(plots=[to_plot_dto(p) for p in plots], count=len(plots)))
        except Exception as e:
            return Return.err(error_codes.from_exception(e, "LIST_PLOTS_FAILED", "Failed to list plots"))


class GetPlot:
    """Use Case: Retrieve one plot"""

    def __init__(self, plot_repo: PlotRepository):
        self.plot_repo = plot_repo

    async def execute(self, plot_id: int) -> Result[PlotDTO]:
        try:
            plot = await self.plot_repo.get_by_id(plot_id)
            if not plot:
                return Return.err(error_codes.not_found(error_codes.PLOT_NOT_FOUND, "Plot", plot_id))
            return Return.ok(to_plot_dto(plot))
        except Exception as e:
            return Return.err(error_codes.from_exception(e, "GET_PLOT_FAILED", "Failed to retrieve plot"))
