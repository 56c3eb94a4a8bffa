"""CreatePlot Use Case

Adds an Available plot to the inventory.
"""

import logging
from libs.result import Result, Return, Error
from src.app.services.unit_of_work import UnitOfWork
from src.app.repositories.plot_repository import PlotRepository
from src.app.use_cases import error_codes
from src.domain.plot import Plot, PlotStatus
from .dtos import CreatePlotCommandDTO, PlotDTO, to_plot_dto

logger = logging.getLogger(__name__)


class CreatePlot:
    """
    Use Case: Create a plot

    Business Rules:
    1. Plot numbers are unique (Conflict on duplicate)
    2. New plots start Available with no owner
    """

    def __init__(self, uow: UnitOfWork, plot_repo: PlotRepository):
        self.uow = uow
        self.plot_repo = plot_repo

    async def execute(self, command: CreatePlotCommandDTO) -> Result[PlotDTO]:
        number = command.number.strip()
        try:
            # Step 1: Check number is free
            if await self.plot_repo.get_by_number(number):
                return Return.err(
                    Error(
                        code=error_codes.PLOT_NUMBER_TAKEN,
                        message=f"Plot {number} already exists",
                    )
                )

            # Step 2: Create plot
            plot = await self.plot_repo.create(
                Plot(
                    number=number,
                    price=command.price,
                    plot_size=command.plot_size,
                    layout_name=command.layout_name,
                    status=PlotStatus.AVAILABLE,
                )
            )

            # Step 3: Commit transaction
            await self.uow.commit()

            logger.info(f"Created plot {plot.number} (id={plot.id})")
            return Return.ok(to_plot_dto(plot))

        except Exception as e:
            await self.uow.rollback()
            logger.error(f"Failed to create plot {number}: {e}")
            return Return.err(error_codes.from_exception(e, "CREATE_PLOT_FAILED", "Failed to create plot"))
