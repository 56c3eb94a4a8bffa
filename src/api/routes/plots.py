"""Plot inventory API Routes"""

from typing import Optional
from fastapi import APIRouter, Depends, status
from sqlmodel.ext.asyncio.session import AsyncSession

from src.api.error import ClientError
from src.api.schemas.envelope import SuccessResponse, ok
from src.app.services.authenticator import Identity
from src.app.use_cases.plots import CreatePlot, GetPlot, ListPlots
from src.app.use_cases.plots.dtos import CreatePlotCommandDTO, PlotDTO, PlotListResponseDTO
from src.adapter.repositories import SqlAlchemyPlotRepository
from src.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from src.depends import get_session, require_admin
from src.domain.plot import PlotStatus

router = APIRouter(prefix="/plots", tags=["Plots"])


@router.post("", response_model=SuccessResponse[PlotDTO], status_code=status.HTTP_201_CREATED)
async def create_plot(
    request: CreatePlotCommandDTO,
    _: Identity = Depends(require_admin),
    session: AsyncSession = Depends(get_session),
):
    """
    Add a plot to the inventory (admin only).

    **Returns:**
    - 201: Plot created as Available
    - 409: Plot number already exists
    """
    result = await CreatePlot(SqlAlchemyUnitOfWork(session), SqlAlchemyPlotRepository(session)).execute(request)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value, "Plot created successfully")


@router.get("", response_model=SuccessResponse[PlotListResponseDTO])
async def list_plots(
    status: Optional[PlotStatus] = None,
    session: AsyncSession = Depends(get_session),
):
    """List plots, optionally only those in one status (Available, Reserved, Sold)."""
    result = await ListPlots(SqlAlchemyPlotRepository(session)).execute(status)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)


@router.get("/{plot_id}", response_model=SuccessResponse[PlotDTO])
async def get_plot(plot_id: int, session: AsyncSession = Depends(get_session)):
    result = await GetPlot(SqlAlchemyPlotRepository(session)).execute(plot_id)
    if result.is_err():
        raise ClientError(result.error)
    return ok(result.value)
