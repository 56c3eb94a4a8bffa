"""Data Transfer Objects for Plot Use Cases"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field


class CreatePlotCommandDTO(BaseModel):
    """
    Command DTO for adding a plot to the inventory

    Used as input to CreatePlot use case.
    """

    number: str = Field(..., min_length=1, description="Human-facing plot number (unique)")

    price: Decimal = Field(default=Decimal("0"), ge=0, description="Plot price")

    plot_size: Optional[str] = None

    layout_name: Optional[str] = None

    class Config:
        json_schema_extra = {
            "example": {
                "number": "A-49",
                "price": "2500000.00",
                "plot_size": "600sqm",
                "layout_name": "Green Acres Phase 1",
            }
        }


class PlotDTO(BaseModel):
    """Plot with its current occupancy"""

    id: int
    number: str
    status: str
    owner: Optional[str] = None
    price: Decimal
    reserved_by: Optional[int] = None
    plot_size: Optional[str] = None
    layout_name: Optional[str] = None
    reserved_at: Optional[datetime] = None
    sold_at: Optional[datetime] = None
    created_at: datetime


class PlotListResponseDTO(BaseModel):
    plots: List[PlotDTO]
    count: int


def to_plot_dto(plot) -> PlotDTO:
    return PlotDTO(
        id=plot.id,
        number=plot.number,
        status=plot.status.value,
        owner=plot.owner,
        price=plot.price,
        reserved_by=plot.reserved_by,
        plot_size=plot.plot_size,
        layout_name=plot.layout_name,
        reserved_at=plot.reserved_at,
        sold_at=plot.sold_at,
        created_at=plot.created_at,
    )
