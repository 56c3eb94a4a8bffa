"""Plot inventory use cases"""
from .create_plot import CreatePlot
from .query_plots import ListPlots, GetPlot
from .dtos import CreatePlotCommandDTO, PlotDTO, PlotListResponseDTO

__all__ = [
    "CreatePlot",
    "ListPlots",
    "GetPlot",
    "CreatePlotCommandDTO",
    "PlotDTO",
    "PlotListResponseDTO",
]
