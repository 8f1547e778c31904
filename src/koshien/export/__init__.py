from .charting import ChartAdapter, MatplotlibChartAdapter
from .service import ExportService

__all__ = ["ChartAdapter", "ExportService", "MatplotlibChartAdapter"]
