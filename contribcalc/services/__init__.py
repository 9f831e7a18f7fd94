"""Service layer entrypoints for domain logic."""

from .calculation_service import CalculationService
from .cities_service import CitiesService
from .dashboard_service import DashboardService
from .results_service import ResultsService
from .uploads import UploadService

__all__ = [
    "CalculationService",
    "CitiesService",
    "DashboardService",
    "ResultsService",
    "UploadService",
]
