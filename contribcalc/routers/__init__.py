"""FastAPI routers for the contribution calculator."""

from .auth import router as auth_router
from .calculate import router as calculate_router
from .cities import router as cities_router
from .dashboard import router as dashboard_router
from .results import router as results_router
from .salaries import router as salaries_router

__all__ = [
    "auth_router",
    "calculate_router",
    "cities_router",
    "dashboard_router",
    "results_router",
    "salaries_router",
]
