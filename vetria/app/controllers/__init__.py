from .dashboard_controller import DashboardController
from .records_controller import RecordsController

__all__ = ["DashboardController", "RecordsController"]
