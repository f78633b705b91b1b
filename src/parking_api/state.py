from fastapi import Request

from .config import Settings
from .models import DashboardData


def get_dashboard(request: Request) -> DashboardData:
    """Dependency to get the dashboard data loaded at startup."""
    dashboard = getattr(request.app.state, "dashboard", None)
    if dashboard is None:
        raise RuntimeError("Dashboard data is not loaded.")
    return dashboard


def get_settings(request: Request) -> Settings:
    """Dependency to get the settings resolved at startup."""
    settings = getattr(request.app.state, "settings", None)
    if settings is None:
        raise RuntimeError("Settings are not initialized.")
    return settings
