from .dashboard import DashboardController, DashboardView
from .geolocation import DeniedPosition, FixedPosition, GeolocationProvider
from .selection import DEFAULT_DISTRICTS, SelectionController, district_display_name
from .tracking import RequestTracker

__all__ = [
    "DEFAULT_DISTRICTS",
    "DashboardController",
    "DashboardView",
    "DeniedPosition",
    "FixedPosition",
    "GeolocationProvider",
    "RequestTracker",
    "SelectionController",
    "district_display_name",
]
