"""Health-check payload for the API."""

from investsim import __version__
from investsim.config import get_settings
from investsim.schemas.health import HealthResponse


def get_health() -> HealthResponse:
    """Report the service as up along with its name and version."""
    return HealthResponse(status="ok", service=get_settings().app_name, version=__version__)
