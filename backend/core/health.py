"""Health-check payload used by the ping endpoint."""

from backend.schemas.health import HealthResponse


def get_health(safety_horizon_months: int) -> HealthResponse:
    """Report the service as up along with the active solver cap."""
    return HealthResponse(status="ok", safetyHorizonMonths=safety_horizon_months)
