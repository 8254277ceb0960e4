"""Runtime configuration, read from the environment with local defaults."""

import os

# Cap for the duration solver (100 years). Projections that would need more
# months than this stop at the cap.
SAFETY_HORIZON_MONTHS = int(os.getenv("COMPOUND_SAFETY_HORIZON_MONTHS", "1200"))

# Longest duration a request may ask for (100 years).
MAX_HORIZON_MONTHS = int(os.getenv("COMPOUND_MAX_HORIZON_MONTHS", "1200"))

DEFAULT_TARGET = float(os.getenv("COMPOUND_DEFAULT_TARGET", "1000000"))

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "COMPOUND_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173",
    ).split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("COMPOUND_LOG_LEVEL", "INFO").upper()


def as_mapping() -> dict:
    """Settings in the shape Flask's ``app.config`` expects."""
    return {
        "SAFETY_HORIZON_MONTHS": SAFETY_HORIZON_MONTHS,
        "DEFAULT_TARGET": DEFAULT_TARGET,
        "CORS_ORIGINS": CORS_ORIGINS,
        "LOG_LEVEL": LOG_LEVEL,
    }
