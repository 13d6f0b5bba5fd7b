"""Default application settings.

``create_app`` loads these, then any ``FINCALC_``-prefixed environment
variables (``FINCALC_MAX_PERIODS=600``, ``FINCALC_LOG_LEVEL=DEBUG``), then
explicit overrides.
"""

from fincalc.domain.common import MAX_PERIODS


class DefaultConfig:
    CORS_ORIGINS = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:5173",
    ]
    LOG_LEVEL = "INFO"
    # iteration cap for schedules and payoff simulations
    MAX_PERIODS = MAX_PERIODS
