"""
Runtime settings, read from environment variables.
"""

import os
from dataclasses import dataclass, replace

from .models import (
    ANNUAL_RETURN_PERCENT,
    CURRENT_SAVINGS,
    GOAL_AMOUNT,
    TIME_HORIZON_YEARS,
    FieldSpec,
)
from .normalizer import DEFAULT_FIELD_SPECS
from .session import DEFAULT_DEBOUNCE_SECONDS

# Environment variable holding the optional upper bound of each field
FIELD_MAX_ENV = {
    GOAL_AMOUNT: "GOAL_AMOUNT_MAX",
    TIME_HORIZON_YEARS: "TIME_HORIZON_MAX",
    ANNUAL_RETURN_PERCENT: "ANNUAL_RETURN_MAX",
    CURRENT_SAVINGS: "CURRENT_SAVINGS_MAX",
}


@dataclass(frozen=True)
class Settings:
    environment: str = "dev"
    port: int = 8080
    log_level: str = "INFO"
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS
    field_maximums: tuple[tuple[str, float], ...] = ()

    def field_specs(self) -> dict[str, FieldSpec]:
        """Default field specs with any configured maximums applied."""
        specs = dict(DEFAULT_FIELD_SPECS)
        for name, maximum in self.field_maximums:
            specs[name] = replace(specs[name], maximum=maximum)
        return specs


def _env(environ, key: str) -> str | None:
    # Treat empty env vars as "not set"
    value = environ.get(key)
    if value is None or value.strip() == "":
        return None
    return value.strip()


def load_settings(environ=None) -> Settings:
    """Build Settings from the environment (os.environ by default)."""
    environ = os.environ if environ is None else environ
    defaults = Settings()

    maximums = []
    for field, key in FIELD_MAX_ENV.items():
        raw = _env(environ, key)
        if raw is not None:
            value = float(raw)
            if value < 0:
                raise ValueError(f"{key} cannot be negative, got: {raw}")
            maximums.append((field, value))

    debounce = _env(environ, "DEBOUNCE_SECONDS")
    port = _env(environ, "PORT")

    return Settings(
        environment=_env(environ, "ENVIRONMENT") or defaults.environment,
        port=int(port) if port is not None else defaults.port,
        log_level=(_env(environ, "LOG_LEVEL") or defaults.log_level).upper(),
        debounce_seconds=float(debounce) if debounce is not None else defaults.debounce_seconds,
        field_maximums=tuple(maximums),
    )
