"""
Configuration - Environment-driven settings.

Environment variables:
    LUDO_ENV            development | production; production hides the API docs (default: development)
    LUDO_HOST           Relay bind address (default: 0.0.0.0)
    LUDO_PORT           Relay port (default: 3000)
    ALLOWED_ORIGINS     Comma-separated CORS origins (default: *)
    LUDO_LOG_LEVEL      Logging level name (default: INFO)
    LUDO_ROLL_DELAY     Seconds the dice animation runs before the roll lands (default: 0.8)
    LUDO_SKIP_DELAY     Seconds a "no moves" roll stays visible before the turn passes (default: 1.5)
"""

from __future__ import annotations
import logging
import os
from dataclasses import dataclass, field


LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")


@dataclass
class Settings:
    """Runtime settings for the relay, the CLI and the driver delays."""
    env: str = "development"
    host: str = "0.0.0.0"
    port: int = 3000
    allowed_origins: list[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"
    roll_delay: float = 0.8
    skip_delay: float = 1.5

    @classmethod
    def from_env(cls) -> Settings:
        return cls(
            env=os.getenv("LUDO_ENV", "development"),
            host=os.getenv("LUDO_HOST", "0.0.0.0"),
            port=_int_env("LUDO_PORT", 3000),
            allowed_origins=[
                origin.strip()
                for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
                if origin.strip()
            ],
            log_level=os.getenv("LUDO_LOG_LEVEL", "INFO").upper(),
            roll_delay=_float_env("LUDO_ROLL_DELAY", 0.8),
            skip_delay=_float_env("LUDO_SKIP_DELAY", 1.5),
        )

    @property
    def is_production(self) -> bool:
        return self.env == "production"


def configure_logging(level: str = "INFO") -> None:
    """Set up root logging once for the process."""
    logging.basicConfig(level=getattr(logging, level.upper(), logging.INFO), format=LOG_FORMAT)
