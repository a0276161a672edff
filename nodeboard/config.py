"""Runtime configuration — env-driven.

Centralized config using pydantic-settings.  Reads from a .env file and
NODEBOARD_* environment variables.  The engine's own verbosity setting is
never consulted; the dashboard always runs in its minimal mode.
"""

from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from nodeboard.core.tracker import DiagnosticPolicy
from nodeboard.monitor.scheduler import DEFAULT_REFRESH_HZ


class DashboardConfig(BaseSettings):
    """Dashboard configuration with environment variable overrides.

    Examples
    --------
    Override via environment::

        export NODEBOARD_REFRESH_HZ=10
        export NODEBOARD_DIAGNOSTIC_POLICY=log
        export NODEBOARD_TERMINAL_WIDTH=120
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="NODEBOARD_",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    log_level: str = "WARNING"

    # Rendering
    refresh_hz: float = Field(default=DEFAULT_REFRESH_HZ, gt=0)
    terminal_width: int | None = Field(default=None, ge=1)

    # Warnings/errors have no representation on the dashboard.  "fail"
    # raises; "log" reports them through logging and keeps going.
    diagnostic_policy: DiagnosticPolicy = DiagnosticPolicy.FAIL

    @property
    def refresh_interval(self) -> float:
        """Seconds between dashboard refreshes."""
        return 1.0 / self.refresh_hz


# Module-level singleton: import as `from nodeboard.config import config`
config = DashboardConfig()
