"""Runtime services shared across the editor: telemetry and logging."""

from . import telemetry

__all__ = ["telemetry"]
