"""Process-level services shared by the engine and the adapters."""

from . import telemetry

__all__ = ["telemetry"]
