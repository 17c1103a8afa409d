"""Runtime services: telemetry and the event bus."""

from .events import EventBus

__all__ = ["EventBus"]
