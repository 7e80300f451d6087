"""Infrastructure layer exports."""

from .notifications import (
    Notification,
    NotificationCenter,
    Scheduler,
    ThreadingScheduler,
    configure_scheduler,
    get_scheduler,
)
from .registry import InMemoryRequirementRegistry, RequirementRegistry

__all__ = [
    "InMemoryRequirementRegistry",
    "Notification",
    "NotificationCenter",
    "RequirementRegistry",
    "Scheduler",
    "ThreadingScheduler",
    "configure_scheduler",
    "get_scheduler",
]
