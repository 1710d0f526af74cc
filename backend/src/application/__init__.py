from backend.src.application.notification_dispatcher import NotificationDispatcher
from backend.src.application.progress_aggregator import ProgressAggregator
from backend.src.application.progress_service import ProgressService

__all__ = [
    "NotificationDispatcher",
    "ProgressAggregator",
    "ProgressService",
]
