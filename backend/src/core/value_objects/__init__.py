from backend.src.core.value_objects.delivery import DeliveryOutcome, DispatchResult, DispatchStatus
from backend.src.core.value_objects.notification import (
    LogNotification,
    MilestoneNotification,
    Notification,
    NotificationKind,
    TestNotification,
    encode_notification,
)
from backend.src.core.value_objects.progress import AppliedLog, MilestoneProgress, ProgressUpdate

__all__ = [
    "AppliedLog",
    "DeliveryOutcome",
    "DispatchResult",
    "DispatchStatus",
    "LogNotification",
    "MilestoneProgress",
    "MilestoneNotification",
    "Notification",
    "NotificationKind",
    "ProgressUpdate",
    "TestNotification",
    "encode_notification",
]
