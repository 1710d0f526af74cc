from backend.src.ports.outbound.notification_port import NotificationPort
from backend.src.ports.outbound.push_delivery_port import PushDeliveryPort
from backend.src.ports.outbound.subscription_repository_port import SubscriptionRepositoryPort
from backend.src.ports.outbound.task_repository_port import TaskRepositoryPort

__all__ = [
    "NotificationPort",
    "PushDeliveryPort",
    "SubscriptionRepositoryPort",
    "TaskRepositoryPort",
]
