from backend.src.ports.inbound.log_time_use_case import LogTimeUseCase
from backend.src.ports.inbound.manage_subscription_use_case import ManageSubscriptionUseCase

__all__ = [
    "LogTimeUseCase",
    "ManageSubscriptionUseCase",
]
