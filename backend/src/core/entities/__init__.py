from backend.src.core.entities.subscription import Subscription
from backend.src.core.entities.task import Task, milestone_complete

__all__ = ["Subscription", "Task", "milestone_complete"]
