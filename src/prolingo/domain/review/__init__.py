# Domain Review Package
from .models import Quality, ReviewItem, ReviewStats, SchedulerParams
from .ports import ReviewRepository

__all__ = ["Quality", "ReviewItem", "ReviewStats", "SchedulerParams", "ReviewRepository"]
