# Application Review Package
from .metrics_calculator import ReviewMetricsCalculator, review_stats
from .queue_builder import ReviewQueue, build_review_queue, due_items, prioritize
from .scheduler import initialize_review_item, schedule_next_review
from .service import ReviewService

__all__ = [
    "ReviewMetricsCalculator",
    "ReviewQueue",
    "ReviewService",
    "build_review_queue",
    "due_items",
    "initialize_review_item",
    "prioritize",
    "review_stats",
    "schedule_next_review",
]
