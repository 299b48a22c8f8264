"""
Repository Factory
Centralizes the logic for selecting the review store adapter.
"""

from prolingo.application.config import AppConfig
from prolingo.application.review.service import ReviewService
from prolingo.domain.review.ports import ReviewRepository
from prolingo.infrastructure.adapters.yaml_store import YamlReviewRepository


def get_review_repository(config: AppConfig) -> ReviewRepository:
    """
    Returns the ReviewRepository implementation for the configured store.
    """
    return YamlReviewRepository(config.store_path)


def get_review_service(config: AppConfig) -> ReviewService:
    return ReviewService(get_review_repository(config), params=config.scheduler_params())
