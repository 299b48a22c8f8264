# Infrastructure Adapters Package
from .yaml_store import YamlReviewRepository

__all__ = ["YamlReviewRepository"]
