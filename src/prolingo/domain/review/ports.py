"""
Ports (interfaces) for review item persistence.

These define the contract that infrastructure adapters must implement.
Application services depend on these abstractions, not concrete implementations.
"""

from abc import ABC, abstractmethod

from .models import ReviewItem


class ReviewRepository(ABC):
    """
    Port for loading and storing review items.

    Implementations:
        - YamlReviewRepository: Keeps items in a local YAML file.
    """

    @abstractmethod
    async def get_items(self, ids: list[str] | None = None) -> list[ReviewItem]:
        """
        Fetch review items.

        Args:
            ids: Restrict the result to these ids. None returns every item.

        Returns:
            List of ReviewItem objects in storage order.
        """
        pass

    @abstractmethod
    async def get_item(self, item_id: str) -> ReviewItem | None:
        """Fetch a single item, or None if it does not exist."""
        pass

    @abstractmethod
    async def save_item(self, item: ReviewItem) -> None:
        """Insert or replace an item keyed by its id."""
        pass

    @abstractmethod
    async def delete_item(self, item_id: str) -> bool:
        """Remove an item. Returns False if it was not present."""
        pass
