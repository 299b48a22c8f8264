"""Domain exceptions shared by every layer."""


class ProLingoError(Exception):
    """Base class for all ProLingo errors."""


class InvalidQualityError(ProLingoError, ValueError):
    """Raised when a recall quality rating falls outside [0, 5]."""

    def __init__(self, quality: object):
        self.quality = quality
        super().__init__(f"Quality must be an integer between 0 and 5, got {quality!r}")


class ReviewItemNotFoundError(ProLingoError, KeyError):
    """Raised when a review item id is not present in the store."""

    def __init__(self, item_id: str):
        self.item_id = item_id
        super().__init__(item_id)

    def __str__(self) -> str:
        return f"Review item not found: {self.item_id}"


class StoreError(ProLingoError):
    """Raised when the review store cannot be read or written."""
