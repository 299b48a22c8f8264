"""Service for generating stable review item IDs."""

from ulid import ULID


def generate_item_id() -> str:
    """Generate a stable item ID using ULID."""
    return f"item_{ULID()}"
