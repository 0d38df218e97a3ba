"""Storage protocol for the persisted itinerary record."""

from typing import Protocol


class StateStore(Protocol):
    """Durable key-value slot holding serialized state."""

    def get(self, key: str) -> str | None:
        """Get stored value.

        Args:
            key: Storage name

        Returns:
            Serialized value or None if the slot is empty
        """
        ...

    def put(self, key: str, value: str) -> None:
        """Overwrite the slot wholesale.

        Args:
            key: Storage name
            value: Serialized value
        """
        ...

    def delete(self, key: str) -> None:
        """Empty the slot (no-op when already empty).

        Args:
            key: Storage name
        """
        ...
