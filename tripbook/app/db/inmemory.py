"""In-memory implementation of the storage protocol."""


class InMemoryStateStore:
    """In-memory implementation of StateStore."""

    def __init__(self) -> None:
        self._values: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        """Get stored value."""
        return self._values.get(key)

    def put(self, key: str, value: str) -> None:
        """Overwrite stored value."""
        self._values[key] = value

    def delete(self, key: str) -> None:
        """Remove stored value."""
        self._values.pop(key, None)
