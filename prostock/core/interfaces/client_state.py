"""Abstract interface for persisted client state (the local session)."""

from abc import ABC, abstractmethod


class IClientStateStore(ABC):
    """Small key/value store surviving restarts."""

    @abstractmethod
    async def get(self, key: str) -> str | None:
        """Get a stored value, or None."""
        pass

    @abstractmethod
    async def set(self, key: str, value: str) -> None:
        """Store or replace a value."""
        pass

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Remove a value. Returns True if it existed."""
        pass
