"""
Storage adapter interface for the autocomplete backing store.
"""
from abc import ABC, abstractmethod


class StoreAdapter(ABC):
    """Abstract lifecycle of a backing-store connection."""

    @abstractmethod
    async def connect(self) -> None:
        """Establish connection."""
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close connection."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if reachable."""
        pass
