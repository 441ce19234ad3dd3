"""Abstract base class for asynchronous generation clients."""

from abc import ABC, abstractmethod


class AsyncProviderClient(ABC):
    """Abstract base class for asynchronous LLM generation clients.

    Async clients support the async context manager protocol for proper
    resource cleanup.
    """

    @abstractmethod
    async def generate(
        self,
        messages: list[dict[str, str]],
        model: str | None = None,
    ) -> str:
        """
        Generate a completion from a list of messages.

        Args:
            messages: List of message dicts with 'role' ("system" or "human")
                and 'content' keys
            model: Optional model override (uses client default if not specified)

        Returns:
            Generated content string
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close the client and release resources."""
        pass

    async def __aenter__(self) -> "AsyncProviderClient":
        """Enter async context manager."""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context manager."""
        await self.close()
