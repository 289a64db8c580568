"""
Key/Value Port Interface

Contract for the optional cache/counter backend.

Every operation is a pass-through: the service keeps no local copy of
the data. The backend is independent of record storage, so a failure here
never affects /register or /names.
"""

from abc import ABC, abstractmethod


class KeyValueStore(ABC):
    """
    Storage interface for the auxiliary key/value backend.
    """

    @property
    @abstractmethod
    def connected(self) -> bool:
        """Whether the last contact with the backend succeeded."""
        ...

    @abstractmethod
    async def ping(self) -> str:
        """
        Check liveness.

        Returns:
            The backend's liveness token ("PONG")

        Raises:
            BackendUnavailable: If the connection was never established
            BackendError: If the backend call fails
        """
        ...

    @abstractmethod
    async def set(self, key: str, value: str, ttl: int | None = None) -> None:
        """
        Store a value.

        Args:
            key: Target key
            value: Value to store
            ttl: Expiration in seconds; None means no expiration

        Raises:
            BackendError: If the backend call fails
        """
        ...

    @abstractmethod
    async def get(self, key: str) -> tuple[str | None, bool]:
        """
        Read a value.

        Returns:
            Tuple of (value, exists); a missing key gives (None, False)

        Raises:
            BackendError: If the backend call fails
        """
        ...

    @abstractmethod
    async def increment(self, key: str) -> int:
        """
        Atomically increment the counter at key, starting from 0 if absent.

        Returns:
            The new value

        Raises:
            BackendError: If the stored value is not an integer or the call fails
        """
        ...

    async def close(self) -> None:
        """Release the backend connection. Called during shutdown."""
        pass


# =============================================================================
# Exceptions
# =============================================================================

class KeyValueError(Exception):
    """Base exception for key/value backend errors."""
    pass


class BackendUnavailable(KeyValueError):
    """Backend not configured, or its connection was never established."""
    pass


class BackendError(KeyValueError):
    """A backend operation failed."""
    pass
