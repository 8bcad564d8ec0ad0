"""Transport interface.

This is the (small) contract that connection implementations should follow.
It lives outside :mod:`gntp.protocol` so message construction remains
independent of how the bytes are moved.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional


class TransportError(Exception):
    """Base class for all transport-layer errors."""


class TransportConnectionError(TransportError):
    """The transport could not establish or maintain a connection."""


class UnknownHostError(TransportConnectionError):
    """The daemon host name could not be resolved."""


class ConnectionIOError(TransportConnectionError):
    """Reading from or writing to the connection failed."""


class UnsupportedEncodingError(TransportConnectionError):
    """Outgoing text could not be represented in the UTF-8 wire encoding."""


class Connection(ABC):
    """Minimal contract for a single-use, line-oriented connection."""

    @abstractmethod
    def write(self, data: bytes) -> None:
        """Queue raw bytes for transmission."""

    @abstractmethod
    def flush(self) -> None:
        """Push any buffered output onto the wire."""

    @abstractmethod
    def readline(self) -> Optional[str]:
        """Return the next line without its terminator, or None at EOF."""

    @abstractmethod
    def close(self) -> None:
        """Release the connection. Calling this more than once is harmless."""

    def settimeout(self, timeout: Optional[float]) -> None:
        """Change the blocking timeout for subsequent reads."""

    @property
    def is_open(self) -> bool:
        """Whether the connection is currently usable."""
        return False

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()
