"""TCP connection management.

Every REGISTER or NOTIFY exchange uses its own connection; nothing here is
pooled or cached.
"""

from __future__ import annotations

import socket
import threading
from typing import Optional

from loguru import logger

from ..protocol import fields
from .base import (
    Connection,
    ConnectionIOError,
    UnknownHostError,
)


class TCPConnection(Connection):
    """A connected socket with buffered binary input and output. Lines read
    from the socket are decoded as UTF-8; anything written is passed through
    as bytes, the caller is responsible for encoding header text.
    """

    def __init__(self, sock: socket.socket, address=None):
        self.socket = sock
        self.address = address or sock.getpeername()

        self._reader = sock.makefile('rb')
        self._writer = sock.makefile('wb')
        self._closed = False
        self._close_lock = threading.Lock()

    def __repr__(self) -> str:
        state = 'closed' if self._closed else 'open'
        return f"<TCPConnection {self.address[0]}:{self.address[1]} {state}>"

    def write(self, data: bytes) -> None:
        try:
            self._writer.write(data)
        except (OSError, ValueError) as exc:
            raise ConnectionIOError(f"write failed on {self!r}") from exc

    def flush(self) -> None:
        try:
            self._writer.flush()
        except (OSError, ValueError) as exc:
            raise ConnectionIOError(f"flush failed on {self!r}") from exc

    def readline(self) -> Optional[str]:
        try:
            line = self._reader.readline()
        except (OSError, ValueError) as exc:
            raise ConnectionIOError(f"read failed on {self!r}") from exc

        if line == b'':
            return None

        if line.endswith(b'\r\n'):
            line = line[:-2]
        elif line.endswith(b'\n'):
            line = line[:-1]

        return line.decode(fields.CHARSET, errors='replace')

    def settimeout(self, timeout: Optional[float]) -> None:
        self.socket.settimeout(timeout)

    def close(self) -> None:
        with self._close_lock:
            if self._closed:
                return
            self._closed = True

        for stream in (self._writer, self._reader):
            try:
                stream.close()
            except OSError:
                # Unflushed output on a dead socket; the socket itself
                # still needs to be released below.
                pass

        try:
            self.socket.shutdown(socket.SHUT_RDWR)
        except OSError:
            pass

        self.socket.close()
        logger.debug("closed {!r}", self)

    @property
    def is_open(self) -> bool:
        return not self._closed


def open(host: str, port: int, timeout: Optional[float] = None) -> TCPConnection:
    """Connect to the daemon at *host*:*port*. The *timeout*, if any, applies
    to the connect and to every subsequent blocking read or write until it
    is changed with :meth:`TCPConnection.settimeout`.
    """

    port = int(port)

    try:
        sock = socket.create_connection((host, port), timeout)
    except socket.gaierror as exc:
        raise UnknownHostError(f"unknown host: {host!r}") from exc
    except OSError as exc:
        raise ConnectionIOError(f"cannot connect to {host}:{port}: {exc}") from exc

    connection = TCPConnection(sock, (host, port))
    logger.debug("opened {!r}", connection)
    return connection
