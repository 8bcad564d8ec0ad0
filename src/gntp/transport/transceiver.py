"""Writing requests to, and reading response blocks from, a connection.

Request layout:
    status line + headers (CRLF terminated)
    for each resource block:
        blank line, Identifier, Length, blank line, raw bytes, blank line
    final blank line
"""

from __future__ import annotations

from typing import List, Optional, Union

from loguru import logger

from ..protocol import fields
from ..protocol.message import Message
from ..protocol.response import ProtocolError, Response, parse
from .base import Connection, UnsupportedEncodingError


CRLF = b"\r\n"


def encode(message: Message) -> bytes:
    """Return the complete wire representation of *message*. Header text is
    always UTF-8; text that cannot be encoded, such as a lone surrogate,
    raises :class:`UnsupportedEncodingError`.
    """

    header, resources = message

    try:
        parts = [header.encode(fields.CHARSET)]
    except UnicodeEncodeError as exc:
        raise UnsupportedEncodingError(f"cannot encode {message!r} as {fields.CHARSET}: {exc.reason}") from exc

    for block in resources:
        parts.append(CRLF)
        parts.append(f"{fields.IDENTIFIER}: {block.identifier}".encode(fields.CHARSET) + CRLF)
        parts.append(f"{fields.LENGTH}: {block.length}".encode(fields.CHARSET) + CRLF)
        parts.append(CRLF)
        parts.append(block.data)
        parts.append(CRLF)

    parts.append(CRLF)
    return b"".join(parts)


def send(connection: Connection, message: Union[Message, bytes]) -> None:
    """Write *message* and its resource blocks, then flush. The message may
    also be given already encoded, as returned by :func:`encode`.
    """

    if isinstance(message, bytes):
        data = message
    else:
        data = encode(message)

    logger.debug("sending {} bytes on {!r}", len(data), connection)

    connection.write(data)
    connection.flush()


def read_block(connection: Connection) -> Optional[List[str]]:
    """Read lines up to the next blank line. Blank lines preceding the block
    are skipped. Returns None if the connection reaches EOF before any
    content is read; a block cut short by EOF is returned as-is.
    """

    lines: List[str] = []

    while True:
        line = connection.readline()

        if line is None:
            break

        if line == "":
            if lines:
                break
            continue

        lines.append(line)

    if not lines:
        return None

    return lines


def receive(connection: Connection) -> Response:
    """Read and parse the primary response to a request."""

    lines = read_block(connection)

    if lines is None:
        raise ProtocolError("connection closed without a response")

    response = parse(lines)
    logger.debug("received {!r}", response)
    return response
