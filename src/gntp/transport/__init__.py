"""Transport layer: TCP connections and the request/response exchange."""

from .base import (
    Connection,
    TransportError,
    TransportConnectionError,
    UnknownHostError,
    ConnectionIOError,
    UnsupportedEncodingError,
)

from . import tcp
from . import transceiver
