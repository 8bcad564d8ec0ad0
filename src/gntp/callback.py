""" Delivery of -CALLBACK responses. When a notification is sent with a
    :class:`gntp.protocol.message.ContextSink`, the daemon keeps the
    connection open and, once the user has dealt with the notification,
    writes one more response block. A :class:`Dispatcher` takes ownership
    of the connection after the primary response has been read, waits for
    that block in a background thread, and hands the resulting
    :class:`CallbackEvent` to the sink.

    There is no timeout on this wait. It ends when the daemon sends the
    callback or the connection is closed from the other side; at most one
    event is ever delivered per notification, and the connection is closed
    only after delivery has finished.
"""

import concurrent.futures
import dataclasses
import enum
import threading

from loguru import logger

from .protocol import fields
from .protocol.response import ProtocolError, parse
from .transport.base import TransportError
from .transport import transceiver


class CallbackResult(enum.Enum):
    CLICKED = 'CLICKED'
    CLOSED = 'CLOSED'
    TIMEDOUT = 'TIMEDOUT'


# Older daemons use the shorter forms.

_aliases = dict()
_aliases['CLICK'] = CallbackResult.CLICKED
_aliases['CLOSE'] = CallbackResult.CLOSED
_aliases['TIMEOUT'] = CallbackResult.TIMEDOUT


def result(value):
    value = value.strip().upper()

    try:
        return CallbackResult(value)
    except ValueError:
        pass

    try:
        return _aliases[value]
    except KeyError:
        raise ProtocolError('unknown callback result: ' + repr(value))


@dataclasses.dataclass(frozen=True)
class CallbackEvent:
    app_name: str
    notification_id: str
    result: CallbackResult
    timestamp: str
    context: str
    type: str


def event(response):
    """ Build a :class:`CallbackEvent` from a parsed -CALLBACK *response*.
    """

    if response.status != fields.CALLBACK:
        raise ProtocolError('expected a callback, got ' + response.describe(), response)

    return CallbackEvent(
        app_name=response.get(fields.APPLICATION_NAME, ''),
        notification_id=response.get(fields.NOTIFICATION_ID, ''),
        result=result(response.get(fields.CALLBACK_RESULT, '')),
        timestamp=response.get(fields.CALLBACK_TIMESTAMP, ''),
        context=response.get(fields.CALLBACK_CONTEXT, ''),
        type=response.get(fields.CALLBACK_CONTEXT_TYPE, ''),
    )


def deliver(sink, event):
    """ Hand *event* to *sink*: set the result of a future, put it on a
        queue-like object, or call it.
    """

    if isinstance(sink, concurrent.futures.Future):
        sink.set_result(event)
    elif callable(getattr(sink, 'put', None)):
        sink.put(event)
    else:
        sink(event)


class Dispatcher:
    """ Wait on *connection* for the callback to the notification identified
        by *notification_id*, and deliver it to *sink*. The dispatcher owns
        the connection from the moment it is created; the caller must not
        read from or close it afterwards.

        :ivar event: The delivered :class:`CallbackEvent`, if any.
        :ivar done: A :class:`threading.Event` set once the connection has
                    been closed, whether or not an event was delivered.
    """

    def __init__(self, connection, sink, notification_id=None):

        self.connection = connection
        self.sink = sink
        self.notification_id = notification_id
        self.event = None
        self.done = threading.Event()

        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True


    def start(self):
        self.thread.start()
        return self


    def wait(self, timeout=None):
        """ Block until the dispatcher has finished. Returns True if it has.
        """

        return self.done.wait(timeout)


    def receive(self):
        """ Block for the callback block and return the parsed event, or
            None if the connection closed first.
        """

        # Reads on the callback channel never time out, regardless of
        # any timeout used for the primary exchange.

        self.connection.settimeout(None)

        lines = transceiver.read_block(self.connection)

        if lines is None:
            return None

        return event(parse(lines))


    def run(self):

        try:
            try:
                received = self.receive()
            except (TransportError, ProtocolError) as e:
                logger.debug("no callback for notification {}: {}", self.notification_id, e)
                return

            if received is None:
                logger.debug("connection closed before a callback for notification {}", self.notification_id)
                return

            if self.notification_id is not None and received.notification_id != str(self.notification_id):
                logger.debug("callback id {} does not match notification {}", received.notification_id, self.notification_id)

            self.event = received

            try:
                deliver(self.sink, received)
            except Exception:
                logger.exception("callback sink raised while handling {!r}", received)

        finally:
            self.connection.close()
            self.done.set()


# end of class Dispatcher


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
