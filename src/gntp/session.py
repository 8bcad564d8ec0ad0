""" The client-facing side of GNTP: a :class:`Client` binds an application
    name, password, and daemon endpoint once, registers notification types,
    and hands back one :class:`Notifier` per registered type.

    Failures talking to the daemon, whether the connection could not be made
    or the daemon answered with an error, are reported by returning None
    rather than raising; the reason is logged. Mistakes in the arguments,
    such as an unusable icon, raise immediately, before anything is sent.
"""

import threading

from loguru import logger

from . import callback
from . import config
from . import resource
from .protocol import message
from .protocol.response import ProtocolError
from .transport import tcp
from .transport import transceiver
from .transport.base import TransportError


class Client:
    """ A notification source registered, or to be registered, under
        *app_name*. Settings not provided here fall back to
        :mod:`gntp.config`. Calling the instance is the same as calling
        :func:`register`.

        :ivar registered: Mapping of type id to :class:`Notifier` from the
                          most recent successful registration.
    """

    def __init__(self, app_name, password=None, host=None, port=None, icon=None, timeout=None):

        settings = config.settings(password=password, host=host, port=port, timeout=timeout)

        self.app_name = app_name
        self.password = settings['password']
        self.host = settings['host']
        self.port = settings['port']
        self.timeout = settings['timeout']
        self.icon = resource.icon(icon)

        self.registered = dict()
        self._registered_lock = threading.Lock()


    def __call__(self, *types, **named):
        return self.register(*types, **named)


    def __repr__(self):
        return '<Client %r @ %s:%d>' % (self.app_name, self.host, self.port)


    def register(self, *types, **named):
        """ Register the application and the given notification types with
            the daemon. Positional arguments are
            :class:`gntp.protocol.message.NotificationType` instances or bare
            type ids; keyword arguments map a type id to None or to a
            dictionary with optional 'name', 'enabled', and 'icon' keys.

            Returns a dictionary of type id to :class:`Notifier` on success,
            or None if the registration failed. A successful registration
            replaces the previous one in its entirety.
        """

        types = _types(types, named)
        request = message.Register(self.app_name, types, self.icon, self.password)

        try:
            self._exchange(request)
        except (TransportError, ProtocolError) as e:
            logger.warning("registration of {!r} with {}:{} failed: {}", self.app_name, self.host, self.port, e)
            return None

        notifiers = dict()
        for notification in types:
            notifiers[notification.id] = Notifier(self, notification.id)

        with self._registered_lock:
            self.registered = notifiers

        logger.debug("registered {!r} with {} notification type(s)", self.app_name, len(notifiers))
        return dict(notifiers)


    def notify(self, type_id, title, text='', sticky=False, priority=0, icon=None, replaces=None, callback=None):
        """ Send a notification of the registered type *type_id*. Returns
            the new notification id on success, or None on failure,
            including when *type_id* is not part of the most recent
            successful registration.

            A *callback* may be a URL (opened by the daemon when the user
            clicks the notification) or a
            :class:`gntp.protocol.message.ContextSink`; in the latter case
            this call returns as soon as the daemon acknowledges the
            notification, and the sink receives a
            :class:`gntp.callback.CallbackEvent` later, from another thread.
        """

        with self._registered_lock:
            registered = type_id in self.registered

        if registered == False:
            logger.warning("{!r} is not a registered notification type for {!r}", type_id, self.app_name)
            return None

        request = message.Notify(self.app_name, type_id, title, text=text,
                                 sticky=sticky, priority=priority, icon=icon,
                                 replaces=replaces, callback=callback,
                                 password=self.password)

        try:
            self._exchange(request, request.sink)
        except (TransportError, ProtocolError) as e:
            logger.warning("notification {!r} to {}:{} failed: {}", type_id, self.host, self.port, e)
            return None

        return request.id


    def _exchange(self, request, sink=None):
        """ Encode *request*, open a connection, send it, and read the
            primary response. If a *sink* is waiting on a callback, the open
            connection is handed to a :class:`gntp.callback.Dispatcher`;
            otherwise it is closed before returning.
        """

        # Encoding problems surface here, before anything is connected.

        data = transceiver.encode(request)

        connection = tcp.open(self.host, self.port, self.timeout)
        owned = True

        try:
            transceiver.send(connection, data)
            response = transceiver.receive(connection)

            if not response.ok:
                raise ProtocolError('daemon replied ' + response.describe(), response)

            if sink is not None:
                callback.Dispatcher(connection, sink.sink, request.id).start()
                owned = False

            return response

        finally:
            if owned:
                connection.close()


# end of class Client



class Notifier:
    """ A callable bound to one notification type of a :class:`Client`.
        Invoking it with a title, and any of the keyword arguments accepted
        by :func:`Client.notify`, sends a notification of that type.
    """

    def __init__(self, client, type_id):
        self.client = client
        self.type_id = type_id


    def __call__(self, title, **options):
        return self.client.notify(self.type_id, title, **options)


    def __repr__(self):
        return '<Notifier %r for %r>' % (self.type_id, self.client.app_name)


# end of class Notifier



def _types(types, named):
    """ Normalize the positional and keyword arguments of
        :func:`Client.register` to a list of
        :class:`gntp.protocol.message.NotificationType`, one per unique id.
        A later definition of the same id replaces an earlier one.
    """

    resolved = dict()

    for notification in types:
        if not isinstance(notification, message.NotificationType):
            notification = message.NotificationType(notification)

        resolved[notification.id] = notification

    for type_id, options in named.items():
        if isinstance(options, message.NotificationType):
            notification = options
        elif options is None:
            notification = message.NotificationType(type_id)
        else:
            notification = message.NotificationType(type_id,
                                                    display_name=options.get('name'),
                                                    enabled=options.get('enabled', True),
                                                    icon=options.get('icon'))

        resolved[notification.id] = notification

    return list(resolved.values())


def client(app_name, password=None, host=None, port=None, icon=None, **settings):
    """ Return a new :class:`Client` for *app_name*. This is the usual entry
        point; the returned client is called with the notification types to
        register, and returns the notifiers for those types.
    """

    return Client(app_name, password, host, port, icon, **settings)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
