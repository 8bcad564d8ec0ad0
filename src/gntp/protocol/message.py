""" Class representations of the two GNTP requests a client sends: REGISTER,
    announcing an application and the notification types it will use, and
    NOTIFY, displaying a single notification of a registered type.
"""

import platform
import socket
import threading
import urllib.parse
import uuid

from .. import auth
from .. import resource
from ..version import __version__
from . import fields

software_name = 'gntp'


class NotificationType:
    """ One notification type to be registered. The *id* is what later
        notifications refer to; the *display_name* is what the end user
        sees in the daemon's preferences, and defaults to the string form
        of the *id*. The *icon* may be anything :func:`gntp.resource.icon`
        accepts, and is resolved immediately.
    """

    def __init__(self, id, display_name=None, enabled=True, icon=None):

        if id is None or str(id) == '':
            raise ValueError('notification types must have an id')

        if display_name is None:
            display_name = str(id)

        self.id = id
        self.display_name = display_name
        self.enabled = bool(enabled)
        self.icon = resource.icon(icon)


    def __repr__(self):
        return 'NotificationType(%r, %r, enabled=%r)' % (self.id, self.display_name, self.enabled)


# end of class NotificationType



class TargetURL:
    """ A callback handled entirely by the daemon: when the user clicks the
        notification, the daemon opens *url*. Nothing comes back to the
        client.
    """

    def __init__(self, url):
        self.url = str(url)


    def __repr__(self):
        return 'TargetURL(%r)' % (self.url,)


# end of class TargetURL



class ContextSink:
    """ A callback routed back over the connection. The *context* and *type*
        strings are opaque to the daemon and are returned verbatim; the
        :class:`gntp.callback.CallbackEvent` is delivered to *sink*, which
        may be a :class:`concurrent.futures.Future`, anything with a
        ``put()`` method (such as a :class:`queue.Queue`), or a callable.
    """

    def __init__(self, context, type, sink):

        if sink is None:
            raise ValueError('a context callback requires a sink')

        self.context = str(context)
        self.type = str(type)
        self.sink = sink


    def __repr__(self):
        return 'ContextSink(%r, %r, %r)' % (self.context, self.type, self.sink)


# end of class ContextSink



def resolve_callback(value):
    """ Resolve a caller-supplied callback *value* to a :class:`TargetURL`
        or a :class:`ContextSink`. Strings and parsed URLs become a
        :class:`TargetURL`.
    """

    if value is None:
        return None

    if isinstance(value, (TargetURL, ContextSink)):
        return value

    if isinstance(value, (urllib.parse.ParseResult, urllib.parse.SplitResult)):
        return TargetURL(value.geturl())

    if isinstance(value, str):
        return TargetURL(value)

    raise TypeError('not a usable callback: ' + repr(value))


def format_value(value):
    """ Render a header value as text. Booleans are lowercase, and line
        breaks are flattened so that a value can never terminate a header
        block early.
    """

    if value is True:
        return 'true'
    if value is False:
        return 'false'
    if value is None:
        return ''

    value = str(value)
    value = value.replace('\r\n', ' ')
    value = value.replace('\r', ' ')
    value = value.replace('\n', ' ')
    return value


def origin():
    """ Return the origin headers describing this machine and client, as a
        list of (name, value) pairs.
    """

    machine = socket.gethostname() or 'localhost'
    platform_name = platform.system() or 'unknown'
    platform_version = platform.release() or 'unknown'

    headers = list()
    headers.append((fields.ORIGIN_MACHINE_NAME, machine))
    headers.append((fields.ORIGIN_SOFTWARE_NAME, software_name))
    headers.append((fields.ORIGIN_SOFTWARE_VERSION, __version__))
    headers.append((fields.ORIGIN_PLATFORM_NAME, platform_name))
    headers.append((fields.ORIGIN_PLATFORM_VERSION, platform_version))
    return headers


class Message:
    """ The :class:`Message` is the common base for outgoing requests. The
        header text and the accumulated resource blocks are generated once,
        on first use, and cached thereafter; in particular, the random
        authentication salt is drawn only once per message.

        Iterating over a message yields the header text followed by the
        :class:`gntp.resource.Resources` to be written after it.

        :ivar type: The request type, REGISTER or NOTIFY.
        :ivar app_name: The registering application.
    """

    valid_types = set((fields.REGISTER, fields.NOTIFY))
    type = None

    def __init__(self, app_name, password=''):

        if self.type in self.valid_types:
            pass
        else:
            raise ValueError('invalid request type: ' + repr(self.type))

        self.app_name = app_name
        self.password = password or ''

        self.parts = None


    def __iter__(self):
        self._finalize()
        return iter(self.parts)


    def __repr__(self):
        return '<%s %r>' % (self.type, self.app_name)


    @property
    def header(self):
        self._finalize()
        return self.parts[0]


    @property
    def resources(self):
        self._finalize()
        return self.parts[1]


    def status_line(self):
        version = fields.PROTOCOL + '/' + fields.VERSION
        line = '%s %s %s' % (version, self.type, fields.ENCRYPTION)
        return line + auth.suffix(self.password) + '\r\n'


    def _headers(self, resources):
        """ Return a list of (name, value) pairs following the status line,
            and the updated *resources*. A None entry in the list stands for
            a blank line.
        """

        raise NotImplementedError('subclasses must implement _headers()')


    def _finalize(self):
        """ Take the contents of this :class:`Message` and render the header
            text, collecting any inline resources along the way.
        """

        if self.parts is not None:
            return

        headers, resources = self._headers(resource.Resources())

        text = list()
        text.append(self.status_line())

        for header in headers:
            if header is None:
                text.append('\r\n')
                continue

            name, value = header
            text.append(name + ': ' + format_value(value) + '\r\n')

        self.parts = (''.join(text), resources)


# end of class Message



class Register(Message):
    """ A REGISTER request, announcing the application and the full set of
        notification *types* it intends to use.
    """

    type = fields.REGISTER

    def __init__(self, app_name, types=(), icon=None, password=''):

        Message.__init__(self, app_name, password)

        self.icon = resource.icon(icon)
        self.types = tuple(types)


    def _headers(self, resources):

        headers = origin()
        headers.append((fields.APPLICATION_NAME, self.app_name))

        icon, resources = resource.attach(self.icon, resources)
        if icon is not None:
            headers.append((fields.APPLICATION_ICON, icon))

        headers.append((fields.NOTIFICATIONS_COUNT, len(self.types)))

        for notification in self.types:
            headers.append(None)
            headers.append((fields.NOTIFICATION_NAME, notification.id))
            headers.append((fields.NOTIFICATION_DISPLAY_NAME, notification.display_name))
            headers.append((fields.NOTIFICATION_ENABLED, notification.enabled))

            icon, resources = resource.attach(notification.icon, resources)
            if icon is not None:
                headers.append((fields.NOTIFICATION_ICON, icon))

        return headers, resources


# end of class Register



class Notify(Message):
    """ A NOTIFY request for a single notification of a previously
        registered type. Every instance gets a fresh :attr:`id`; the
        :attr:`coalescing_id` is the id of the notification this one
        *replaces*, if any, otherwise its own id.
    """

    type = fields.NOTIFY

    def __init__(self, app_name, type_id, title, text='', sticky=False,
                 priority=0, icon=None, replaces=None, callback=None,
                 password=''):

        Message.__init__(self, app_name, password)

        priority = int(priority)
        if priority < -2 or priority > 2:
            raise ValueError('priority must be between -2 and 2: ' + repr(priority))

        self.type_id = type_id
        self.title = title
        self.text = text
        self.sticky = bool(sticky)
        self.priority = priority
        self.icon = resource.icon(icon)
        self.callback = resolve_callback(callback)

        self.id = _id_next()

        if replaces is None:
            self.coalescing_id = self.id
        else:
            self.coalescing_id = replaces


    def __repr__(self):
        return '<%s %r %r %s>' % (self.type, self.app_name, self.type_id, self.id)


    @property
    def sink(self):
        """ The :class:`ContextSink` awaiting a callback, if any.
        """

        if isinstance(self.callback, ContextSink):
            return self.callback


    def _headers(self, resources):

        headers = origin()
        headers.append((fields.APPLICATION_NAME, self.app_name))
        headers.append((fields.NOTIFICATION_NAME, self.type_id))
        headers.append((fields.NOTIFICATION_ID, self.id))
        headers.append((fields.NOTIFICATION_TITLE, self.title))
        headers.append((fields.NOTIFICATION_TEXT, self.text))
        headers.append((fields.NOTIFICATION_STICKY, self.sticky))
        headers.append((fields.NOTIFICATION_PRIORITY, self.priority))

        icon, resources = resource.attach(self.icon, resources)
        if icon is not None:
            headers.append((fields.NOTIFICATION_ICON, icon))

        headers.append((fields.NOTIFICATION_COALESCING_ID, self.coalescing_id))

        callback = self.callback

        if isinstance(callback, TargetURL):
            headers.append((fields.CALLBACK_TARGET, callback.url))
        elif isinstance(callback, ContextSink):
            headers.append((fields.CALLBACK_CONTEXT, callback.context))
            headers.append((fields.CALLBACK_CONTEXT_TYPE, callback.type))

        return headers, resources


# end of class Notify



_id_lock = threading.Lock()


def _id_next():
    """ Return a new notification id. Ids are time-ordered UUIDs; the lock
        keeps concurrent callers from drawing the same timestamp.
    """

    with _id_lock:
        return uuid.uuid1()


def register(app_name, types=(), icon=None, password=''):
    return Register(app_name, types, icon, password)


def notify(app_name, type_id, title, password='', **options):
    return Notify(app_name, type_id, title, password=password, **options)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
