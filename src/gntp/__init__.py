""" Python implementation of a GNTP client. Applications register the
    notification types they intend to use with a notification daemon, then
    send notifications of those types, optionally with inline icons and
    callbacks when the user responds.

    Logging uses loguru and is disabled by default for this package; call
    ``loguru.logger.enable('gntp')`` to see it.
"""

from loguru import logger

from .version import __version__

# Utility components.

from . import auth
from . import config
from . import resource

# Submodules used by multiple other components.

from . import protocol
from . import transport
from . import callback

# Primary public-facing interfaces.

from . import session
client = session.client

from .session import Client, Notifier
from .protocol.message import NotificationType, TargetURL, ContextSink
from .resource import RemoteURL, LocalBytes, InvalidIconArgument
from .callback import CallbackEvent, CallbackResult

logger.disable(__name__)

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
