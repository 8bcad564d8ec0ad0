"""
GNTP Protocol Layer
===================

This package defines the text messages exchanged with a notification
daemon: construction of REGISTER and NOTIFY requests, and parsing of the
status blocks that come back. It does not open sockets or move bytes;
see :mod:`gntp.transport` for that.

---------------------------------------------------------------------

Layer Architecture Overview
---------------------------

Client Session (gntp.session)
    Binds application name, credential, endpoint
    Hands out one notifier per registered type

    │
    ▼
Message Builder (message.py)
    REGISTER / NOTIFY header text
    Resource accumulator for inline icons
    Authentication suffix on the status line

    │
    ▼
Response Model (response.py)
    Status line + header parsing
    OK / ERROR / CALLBACK blocks

    │
    ▼
Field Vocabulary (fields.py)
    Canonical header names

---------------------------------------------------------------------
"""

from . import fields
from . import message
from . import response

from .response import ProtocolError, Response


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
