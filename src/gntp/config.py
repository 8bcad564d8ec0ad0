""" Default settings for connecting to a notification daemon. Every default
    can be overridden via the environment; the environment is consulted each
    time a setting is looked up, so changes take effect for the next client
    created. Keyword arguments passed to :func:`gntp.client` always take
    precedence over both.
"""

import os

defaults = dict()
defaults['host'] = 'localhost'
defaults['port'] = 23053
defaults['password'] = ''
defaults['timeout'] = None

environment = dict()
environment['host'] = 'GNTP_HOST'
environment['port'] = 'GNTP_PORT'
environment['password'] = 'GNTP_PASSWORD'
environment['timeout'] = 'GNTP_TIMEOUT'


def _port(value):
    value = int(value)

    if value < 1 or value > 65535:
        raise ValueError('port out of range: ' + repr(value))

    return value


def _timeout(value):
    if value is None or value == '':
        return None

    value = float(value)

    if value <= 0:
        return None

    return value


_converters = dict()
_converters['port'] = _port
_converters['timeout'] = _timeout


def get(name, value=None):
    """ Return the effective value of the setting *name*. An explicit
        *value* wins if it is not None; otherwise the corresponding
        environment variable is used, if set; otherwise the built-in
        default.
    """

    try:
        default = defaults[name]
    except KeyError:
        raise KeyError('unknown setting: ' + repr(name))

    if value is None:
        try:
            value = os.environ[environment[name]]
        except KeyError:
            value = default

    try:
        converter = _converters[name]
    except KeyError:
        return value

    return converter(value)


def settings(**overrides):
    """ Return a dictionary of every effective setting, applying any
        keyword *overrides* as explicit values.
    """

    resolved = dict()

    for name in defaults:
        resolved[name] = get(name, overrides.get(name))

    return resolved


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
