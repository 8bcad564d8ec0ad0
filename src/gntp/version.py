""" Version of this GNTP client, as reported in the Origin-Software-Version
    header of every outgoing message.
"""

__version__ = '0.5.0'

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
