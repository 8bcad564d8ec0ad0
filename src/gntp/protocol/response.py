""" Parsing of the blocks a daemon sends back: the immediate -OK or -ERROR
    response to a request, and the -CALLBACK block that may follow it much
    later on the same connection.
"""

import re

from . import fields


status_pattern = re.compile(r'^GNTP/(\d+\.\d+)\s+-(\S+)(?:\s+(\S+))?\s*$')


class ProtocolError(Exception):
    """ The daemon's reply was missing, unparseable, or was not an -OK
        response where one was required.
    """

    def __init__(self, message, response=None):
        Exception.__init__(self, message)
        self.response = response


class Response:
    """ A single parsed response block: the *status* from the status line,
        plus any *headers* that followed it. Header names are matched
        case-insensitively.
    """

    def __init__(self, status, headers=None, version=fields.VERSION, encryption=fields.ENCRYPTION):

        self.status = status
        self.version = version
        self.encryption = encryption
        self.headers = dict()

        if headers:
            for name, value in headers.items():
                self.headers[name.lower()] = value


    def __contains__(self, name):
        return name.lower() in self.headers


    def __getitem__(self, name):
        return self.headers[name.lower()]


    def __repr__(self):
        return '<Response -%s %r>' % (self.status, self.headers)


    def get(self, name, default=None):
        return self.headers.get(name.lower(), default)


    @property
    def ok(self):
        return self.status == fields.OK


    @property
    def error_code(self):
        return self.get(fields.ERROR_CODE)


    @property
    def error_description(self):
        return self.get(fields.ERROR_DESCRIPTION)


    def describe(self):
        """ Return a short human-readable summary, including any error code
            and description the daemon provided.
        """

        description = '-' + self.status

        code = self.error_code
        if code is not None:
            description += ' ' + code

        text = self.error_description
        if text:
            description += ': ' + text

        return description


# end of class Response



def parse(lines):
    """ Parse a response block, given as a sequence of *lines* without line
        terminators and without the terminating blank line. Raises
        :class:`ProtocolError` if the first line is not a valid status line.
    """

    if not lines:
        raise ProtocolError('empty response')

    status_line = lines[0]
    match = status_pattern.match(status_line)

    if match is None:
        raise ProtocolError('malformed status line: ' + repr(status_line))

    version, status, encryption = match.groups()

    if encryption is None:
        encryption = fields.ENCRYPTION

    headers = dict()

    for line in lines[1:]:
        try:
            name, value = line.split(':', 1)
        except ValueError:
            # Not a header. The protocol allows nothing else here, but
            # there is no reason to discard an otherwise valid response.
            continue

        headers[name.strip()] = value.strip()

    return Response(status, headers, version, encryption)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
