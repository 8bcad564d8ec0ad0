""" A super-simple GNTP daemon to act as a foil for the client-facing unit
    tests. It accepts connections on a local port, parses each request just
    far enough to know where it ends, records it, and writes back a canned
    reply. It can optionally follow the reply with a -CALLBACK block once
    the test allows it to.
"""

import socket
import threading

OK = b'GNTP/1.0 -OK NONE\r\n\r\n'
ERROR = b'GNTP/1.0 -ERROR NONE\r\nError-Code: 300\r\nError-Description: Invalid request\r\n\r\n'


def callback_block(app_name, notification_id='1', result='CLICKED', context='Context', type='Type'):

    lines = list()
    lines.append('GNTP/1.0 -CALLBACK NONE')
    lines.append('Application-Name: ' + app_name)
    lines.append('Notification-ID: ' + str(notification_id))
    lines.append('Notification-Callback-Result: ' + result)
    lines.append('Notification-Callback-Timestamp: 2012-10-04 15:47:32-0800')
    lines.append('Notification-Callback-Context: ' + context)
    lines.append('Notification-Callback-Context-Type: ' + type)

    block = '\r\n'.join(lines) + '\r\n\r\n'
    return block.encode()


def echo_callback(app_name, **kwargs):
    """ Build a callback that names whichever notification the daemon was
        handed, the way a real daemon would.
    """

    def build(request):
        notification_id = request.header('Notification-ID')
        return callback_block(app_name, notification_id, **kwargs)

    return build


class Recorder:
    """ Wrap a binary file object, keeping a copy of everything read.
    """

    def __init__(self, stream):
        self.stream = stream
        self.raw = bytearray()


    def readline(self):
        line = self.stream.readline()
        self.raw.extend(line)
        return line


    def read(self, size):
        data = self.stream.read(size)
        self.raw.extend(data)
        return data


# end of class Recorder



class Request:
    """ One request as seen by the daemon. The *sections* are the blank-line
        separated header blocks, each a list of lines; the *resources* map
        identifiers to the raw bytes that followed them.
    """

    def __init__(self):
        self.raw = b''
        self.sections = list()
        self.resources = dict()
        self.identifiers = list()
        self.closed = threading.Event()


    @property
    def status_line(self):
        return self.sections[0][0]


    @property
    def lines(self):
        found = list()
        for section in self.sections:
            found.extend(section)
        return found


    def headers(self, name):
        """ Return every value for the header *name*, across all sections.
        """

        found = list()
        prefix = name + ': '
        for line in self.lines:
            if line.startswith(prefix):
                found.append(line[len(prefix):])
        return found


    def header(self, name):
        values = self.headers(name)
        if len(values) == 0:
            return None
        return values[0]


# end of class Request



def read_section(stream):

    lines = list()

    while True:
        line = stream.readline()
        if line == b'' or line == b'\r\n':
            break
        lines.append(line[:-2].decode('utf-8'))

    return lines


def read_request(stream):

    request = Request()
    request.sections.append(read_section(stream))

    count = request.header('Notifications-Count')
    if count is not None:
        for number in range(int(count)):
            request.sections.append(read_section(stream))

    pointers = set()
    for line in request.lines:
        if 'x-growl-resource://' in line:
            pointers.add(line.split('x-growl-resource://', 1)[1])

    for pointer in pointers:
        block = read_section(stream)
        identifier = block[0].split(': ', 1)[1]
        length = int(block[1].split(': ', 1)[1])

        request.identifiers.append(identifier)
        request.resources[identifier] = stream.read(length)

        stream.readline()   # End of the data.
        stream.readline()   # Blank line following the block.

    return request


class Daemon:

    def __init__(self, reply=OK, callback=None):

        self.reply = reply
        self.callback = callback
        self.release = threading.Event()
        self.release.set()

        self.requests = list()

        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind(('127.0.0.1', 0))
        sock.listen(8)

        self.socket = sock
        self.port = sock.getsockname()[1]

        self.thread = threading.Thread(target=self.run)
        self.thread.daemon = True
        self.thread.start()


    @property
    def last(self):
        return self.requests[-1]


    def cleanup(self):
        self.release.set()
        try:
            self.socket.close()
        except OSError:
            pass


    def run(self):

        while True:
            try:
                connection, address = self.socket.accept()
            except OSError:
                break

            thread = threading.Thread(target=self.handle, args=(connection,))
            thread.daemon = True
            thread.start()


    def handle(self, connection):

        connection.settimeout(5)

        with connection:
            stream = connection.makefile('rb')
            recorder = Recorder(stream)

            try:
                request = read_request(recorder)
            except (OSError, IndexError, ValueError):
                return

            request.raw = bytes(recorder.raw)
            reply = self.reply
            callback = self.callback

            if not request.sections[0]:
                # The client went away without sending anything.
                request.closed.set()
                return

            self.requests.append(request)

            try:
                connection.sendall(reply)

                if callable(callback):
                    callback = callback(request)

                if callback is not None:
                    self.release.wait(5)
                    connection.sendall(callback)

                while stream.read(4096):
                    pass
            except OSError:
                pass

            request.closed.set()


# end of class Daemon


def unused_port():
    """ Return a local port number with nothing listening on it.
    """

    sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    sock.bind(('127.0.0.1', 0))
    port = sock.getsockname()[1]
    sock.close()
    return port


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
