""" Icon references and the binary resource blocks used to embed them.

    An icon is either a :class:`RemoteURL`, which is passed through to the
    daemon verbatim, or :class:`LocalBytes`, which is transmitted inline as
    a resource block following the message headers. Inline resources are
    identified by a hash of their content, so the same bytes always map to
    the same identifier no matter where they were read from.
"""

import hashlib
import os
import urllib.parse

scheme = 'x-growl-resource://'


class InvalidIconArgument(TypeError):
    """ Raised when something other than a recognized icon reference is
        offered as an icon. This is always raised before any connection
        to the daemon is attempted.
    """

    pass


class RemoteURL:
    """ An icon hosted somewhere the daemon can fetch it from.
    """

    def __init__(self, url):
        url = str(url)

        if url == '':
            raise InvalidIconArgument('icon URL cannot be empty')

        self.url = url


    def __eq__(self, other):
        return isinstance(other, RemoteURL) and other.url == self.url


    def __hash__(self):
        return hash(self.url)


    def __repr__(self):
        return 'RemoteURL(%r)' % (self.url,)


# end of class RemoteURL



class LocalBytes:
    """ Raw icon bytes, to be transmitted as a resource block. The
        :attr:`identifier` is the hex MD5 digest of the content.
    """

    def __init__(self, data):
        self.data = bytes(data)
        self.identifier = hashlib.md5(self.data).hexdigest()


    def __eq__(self, other):
        return isinstance(other, LocalBytes) and other.identifier == self.identifier


    def __hash__(self):
        return hash(self.identifier)


    def __len__(self):
        return len(self.data)


    def __repr__(self):
        return 'LocalBytes(<%d bytes, %s>)' % (len(self.data), self.identifier)


    @classmethod
    def from_file(cls, path):
        try:
            stream = open(path, 'rb')
        except OSError as exc:
            raise InvalidIconArgument('cannot read icon file: ' + repr(str(path))) from exc

        with stream:
            return cls(stream.read())


    @classmethod
    def from_stream(cls, stream):
        data = stream.read()

        if isinstance(data, str):
            raise InvalidIconArgument('icon streams must be opened in binary mode')

        return cls(data)


# end of class LocalBytes



class ResourceBlock:
    """ A single out-of-band binary attachment. Exists only long enough to be
        written after the headers of one outgoing message.
    """

    def __init__(self, identifier, data):
        self.identifier = identifier
        self.data = data
        self.length = len(data)


    def __repr__(self):
        return 'ResourceBlock(%s, %d bytes)' % (self.identifier, self.length)


# end of class ResourceBlock



class Resources:
    """ An immutable collection of :class:`ResourceBlock` instances for one
        outgoing message. :func:`add` returns a new collection rather than
        modifying this one; adding a block whose identifier is already
        present returns the collection unchanged.
    """

    def __init__(self, blocks=()):
        self.blocks = tuple(blocks)


    def __contains__(self, identifier):
        for block in self.blocks:
            if block.identifier == identifier:
                return True

        return False


    def __iter__(self):
        return iter(self.blocks)


    def __len__(self):
        return len(self.blocks)


    def __repr__(self):
        return 'Resources(%r)' % (self.blocks,)


    def add(self, block):
        if block is None or block.identifier in self:
            return self

        return Resources(self.blocks + (block,))


# end of class Resources



def icon(value):
    """ Resolve a caller-supplied *value* to a :class:`RemoteURL` or a
        :class:`LocalBytes` instance. This is the only place where the
        type of an icon argument is inspected; everything downstream only
        deals with the two reference types.

        Accepted values are None, an existing reference, a URL string with
        a scheme, a parsed URL from :mod:`urllib.parse`, bytes-like content,
        a filesystem path (any :class:`os.PathLike`), or a stream opened in
        binary mode. Plain strings without a scheme are rejected, since a
        string could equally be a path; wrap it in :class:`pathlib.Path`.
        A path that cannot be opened raises :class:`InvalidIconArgument`,
        with the underlying :class:`OSError` chained to it.
    """

    if value is None:
        return None

    if isinstance(value, (RemoteURL, LocalBytes)):
        return value

    if isinstance(value, (bytes, bytearray, memoryview)):
        return LocalBytes(value)

    if isinstance(value, (urllib.parse.ParseResult, urllib.parse.SplitResult)):
        return RemoteURL(value.geturl())

    if isinstance(value, str):
        parsed = urllib.parse.urlsplit(value)
        if parsed.scheme and '://' in value:
            return RemoteURL(value)
        raise InvalidIconArgument('icon string is not a URL: ' + repr(value))

    if isinstance(value, os.PathLike):
        return LocalBytes.from_file(value)

    if callable(getattr(value, 'read', None)):
        return LocalBytes.from_stream(value)

    raise InvalidIconArgument('not a usable icon: ' + repr(value))


def embed(reference):
    """ Return a (header value, resource block) tuple for a resolved icon
        *reference*. Remote URLs have no block; no icon at all returns
        (None, None).
    """

    if reference is None:
        return None, None

    if isinstance(reference, RemoteURL):
        return reference.url, None

    if isinstance(reference, LocalBytes):
        block = ResourceBlock(reference.identifier, reference.data)
        return scheme + reference.identifier, block

    raise InvalidIconArgument('not an icon reference: ' + repr(reference))


def attach(reference, resources):
    """ Embed *reference* and fold any resulting block into *resources*.
        Returns the header value and the updated :class:`Resources`.
    """

    value, block = embed(reference)
    return value, resources.add(block)


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
