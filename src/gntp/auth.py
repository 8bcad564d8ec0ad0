""" Password authentication for GNTP messages. The plaintext password never
    crosses the wire; instead, a salted SHA-512 key hash is appended to the
    status line of each outgoing message:

        GNTP/1.0 NOTIFY NONE SHA512:<keyhash>.<salt>

    The receiving daemon repeats the computation with its own copy of the
    password and the transmitted salt.
"""

import hashlib
import hmac
import secrets

algorithm = 'SHA512'
salt_length = 16


def key_hash(password, salt):
    """ Return the hex-encoded key hash for the given *password* and raw
        *salt* bytes. The key is the SHA-512 digest of the UTF-8 password
        bytes followed by the salt; the key hash is the SHA-512 digest of
        the raw key bytes.
    """

    basis = password.encode('utf-8') + salt
    key = hashlib.sha512(basis).digest()
    return hashlib.sha512(key).hexdigest()


def suffix(password):
    """ Return the authentication suffix for a status line, including the
        leading space, or an empty string if no *password* was provided.
        A fresh random salt is drawn every time this is called.
    """

    if not password:
        return ''

    salt = secrets.token_bytes(salt_length)
    salt_hex = salt.hex().zfill(salt_length * 2)

    return ' %s:%s.%s' % (algorithm, key_hash(password, salt), salt_hex)


def verify(suffix, password):
    """ Check an authentication *suffix*, as generated by :func:`suffix`,
        against the expected *password*. This is the receiving side of the
        exchange; the client never needs it, but it is handy for anything
        that wants to play the role of the daemon.
    """

    suffix = suffix.strip()

    if suffix == '':
        return not password

    try:
        name, value = suffix.split(':', 1)
        expected, salt_hex = value.split('.', 1)
        salt = bytes.fromhex(salt_hex)
    except ValueError:
        return False

    if name.upper() != algorithm:
        return False

    actual = key_hash(password, salt)
    return hmac.compare_digest(actual, expected.lower())


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
