import hashlib

import gntp


def split(suffix):
    assert suffix.startswith(' SHA512:')
    key_hash, salt = suffix[len(' SHA512:'):].split('.')
    return key_hash, salt


def test_no_password():
    assert gntp.auth.suffix('') == ''
    assert gntp.auth.suffix(None) == ''


def test_format():

    suffix = gntp.auth.suffix('foobar')
    key_hash, salt = split(suffix)

    assert len(salt) == 32
    assert len(key_hash) == 128
    int(salt, 16)
    int(key_hash, 16)


def test_two_pass_hash():
    """ The key hash must match the receiving daemon's computation exactly:
        SHA-512 over the password bytes and raw salt, then SHA-512 over the
        raw digest of that.
    """

    password = 'foobar'
    key_hash, salt = split(gntp.auth.suffix(password))

    key = hashlib.sha512(password.encode('utf-8') + bytes.fromhex(salt)).digest()
    expected = hashlib.sha512(key).hexdigest()

    assert key_hash == expected


def test_fresh_salt():

    first = split(gntp.auth.suffix('foobar'))
    second = split(gntp.auth.suffix('foobar'))

    assert first[1] != second[1]
    assert first[0] != second[0]


def test_verify():

    suffix = gntp.auth.suffix('correct horse')

    assert gntp.auth.verify(suffix, 'correct horse') == True
    assert gntp.auth.verify(suffix, 'battery staple') == False
    assert gntp.auth.verify(' MD5:abc.def', 'correct horse') == False
    assert gntp.auth.verify(' SHA512:nonsense', 'correct horse') == False
    assert gntp.auth.verify('', '') == True


def test_non_ascii_password():

    suffix = gntp.auth.suffix('pässwörd')
    assert gntp.auth.verify(suffix, 'pässwörd') == True


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
