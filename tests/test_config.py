import pytest

import gntp


def test_defaults():

    settings = gntp.config.settings()

    assert settings['host'] == 'localhost'
    assert settings['port'] == 23053
    assert settings['password'] == ''
    assert settings['timeout'] is None


def test_environment(monkeypatch):

    monkeypatch.setenv('GNTP_HOST', 'example.com')
    monkeypatch.setenv('GNTP_PORT', '1234')
    monkeypatch.setenv('GNTP_TIMEOUT', '2.5')

    assert gntp.config.get('host') == 'example.com'
    assert gntp.config.get('port') == 1234
    assert gntp.config.get('timeout') == 2.5


def test_explicit_wins(monkeypatch):

    monkeypatch.setenv('GNTP_PORT', '1234')
    assert gntp.config.get('port', 4321) == 4321


def test_client_settings(monkeypatch):

    monkeypatch.setenv('GNTP_PASSWORD', 'secret')

    client = gntp.client('Test', host='example.com', port=1234)

    assert client.host == 'example.com'
    assert client.port == 1234
    assert client.password == 'secret'


def test_bad_values():

    with pytest.raises(KeyError):
        gntp.config.get('nonsense')

    with pytest.raises(ValueError):
        gntp.config.get('port', 70000)

    with pytest.raises(ValueError):
        gntp.config.get('port', 'http')


def test_zero_timeout():
    assert gntp.config.get('timeout', 0) is None


# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
