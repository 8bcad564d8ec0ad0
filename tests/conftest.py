import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(__file__))

import gntp
import stubdaemon


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):

    for variable in gntp.config.environment.values():
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture
def daemon():

    daemon = stubdaemon.Daemon()
    yield daemon
    daemon.cleanup()


@pytest.fixture
def growler(daemon):
    return gntp.client('gntp Self Test', host='127.0.0.1', port=daemon.port)


@pytest.fixture
def icon_bytes():
    return b'\x89PNG\r\n\x1a\n' + bytes(range(256)) + b'\r\n\r\n'

# vim: set expandtab tabstop=8 softtabstop=4 shiftwidth=4 autoindent:
