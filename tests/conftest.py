"""
Shared fixtures: a recording stand-in for ``ldap3.Connection`` and helpers
for environment-driven configuration.
"""

import logging

import pytest

from bindauth.ad import ADConfig
from bindauth.env_settings import get_env

DOMAIN = "corp.local"
GOOD_PASSWORD = "correctpassword"

_ENV_VARS = (
    "LDAP_HOST",
    "LDAP_PORT",
    "LDAP_DOMAIN_SUFFIX",
    "LDAP_USE_SSL",
    "LDAP_STARTTLS",
    "LDAP_TLS_VALIDATE",
    "LDAP_CA_CERT_FILE",
    "LDAP_CONNECT_TIMEOUT",
    "LDAP_RECEIVE_TIMEOUT",
    "LOG_LEVEL",
    "LOG_DIR",
    "LOG_RETENTION_DAYS",
)


class FakeConnection:
    def __init__(self, directory, server, user=None, password=None, **kwargs):
        self.directory = directory
        self.server = server
        self.user = user
        self.password = password
        self.kwargs = kwargs
        self.events = []
        self.result = None

    def open(self):
        self.events.append("open")
        if self.directory.open_error is not None:
            raise self.directory.open_error

    def start_tls(self):
        self.events.append("start_tls")
        return True

    def bind(self):
        self.events.append("bind")
        if self.directory.bind_error is not None:
            raise self.directory.bind_error
        ok = self.directory.accounts.get(self.user) == self.password
        if ok:
            self.result = {"result": 0, "description": "success"}
        else:
            self.result = {"result": 49, "description": "invalidCredentials"}
        return ok

    def unbind(self):
        self.events.append("unbind")
        if self.directory.unbind_error is not None:
            raise self.directory.unbind_error
        return True


class FakeDirectory:
    """Accounts keyed by exact bind principal."""

    def __init__(self):
        self.accounts = {}
        self.connections = []
        self.open_error = None
        self.bind_error = None
        self.unbind_error = None

    def connect(self, server, **kwargs):
        conn = FakeConnection(self, server, **kwargs)
        self.connections.append(conn)
        return conn

    @property
    def last(self):
        return self.connections[-1]


@pytest.fixture(autouse=True)
def _restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    root.setLevel(level)


@pytest.fixture
def directory(monkeypatch):
    d = FakeDirectory()
    d.accounts[f"alice@{DOMAIN}"] = GOOD_PASSWORD
    monkeypatch.setattr("bindauth.ad.client.Connection", d.connect)
    return d


@pytest.fixture
def ad_config():
    return ADConfig(host="dc01.corp.local", domain=DOMAIN)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    # Keep a stray .env in the working directory out of the tests.
    monkeypatch.chdir(tmp_path)
    get_env.cache_clear()
    yield monkeypatch
    get_env.cache_clear()


@pytest.fixture
def ldap_env(clean_env):
    clean_env.setenv("LDAP_HOST", "dc01.corp.local")
    clean_env.setenv("LDAP_DOMAIN_SUFFIX", DOMAIN)
    return clean_env
