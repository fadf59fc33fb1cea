"""Boolean credential check against the configured directory.

``validate(username, password)`` is the whole public contract: it returns
True when the directory accepts a simple bind as ``username@domain`` and
False for everything else. Failure causes are deliberately not exposed.
"""
from __future__ import annotations

import logging

from ldap3.core.exceptions import LDAPException
from pydantic import ValidationError

from .ad import ADClient, ADConfig
from .env_settings import EnvSettings, get_env

log = logging.getLogger(__name__)


def ad_cfg_from_env(env: EnvSettings | None = None) -> ADConfig:
    env = env or get_env()
    return ADConfig(
        host=env.ldap_host,
        domain=env.ldap_domain_suffix,
        port=env.ldap_port,
        use_ssl=env.ldap_use_ssl,
        starttls=env.ldap_starttls,
        tls_validate=env.ldap_tls_validate,
        ca_cert_file=env.ldap_ca_cert_file,
        connect_timeout=env.ldap_connect_timeout,
        receive_timeout=env.ldap_receive_timeout,
    )


class CredentialValidator:
    """Callable ``(username, password) -> bool`` bound to one directory config."""

    def __init__(self, cfg: ADConfig) -> None:
        self.cfg = cfg
        self.client = ADClient(cfg)

    def validate(self, username: str, password: str) -> bool:
        return self.client.verify_credentials(username, password)

    __call__ = validate

    def probe(self) -> bool:
        return self.client.probe()


def get_validator() -> CredentialValidator:
    return CredentialValidator(ad_cfg_from_env())


def load_validator() -> CredentialValidator | None:
    """Like :func:`get_validator`, but a broken configuration yields None."""
    try:
        return get_validator()
    except (ValidationError, LDAPException, ValueError) as e:
        log.error("Directory validator is not configured: %s", type(e).__name__)
        return None


def validate(username: str, password: str) -> bool:
    """Validate *username*/*password* using the environment configuration."""
    validator = load_validator()
    if validator is None:
        return False
    return validator.validate(username, password)
