"""Credential validation by LDAP simple bind.

Usage::

    from bindauth import validate

    if validate(username, password):
        ...
"""

from .ad import ADClient, ADConfig
from .validator import CredentialValidator, validate

__all__ = ["ADClient", "ADConfig", "CredentialValidator", "validate"]
