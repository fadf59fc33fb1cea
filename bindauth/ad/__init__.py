"""Active Directory (LDAP) bind client package.

Public API:
    - ADConfig
    - ADClient
"""

from .models import ADConfig
from .client import ADClient

__all__ = ["ADConfig", "ADClient"]
