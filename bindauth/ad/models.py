from __future__ import annotations

from dataclasses import dataclass

from ..ad_utils import build_principal, normalize_domain


@dataclass
class ADConfig:
    host: str
    domain: str
    port: int = 389
    use_ssl: bool = False
    starttls: bool = False
    tls_validate: bool = True
    ca_cert_file: str = ""
    connect_timeout: float = 5.0
    receive_timeout: float = 10.0

    @property
    def domain_suffix(self) -> str:
        return normalize_domain(self.domain)

    @property
    def endpoint(self) -> str:
        scheme = "ldaps" if self.use_ssl else "ldap"
        return f"{scheme}://{self.host}:{self.port}"

    def principal_for(self, username: str | None) -> str:
        return build_principal(username, self.domain_suffix)
