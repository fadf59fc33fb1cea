from functools import lru_cache

from pydantic_settings import BaseSettings
from pydantic import Field, field_validator

from .ad_utils import normalize_domain


class EnvSettings(BaseSettings):
    # Directory
    ldap_host: str = Field(..., alias="LDAP_HOST")
    ldap_port: int = Field(389, alias="LDAP_PORT")
    ldap_domain_suffix: str = Field(..., alias="LDAP_DOMAIN_SUFFIX")
    ldap_use_ssl: bool = Field(False, alias="LDAP_USE_SSL")
    ldap_starttls: bool = Field(False, alias="LDAP_STARTTLS")
    ldap_tls_validate: bool = Field(True, alias="LDAP_TLS_VALIDATE")
    ldap_ca_cert_file: str = Field("", alias="LDAP_CA_CERT_FILE")
    ldap_connect_timeout: float = Field(5.0, alias="LDAP_CONNECT_TIMEOUT")
    ldap_receive_timeout: float = Field(10.0, alias="LDAP_RECEIVE_TIMEOUT")

    # Logging
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    log_dir: str = Field("", alias="LOG_DIR")
    log_retention_days: int = Field(30, alias="LOG_RETENTION_DAYS")

    class Config:
        populate_by_name = True
        env_file = ".env"
        extra = "ignore"

    @field_validator("ldap_host")
    @classmethod
    def _host_not_blank(cls, v: str) -> str:
        v = (v or "").strip()
        if not v:
            raise ValueError("LDAP_HOST must not be empty")
        return v

    @field_validator("ldap_port")
    @classmethod
    def _port_range(cls, v: int) -> int:
        if not 1 <= v <= 65535:
            raise ValueError("LDAP_PORT must be in 1..65535")
        return v

    @field_validator("ldap_domain_suffix")
    @classmethod
    def _domain_suffix(cls, v: str) -> str:
        d = normalize_domain(v)
        if not d:
            raise ValueError("LDAP_DOMAIN_SUFFIX must not be empty")
        return d

    @field_validator("ldap_connect_timeout", "ldap_receive_timeout")
    @classmethod
    def _positive_timeout(cls, v: float) -> float:
        if v <= 0:
            raise ValueError("timeouts must be positive")
        return v


@lru_cache(maxsize=1)
def get_env() -> EnvSettings:
    return EnvSettings()
