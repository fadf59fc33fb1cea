from __future__ import annotations

import logging
import ssl
from contextlib import contextmanager
from typing import Any, Iterator

from ldap3 import Server, Connection, Tls, NONE, SIMPLE
from ldap3.core.exceptions import LDAPException

from ..utils.tcp_probe import tcp_probe
from .models import ADConfig

log = logging.getLogger(__name__)


class ADClient:
    """Bind-only directory client.

    Every call gets its own ``Server`` and ``Connection``; nothing is pooled
    or shared between calls.
    """

    def __init__(self, cfg: ADConfig) -> None:
        self.cfg = cfg

        tls_kwargs: dict[str, Any] = {
            "validate": ssl.CERT_REQUIRED if cfg.tls_validate else ssl.CERT_NONE,
        }
        # Custom CA only matters when the certificate is verified.
        if cfg.tls_validate and cfg.ca_cert_file:
            tls_kwargs["ca_certs_file"] = cfg.ca_cert_file
        self.tls = Tls(**tls_kwargs)

    def _server(self) -> Server:
        return Server(
            host=self.cfg.host,
            port=self.cfg.port,
            use_ssl=self.cfg.use_ssl,
            get_info=NONE,
            tls=self.tls,
            connect_timeout=float(self.cfg.connect_timeout),
        )

    @staticmethod
    def _release(conn: Connection) -> None:
        try:
            conn.unbind()
        except Exception:
            # Never let a failed unbind change the outcome of the call.
            log.debug("LDAP unbind failed", exc_info=True)

    @contextmanager
    def session(self, user: str, password: str) -> Iterator[Connection]:
        """Open one connection for *user* and release it on every exit path.

        The connection is opened (plus StartTLS when configured) but not bound;
        binding is left to the caller.
        """
        conn = Connection(
            self._server(),
            user=user,
            password=password,
            authentication=SIMPLE,
            auto_bind=False,
            receive_timeout=float(self.cfg.receive_timeout),
        )
        try:
            conn.open()
            if self.cfg.starttls:
                conn.start_tls()
            yield conn
        finally:
            self._release(conn)

    def verify_credentials(self, username: str, password: str) -> bool:
        """Simple bind as ``username@domain`` with *password*.

        Returns True only when the server reports success. Rejections,
        LDAP errors and unexpected failures all come back as False.
        """
        endpoint = self.cfg.endpoint
        try:
            principal = self.cfg.principal_for(username)
            with self.session(principal, password) as conn:
                # A name with an empty password is an unauthenticated bind,
                # which servers answer with success.
                if not password:
                    log.info("Bind refused locally for %s: empty password", endpoint)
                    return False

                ok = bool(conn.bind())
                if ok:
                    log.info("Bind accepted by %s", endpoint)
                else:
                    res = conn.result or {}
                    log.info("Bind rejected by %s: %s", endpoint, res.get("description") or "unknown")
                return ok
        except LDAPException as e:
            log.warning("LDAP error during bind against %s: %s", endpoint, type(e).__name__)
            return False
        except Exception as e:
            log.error("Unexpected error during bind against %s: %s", endpoint, type(e).__name__, exc_info=True)
            return False

    def probe(self, timeout_s: float | None = None) -> bool:
        """TCP reachability of the directory endpoint."""
        t = self.cfg.connect_timeout if timeout_s is None else timeout_s
        return tcp_probe(self.cfg.host, self.cfg.port, t)
