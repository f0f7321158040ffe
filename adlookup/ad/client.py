from __future__ import annotations

import hashlib
import logging
import os
import ssl
from typing import Any, List, Sequence

from ldap3 import Server, Connection, SUBTREE, LEVEL, Tls
from ldap3.core.exceptions import LDAPException

from ..ad_utils import dn_to_domain
from ..exceptions import DirectorySearchError
from .models import ADConfig, Credential, SearchEntry, SearchScope
from .query import parse_ldap_path

logger = logging.getLogger(__name__)

_SCOPES = {
    SearchScope.ONE_LEVEL: LEVEL,
    SearchScope.SUBTREE: SUBTREE,
}

# success, sizeLimitExceeded
_OK_RESULTS = (0, 4)


class ADClient:
    """Directory searcher backed by ldap3."""

    @staticmethod
    def _normalize_pem(pem: str) -> str:
        data = (pem or "").strip()
        # Normalize Windows newlines to \n to avoid hash mismatches.
        return data.replace("\r\n", "\n").replace("\r", "\n")

    @staticmethod
    def _ensure_ca_file(pem: str) -> str:
        """Materialize CA PEM into a stable file path (ldap3.Tls wants ca_certs_file)."""
        data = ADClient._normalize_pem(pem)
        if not data:
            return ""
        if "-----BEGIN CERTIFICATE-----" not in data or "-----END CERTIFICATE-----" not in data:
            raise ValueError("CA PEM does not look like a certificate (BEGIN/END CERTIFICATE block expected)")

        h = hashlib.sha256(data.encode("utf-8")).hexdigest()[:16]
        path = f"/tmp/adlookup_ca_{h}.pem"
        if os.path.exists(path):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    if f.read().strip() == data:
                        return path
            except OSError:
                pass
        try:
            with open(path, "w", encoding="utf-8") as f:
                f.write(data + "\n")
            os.chmod(path, 0o600)
        except OSError:
            logger.warning("Could not write CA file %s, falling back to system trust store", path)
            return ""
        return path

    def __init__(self, cfg: ADConfig) -> None:
        self.cfg = cfg

        tls_kwargs: dict[str, Any] = {
            "validate": ssl.CERT_REQUIRED if cfg.tls_validate else ssl.CERT_NONE,
        }
        # Apply custom CA only when verification is enabled.
        if cfg.tls_validate and cfg.ca_pem:
            ca_file = self._ensure_ca_file(cfg.ca_pem)
            if ca_file:
                tls_kwargs["ca_certs_file"] = ca_file
        self.tls = Tls(**tls_kwargs)

    def _server(self, host: str) -> Server:
        return Server(
            host=host,
            port=self.cfg.port,
            use_ssl=self.cfg.use_ssl,
            tls=self.tls,
            connect_timeout=self.cfg.connect_timeout,
        )

    def _host_for(self, server: str, base_dn: str) -> str:
        # Explicit server in the path wins, then configuration, then the DN's domain.
        return server or self.cfg.host or dn_to_domain(base_dn)

    def _connection(self, host: str, user: str, password: str) -> Connection:
        return Connection(self._server(host), user=user, password=password, auto_bind=False)

    def search(
        self,
        path: str,
        filter: str,
        scope: SearchScope,
        page_size: int,
        attributes: Sequence[str],
        credential: Credential,
    ) -> List[SearchEntry]:
        server, base_dn = parse_ldap_path(path)
        host = self._host_for(server, base_dn)
        if not host:
            raise DirectorySearchError("No directory server could be determined", path=path, filter=filter)

        conn: Connection | None = None
        try:
            conn = self._connection(host, credential.username, credential.password)
            conn.open()
            if self.cfg.starttls:
                conn.start_tls()
            if not conn.bind():
                res = dict(conn.result or {})
                raise DirectorySearchError(
                    f"Bind failed: {res.get('description', 'unknown error')}",
                    path=path,
                    filter=filter,
                    code=res.get("result"),
                    message=res.get("message", ""),
                )

            responses = conn.extend.standard.paged_search(
                search_base=base_dn,
                search_filter=filter,
                search_scope=_SCOPES[SearchScope.parse(scope)],
                attributes=list(attributes),
                paged_size=page_size,
                generator=False,
            )
            res = dict(conn.result or {})
            if res.get("result", 0) not in _OK_RESULTS:
                raise DirectorySearchError(
                    f"Search failed: {res.get('description', 'unknown error')}",
                    path=path,
                    filter=filter,
                    code=res.get("result"),
                    message=res.get("message", ""),
                )

            entries: list[SearchEntry] = []
            for r in responses or []:
                if r.get("type") != "searchResEntry":
                    continue
                attrs = {
                    name: (list(val) if isinstance(val, (list, tuple)) else [val])
                    for name, val in (r.get("attributes") or {}).items()
                }
                entries.append(SearchEntry(dn=str(r.get("dn", "")), attributes=attrs))

            logger.debug("Search %s %s -> %d entries", base_dn, filter, len(entries))
            return entries

        except LDAPException as e:
            res = dict(conn.result or {}) if conn else {}
            raise DirectorySearchError(
                f"LDAP error: {e}",
                path=path,
                filter=filter,
                code=getattr(e, "result", None) or res.get("result"),
                message=getattr(e, "message", None) or res.get("message", ""),
                cause=e,
            ) from e
        finally:
            if conn:
                try:
                    conn.unbind()
                except LDAPException:
                    pass
