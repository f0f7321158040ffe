"""Search path and filter construction.

Identities and search roots arrive in whatever notation the caller had at
hand: a distinguished name, a canonical name (``corp.example.com/Staff``) or a
dotted domain (``corp.example.com``). Everything here is pure string work; no
directory access happens in this module.
"""
from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..ad_utils import canonical_to_dn, domain_to_base_dn
from ..exceptions import IdentityFormatError, NameFormatError, RootFormatError
from ..utils.dn import dn_first_component_value, dn_parent
from .models import DirectoryQuery, ObjectType, SearchScope, ensure_credential
from .utils import escape_ldap_filter_value, normalize_properties

logger = logging.getLogger(__name__)

LDAP_SCHEME = "LDAP://"
DEFAULT_PAGE_SIZE = 200


def resolve_identity(identity: str, search_root: Optional[str] = None) -> tuple[str, Optional[str]]:
    """Return (search term, search root).

    A DN identity (anything containing `=`) overrides the supplied root: the
    term is its leading RDN value and the root is its parent container.
    """
    ident = (identity or "").strip()
    if not ident:
        raise IdentityFormatError("Identity must not be empty")

    if "=" not in ident:
        return ident, search_root

    term = dn_first_component_value(ident)
    root = dn_parent(ident)
    if not term or not root:
        raise IdentityFormatError(f"Distinguished name has no parent container: {ident!r}")
    if search_root:
        logger.debug("Search root %r ignored for DN identity %r", search_root, ident)
    return term, root


def resolve_search_root(root: Optional[str]) -> str:
    """Turn a canonical name, dotted domain or DN into a DN."""
    r = (root or "").strip()
    if "=" in r:
        # Canonical and dotted forms never contain `=`; dots inside DN values are data.
        if "dc=" in r.lower():
            return r
        raise RootFormatError(f"Unrecognized search root format: {root!r}")
    if "." in r and "/" in r:
        return canonical_to_dn(r)
    if "." in r:
        dn = domain_to_base_dn(r)
        if not dn:
            raise NameFormatError(f"Malformed domain name: {r!r}")
        return dn
    raise RootFormatError(f"Unrecognized search root format: {root!r}")


def build_ldap_path(dn: str, server: str = "") -> str:
    if server:
        return f"{LDAP_SCHEME}{server}/{dn}"
    return f"{LDAP_SCHEME}{dn}"


def parse_ldap_path(path: str) -> tuple[str, str]:
    """LDAP://[server/]DN -> (server, DN). Server is "" for serverless paths."""
    p = (path or "").strip()
    if p[: len(LDAP_SCHEME)].upper() == LDAP_SCHEME:
        p = p[len(LDAP_SCHEME):]
    server, sep, rest = p.partition("/")
    if sep and "=" not in server:
        return server, rest
    return "", p


def build_default_filter(term: str, object_type: ObjectType | str = ObjectType.USER) -> str:
    otype = ObjectType.parse(object_type)
    t = escape_ldap_filter_value(term, keep_wildcards=True)
    return (
        f"(&(objectClass={otype.value})"
        f"(|"
        f"(samaccountname={t})"
        f"(givenName={t})"
        f"(sn={t})"
        f"(displayName={t})"
        f"(proxyaddresses=*{t})"
        f"(name={t})"
        f"))"
    )


class QueryBuilder:
    def __init__(self, page_size: int = DEFAULT_PAGE_SIZE, default_root: str = "") -> None:
        self.page_size = page_size
        self.default_root = default_root

    def build(
        self,
        identity: str,
        search_root: Optional[str] = None,
        credential: Any = None,
        type: ObjectType | str = ObjectType.USER,
        filter: Optional[str] = None,
        scope: SearchScope | str = SearchScope.SUBTREE,
        properties: str | Iterable[str] | None = "distinguishedName",
    ) -> DirectoryQuery:
        term, root = resolve_identity(identity, search_root)
        if not root:
            root = self.default_root or None
        base_dn = resolve_search_root(root)
        path = build_ldap_path(base_dn)

        ensure_credential(credential)

        flt = filter if filter else build_default_filter(term, type)

        return DirectoryQuery(
            path=path,
            search_term=term,
            base_dn=base_dn,
            filter=flt,
            scope=SearchScope.parse(scope),
            page_size=self.page_size,
            attributes=normalize_properties(properties),
        )
