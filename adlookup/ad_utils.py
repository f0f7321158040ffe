from __future__ import annotations

import ipaddress

from .exceptions import NameFormatError
from .utils.dn import split_dn


def domain_to_base_dn(domain: str) -> str:
    domain = (domain or "").strip().strip(".")
    if not domain:
        return ""
    parts = [p.strip() for p in domain.split(".") if p.strip()]
    return ",".join([f"DC={p}" for p in parts])


def dn_to_domain(dn: str) -> str:
    """DC=example,DC=com -> example.com (other components are skipped)."""
    labels: list[str] = []
    for rdn in split_dn(dn):
        key, sep, val = rdn.partition("=")
        if sep and key.strip().lower() == "dc" and val.strip():
            labels.append(val.strip())
    return ".".join(labels)


def canonical_to_dn(name: str) -> str:
    """Convert a canonical name into a distinguished name.

    ``corp.example.com/Staff/Sales`` -> ``OU=Sales,OU=Staff,DC=corp,DC=example,DC=com``

    A single trailing slash is tolerated; a name without OU segments
    resolves to the domain root.
    """
    s = (name or "").strip()
    if s.endswith("/"):
        s = s[:-1]

    segments = s.split("/")
    domain, ous = segments[0].strip(), segments[1:]

    labels = domain.split(".")
    if not domain or any(not p.strip() for p in labels):
        raise NameFormatError(f"Malformed domain in canonical name: {name!r}")
    if any(not ou.strip() for ou in ous):
        raise NameFormatError(f"Empty container in canonical name: {name!r}")

    dc = "DC=" + ",DC=".join(p.strip() for p in labels)
    if not ous:
        return dc
    ou = "OU=" + ",OU=".join(o.strip() for o in reversed(ous))
    return f"{ou},{dc}"


def build_dc_fqdn(dc_short: str, domain: str) -> str:
    dc_short = (dc_short or "").strip()
    domain = (domain or "").strip().strip(".")
    if not dc_short:
        return domain

    try:
        ipaddress.ip_address(dc_short)
        return dc_short
    except ValueError:
        if "." in dc_short:
            return dc_short
        return f"{dc_short}.{domain}" if domain else dc_short
