from __future__ import annotations

from typing import Any, Iterable, Mapping, Optional


def escape_ldap_filter_value(value: str, keep_wildcards: bool = False) -> str:
    """RFC 4515 escaping for LDAP filter values.

    With keep_wildcards=True a caller-supplied `*` is left as a substring
    wildcard.
    """
    out: list[str] = []
    for ch in value:
        if ch == "\\":
            out.append("\\5c")
        elif ch == "*":
            out.append("*" if keep_wildcards else "\\2a")
        elif ch == "(":
            out.append("\\28")
        elif ch == ")":
            out.append("\\29")
        elif ch == "\x00":
            out.append("\\00")
        else:
            out.append(ch)
    return "".join(out)


def normalize_properties(value: str | Iterable[str] | None) -> list[str]:
    """"cn, mail" or ["cn", "mail"] -> ["cn", "mail"]."""
    if value is None:
        items: list[str] = []
    elif isinstance(value, str):
        items = value.split(",")
    else:
        items = [str(x) for x in value]
    props = [x.strip() for x in items if x and x.strip()]
    return props or ["distinguishedName"]


def flatten_attributes(attrs: Mapping[str, Any]) -> dict[str, Any]:
    """Unwrap single-valued attribute collections; keep multi-valued ones as lists."""
    flat: dict[str, Any] = {}
    for name, raw in (attrs or {}).items():
        if isinstance(raw, (list, tuple)):
            values = list(raw)
        else:
            values = [raw]
        if not values:
            flat[name] = None
        elif len(values) == 1:
            flat[name] = values[0]
        else:
            flat[name] = values
    return flat


def project_record(flat: Mapping[str, Any], attributes: Iterable[str], dn: Optional[str] = None) -> dict[str, Any]:
    """Keep only the requested attributes, in request order.

    Attribute names are matched case-insensitively; the key uses the
    caller's spelling.
    """
    by_lower = {k.lower(): v for k, v in flat.items()}
    record: dict[str, Any] = {}
    for name in attributes:
        val = by_lower.get(name.lower())
        if val is None and dn and name.lower() == "distinguishedname":
            val = dn
        record[name] = val
    return record
