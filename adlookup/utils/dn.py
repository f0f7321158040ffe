from __future__ import annotations


def split_dn(dn: str) -> list[str]:
    """Split a DN into its RDN strings, keeping escaped commas inside values.

    ``CN=Doe\\, John,OU=Staff,DC=example,DC=com`` ->
    ``["CN=Doe\\, John", "OU=Staff", "DC=example", "DC=com"]``
    """
    s = (dn or "").strip()
    if not s:
        return []

    parts: list[str] = []
    cur: list[str] = []
    esc = False
    for ch in s:
        if esc:
            cur.append(ch)
            esc = False
            continue
        if ch == "\\":
            cur.append(ch)
            esc = True
            continue
        if ch == ",":
            parts.append("".join(cur).strip())
            cur = []
            continue
        cur.append(ch)
    parts.append("".join(cur).strip())
    return parts


def _unescape(val: str) -> str:
    # Unescape common DN escapes
    return val.replace("\\,", ",").replace("\\+", "+").replace("\\=", "=").replace('\\"', '"').replace("\\\\", "\\")


def dn_first_component_value(dn: str) -> str:
    """Return first RDN value from a DN (e.g. CN=USB-Deny,OU=... -> USB-Deny)."""
    parts = split_dn(dn)
    if not parts:
        return ""
    rdn = parts[0]

    if "=" in rdn:
        _, val = rdn.split("=", 1)
        val = val.strip()
    else:
        val = rdn
    return _unescape(val).strip()


def dn_parent(dn: str) -> str:
    """DN with its leading RDN removed ("" for a single-component DN)."""
    parts = split_dn(dn)
    if len(parts) < 2:
        return ""
    return ",".join(parts[1:])
