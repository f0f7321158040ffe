from __future__ import annotations

import string

_HEX = set(string.hexdigits)


def left(s: str, n: int) -> str:
    if n <= 0:
        return ""
    return (s or "")[:n]


def right(s: str, n: int) -> str:
    if n <= 0:
        return ""
    return (s or "")[-n:]


def win32_code_from_message(message: str | None) -> str | None:
    """Extract the Win32 error code from an AD diagnostic message.

    AD prefixes diagnostics with an HRESULT, e.g.
    ``80090308: LdapErr: DSID-0C09042F, comment: AcceptSecurityContext error``.
    The low word of the HRESULT is the Win32 code (``0308``).
    """
    head = left((message or "").strip(), 8)
    if len(head) != 8 or not all(ch in _HEX for ch in head):
        return None
    return right(head, 4).upper()
