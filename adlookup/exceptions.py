from __future__ import annotations

from typing import Optional

from .utils.strings import win32_code_from_message


class ADLookupError(Exception):
    """Base class for lookup errors.

    `status_code` and `default_code` are used by the HTTP layer to build the
    error response.
    """

    status_code = 500
    default_code = "lookup_error"
    default_detail = "Lookup failed"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail or self.default_detail
        super().__init__(self.detail)

    def to_dict(self) -> dict:
        return {"code": self.default_code, "detail": self.detail}


class NameFormatError(ADLookupError):
    status_code = 400
    default_code = "name_format"
    default_detail = "Malformed directory name"


class RootFormatError(ADLookupError):
    status_code = 400
    default_code = "root_format"
    default_detail = "Unrecognized search root format"


class IdentityFormatError(ADLookupError):
    status_code = 400
    default_code = "identity_format"
    default_detail = "Malformed identity"


class QueryFormatError(ADLookupError):
    status_code = 400
    default_code = "query_format"
    default_detail = "Unknown object type or search scope"


class CredentialError(ADLookupError):
    status_code = 400
    default_code = "credential"
    default_detail = "A username and password pair is required"


class DirectorySearchError(ADLookupError):
    status_code = 502
    default_code = "directory_search"
    default_detail = "Directory search failed"

    def __init__(
        self,
        detail: str | None = None,
        *,
        path: str = "",
        filter: str = "",
        code: Optional[int] = None,
        message: str = "",
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(detail)
        self.path = path
        self.filter = filter
        self.code = code
        self.message = message or ""
        self.cause = cause

    @property
    def win32_code(self) -> str | None:
        return win32_code_from_message(self.message)

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["path"] = self.path
        if self.code is not None:
            d["ldap_code"] = self.code
        if self.win32_code:
            d["win32_code"] = self.win32_code
        return d
