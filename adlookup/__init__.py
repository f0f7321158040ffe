"""Look up Active Directory objects by DN, canonical name or search term."""

from .ad_utils import canonical_to_dn, domain_to_base_dn
from .exceptions import (
    ADLookupError,
    CredentialError,
    DirectorySearchError,
    IdentityFormatError,
    NameFormatError,
    QueryFormatError,
    RootFormatError,
)
from .services.lookup import lookup

__version__ = "0.1.0"

__all__ = [
    "ADLookupError",
    "CredentialError",
    "DirectorySearchError",
    "IdentityFormatError",
    "NameFormatError",
    "QueryFormatError",
    "RootFormatError",
    "canonical_to_dn",
    "domain_to_base_dn",
    "lookup",
]
