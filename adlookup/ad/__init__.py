"""Active Directory (LDAP) query building and search.

Public API:
    - ADConfig, Credential, ObjectType, SearchScope
    - QueryBuilder, DirectoryQuery
    - ADClient
"""

from .models import (
    ADConfig,
    Credential,
    DirectoryQuery,
    DirectorySearcher,
    ObjectType,
    SearchEntry,
    SearchScope,
    ensure_credential,
)
from .query import QueryBuilder
from .client import ADClient

__all__ = [
    "ADConfig",
    "ADClient",
    "Credential",
    "DirectoryQuery",
    "DirectorySearcher",
    "ObjectType",
    "QueryBuilder",
    "SearchEntry",
    "SearchScope",
    "ensure_credential",
]
