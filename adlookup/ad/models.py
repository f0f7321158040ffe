from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Mapping, Protocol, Sequence, TYPE_CHECKING

from ..ad_utils import domain_to_base_dn, build_dc_fqdn
from ..exceptions import CredentialError, QueryFormatError

if TYPE_CHECKING:
    from ..env_settings import EnvSettings


class ObjectType(str, Enum):
    USER = "User"
    CONTACT = "Contact"
    GROUP = "Group"
    ORGANIZATIONAL_UNIT = "OrganizationalUnit"

    @classmethod
    def parse(cls, value: "ObjectType | str | None") -> "ObjectType":
        if isinstance(value, cls):
            return value
        v = (value or "").strip().lower()
        if not v:
            return cls.USER
        for member in cls:
            if member.value.lower() == v:
                return member
        raise QueryFormatError(f"Unknown object type: {value!r}")


class SearchScope(str, Enum):
    ONE_LEVEL = "OneLevel"
    SUBTREE = "Subtree"

    @classmethod
    def parse(cls, value: "SearchScope | str | None") -> "SearchScope":
        if isinstance(value, cls):
            return value
        v = (value or "").strip().lower()
        if not v:
            return cls.SUBTREE
        for member in cls:
            if member.value.lower() == v:
                return member
        raise QueryFormatError(f"Unknown search scope: {value!r}")


@dataclass(frozen=True)
class Credential:
    username: str
    password: str = field(repr=False)


def ensure_credential(value: Any) -> Credential:
    """Accept a Credential, a (username, password) pair or a mapping with those keys."""
    if isinstance(value, Credential):
        cred = value
    elif isinstance(value, Mapping):
        user, pwd = value.get("username"), value.get("password")
        if not isinstance(user, str) or not isinstance(pwd, str):
            raise CredentialError()
        cred = Credential(user, pwd)
    elif isinstance(value, (tuple, list)) and len(value) == 2 and all(isinstance(x, str) for x in value):
        cred = Credential(value[0], value[1])
    else:
        raise CredentialError()

    if not cred.username.strip() or not cred.password:
        raise CredentialError("Username and password must not be empty")
    return cred


@dataclass
class ADConfig:
    dc_short: str = ""
    domain: str = ""
    port: int = 636
    use_ssl: bool = True
    starttls: bool = False
    tls_validate: bool = False
    ca_pem: str = ""
    connect_timeout: float = 5.0

    @property
    def host(self) -> str:
        return build_dc_fqdn(self.dc_short, self.domain)

    @property
    def base_dn(self) -> str:
        return domain_to_base_dn(self.domain)

    @classmethod
    def from_env(cls, env: "EnvSettings") -> "ADConfig":
        return cls(
            dc_short=env.dc_host,
            domain=env.domain,
            port=env.port,
            use_ssl=env.use_ssl,
            starttls=env.starttls,
            tls_validate=env.tls_validate,
            ca_pem=env.ca_pem,
            connect_timeout=env.connect_timeout,
        )


@dataclass(frozen=True)
class DirectoryQuery:
    path: str
    search_term: str
    base_dn: str
    filter: str
    scope: SearchScope
    page_size: int
    attributes: List[str]


@dataclass
class SearchEntry:
    dn: str
    attributes: dict[str, list] = field(default_factory=dict)


class DirectorySearcher(Protocol):
    def search(
        self,
        path: str,
        filter: str,
        scope: SearchScope,
        page_size: int,
        attributes: Sequence[str],
        credential: Credential,
    ) -> List[SearchEntry]:
        ...

