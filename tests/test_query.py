import pytest

from adlookup.ad.models import Credential, ObjectType, SearchScope
from adlookup.ad.query import (
    QueryBuilder,
    build_default_filter,
    build_ldap_path,
    parse_ldap_path,
    resolve_identity,
    resolve_search_root,
)
from adlookup.exceptions import (
    ADLookupError,
    CredentialError,
    IdentityFormatError,
    QueryFormatError,
    RootFormatError,
)


def test_resolve_identity_dn_overrides_root():
    term, root = resolve_identity("cn=foo,ou=bar,dc=a,dc=b", "other.example.com")
    assert term == "foo"
    assert root == "ou=bar,dc=a,dc=b"


def test_resolve_identity_search_term():
    assert resolve_identity("j*", "corp.example.com") == ("j*", "corp.example.com")


@pytest.mark.parametrize("identity", ("", "   ", "cn=foo"))
def test_resolve_identity_raises(identity):
    with pytest.raises(IdentityFormatError):
        resolve_identity(identity)


@pytest.mark.parametrize(
    "root, expected",
    (
        ("corp.example.com/Staff/Sales", "OU=Sales,OU=Staff,DC=corp,DC=example,DC=com"),
        ("corp.example.com", "DC=corp,DC=example,DC=com"),
        ("OU=Staff,DC=corp,DC=example,DC=com", "OU=Staff,DC=corp,DC=example,DC=com"),
        ("ou=bar,dc=a,dc=b", "ou=bar,dc=a,dc=b"),
        ("OU=St. Louis,DC=corp,DC=com", "OU=St. Louis,DC=corp,DC=com"),
    ),
)
def test_resolve_search_root(root, expected):
    assert resolve_search_root(root) == expected


@pytest.mark.parametrize("root", ("Staff", "OU=Staff", "OU=St. Louis", "CN=x,OU=a.b/c", "", None))
def test_resolve_search_root_raises(root):
    with pytest.raises(RootFormatError):
        resolve_search_root(root)


def test_ldap_path_round_trip():
    assert build_ldap_path("DC=a,DC=b") == "LDAP://DC=a,DC=b"
    assert parse_ldap_path("LDAP://DC=a,DC=b") == ("", "DC=a,DC=b")
    assert parse_ldap_path("LDAP://dc01.a.b/OU=x,DC=a,DC=b") == ("dc01.a.b", "OU=x,DC=a,DC=b")
    assert parse_ldap_path("ldap://OU=a/b,DC=x") == ("", "OU=a/b,DC=x")


def test_build_default_filter():
    assert build_default_filter("jdoe") == (
        "(&(objectClass=User)(|(samaccountname=jdoe)(givenName=jdoe)(sn=jdoe)"
        "(displayName=jdoe)(proxyaddresses=*jdoe)(name=jdoe)))"
    )


def test_build_default_filter_keeps_wildcards_and_escapes():
    flt = build_default_filter("j*(x)", "Group")
    assert flt.startswith("(&(objectClass=Group)(|")
    assert "(samaccountname=j*\\28x\\29)" in flt
    assert "(proxyaddresses=*j*\\28x\\29)" in flt


@pytest.mark.parametrize("otype", list(ObjectType))
def test_build_default_filter_object_class(otype):
    assert build_default_filter("x", otype).startswith(f"(&(objectClass={otype.value})")


def test_builder_build(f_credential):
    q = QueryBuilder().build(
        "jdoe",
        search_root="corp.example.com/Staff",
        credential=f_credential,
        type="Contact",
        scope="OneLevel",
        properties="cn, mail",
    )
    assert q.path == "LDAP://OU=Staff,DC=corp,DC=example,DC=com"
    assert q.base_dn == "OU=Staff,DC=corp,DC=example,DC=com"
    assert q.search_term == "jdoe"
    assert q.filter.startswith("(&(objectClass=Contact)")
    assert q.scope is SearchScope.ONE_LEVEL
    assert q.page_size == 200
    assert q.attributes == ["cn", "mail"]


@pytest.mark.parametrize("otype", list(ObjectType))
def test_builder_explicit_filter_wins(f_credential, otype):
    q = QueryBuilder().build(
        "jdoe", "corp.example.com", f_credential, type=otype, filter="(mail=jdoe@example.com)"
    )
    assert q.filter == "(mail=jdoe@example.com)"


def test_builder_default_root(f_credential):
    q = QueryBuilder(page_size=50, default_root="corp.example.com").build("jdoe", credential=f_credential)
    assert q.base_dn == "DC=corp,DC=example,DC=com"
    assert q.page_size == 50


def test_builder_root_checked_before_credential():
    with pytest.raises(RootFormatError):
        QueryBuilder().build("jdoe", "Staff", credential=None)


@pytest.mark.parametrize(
    "credential",
    (
        None,
        "svc_lookup:Passw0rd!",
        ("svc_lookup",),
        {"username": "svc_lookup"},
        Credential("", "x"),
        Credential("svc_lookup", ""),
    ),
)
def test_builder_credential_errors(credential):
    with pytest.raises(CredentialError):
        QueryBuilder().build("jdoe", "corp.example.com", credential)


@pytest.mark.parametrize(
    "credential",
    (
        ("svc_lookup", "Passw0rd!"),
        ["svc_lookup", "Passw0rd!"],
        {"username": "svc_lookup", "password": "Passw0rd!"},
    ),
)
def test_builder_credential_shapes(credential):
    q = QueryBuilder().build("jdoe", "corp.example.com", credential)
    assert q.base_dn == "DC=corp,DC=example,DC=com"


def test_unknown_type_and_scope(f_credential):
    with pytest.raises(QueryFormatError):
        QueryBuilder().build("jdoe", "corp.example.com", f_credential, type="Computer")
    with pytest.raises(QueryFormatError):
        QueryBuilder().build("jdoe", "corp.example.com", f_credential, scope="Base")


def test_dn_identity_with_dotted_parent(f_credential):
    q = QueryBuilder().build("CN=Jane Doe,OU=St. Louis,DC=corp,DC=com", credential=f_credential)
    assert q.base_dn == "OU=St. Louis,DC=corp,DC=com"
    assert q.path == "LDAP://OU=St. Louis,DC=corp,DC=com"


@pytest.mark.parametrize("kwargs", ({"type": "Computer"}, {"scope": "Base"}))
def test_unknown_type_and_scope_are_lookup_errors(f_credential, kwargs):
    with pytest.raises(ADLookupError) as exc_info:
        QueryBuilder().build("jdoe", "corp.example.com", f_credential, **kwargs)
    assert exc_info.value.status_code == 400
