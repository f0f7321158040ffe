import pytest

from adlookup.ad_utils import build_dc_fqdn, canonical_to_dn, dn_to_domain, domain_to_base_dn
from adlookup.exceptions import NameFormatError


@pytest.mark.parametrize(
    "name, expected",
    (
        ("a.b/x/y", "OU=y,OU=x,DC=a,DC=b"),
        ("corp.example.com/Staff", "OU=Staff,DC=corp,DC=example,DC=com"),
        ("corp.example.com/Staff/Sales/EMEA", "OU=EMEA,OU=Sales,OU=Staff,DC=corp,DC=example,DC=com"),
        ("a.b/", "DC=a,DC=b"),
        ("a.b", "DC=a,DC=b"),
    ),
)
def test_canonical_to_dn(name, expected):
    assert canonical_to_dn(name) == expected


@pytest.mark.parametrize("name", ("/x/y", "a..b/x", "a.b//x", ".a/x"))
def test_canonical_to_dn_raises(name):
    with pytest.raises(NameFormatError):
        canonical_to_dn(name)


@pytest.mark.parametrize(
    "domain, expected",
    (
        ("corp.example.com", "DC=corp,DC=example,DC=com"),
        (".example.com.", "DC=example,DC=com"),
        ("", ""),
    ),
)
def test_domain_to_base_dn(domain, expected):
    assert domain_to_base_dn(domain) == expected


def test_dn_to_domain():
    assert dn_to_domain("OU=Staff,DC=corp,dc=example,DC=com") == "corp.example.com"
    assert dn_to_domain("CN=x,OU=y") == ""


@pytest.mark.parametrize(
    "dc_short, domain, expected",
    (
        ("dc01", "corp.example.com", "dc01.corp.example.com"),
        ("dc01.other.org", "corp.example.com", "dc01.other.org"),
        ("10.0.0.5", "corp.example.com", "10.0.0.5"),
        ("", "corp.example.com", "corp.example.com"),
    ),
)
def test_build_dc_fqdn(dc_short, domain, expected):
    assert build_dc_fqdn(dc_short, domain) == expected
