import pytest

from adlookup.ad.models import Credential, SearchEntry
from adlookup.exceptions import DirectorySearchError


class FakeSearcher:
    """In-memory DirectorySearcher; records every call."""

    def __init__(self, entries=None, error=None):
        self.entries = entries or []
        self.error = error
        self.calls = []

    def search(self, path, filter, scope, page_size, attributes, credential):
        self.calls.append(
            {
                "path": path,
                "filter": filter,
                "scope": scope,
                "page_size": page_size,
                "attributes": list(attributes),
                "credential": credential,
            }
        )
        if self.error:
            raise self.error
        return list(self.entries)


class RecordingEventLogger:
    def __init__(self):
        self.events = []

    def log(self, description, context, error, severity, category):
        self.events.append((description, dict(context), error, severity, category))


@pytest.fixture
def f_credential() -> Credential:
    return Credential("svc_lookup", "Passw0rd!")


@pytest.fixture
def f_entry() -> SearchEntry:
    return SearchEntry(
        dn="CN=Jane Doe,OU=Staff,DC=corp,DC=example,DC=com",
        attributes={
            "cn": ["Jane Doe"],
            "mail": ["jane@example.com", "jdoe@example.com"],
            "distinguishedName": ["CN=Jane Doe,OU=Staff,DC=corp,DC=example,DC=com"],
        },
    )


@pytest.fixture
def f_searcher(f_entry) -> FakeSearcher:
    return FakeSearcher(entries=[f_entry])


@pytest.fixture
def f_failing_searcher() -> FakeSearcher:
    return FakeSearcher(
        error=DirectorySearchError(
            "Bind failed: invalidCredentials",
            code=49,
            message="80090308: LdapErr: DSID-0C09042F, comment: AcceptSecurityContext error, data 52e, v4563",
        )
    )


@pytest.fixture
def f_event_logger() -> RecordingEventLogger:
    return RecordingEventLogger()


@pytest.fixture(autouse=True)
def clear_env_cache(monkeypatch: pytest.MonkeyPatch, tmp_path):
    from adlookup.env_settings import get_env

    monkeypatch.chdir(tmp_path)
    for var in ("ADLOOKUP_DEFAULT_ROOT", "ADLOOKUP_EVENT_DB", "ADLOOKUP_PAGE_SIZE", "ADLOOKUP_DC_HOST"):
        monkeypatch.delenv(var, raising=False)
    get_env.cache_clear()
    yield
    get_env.cache_clear()
