from __future__ import annotations

import logging
from typing import Any, Iterable, Optional

from ..ad.models import DirectorySearcher, ObjectType, SearchScope, ensure_credential
from ..ad.query import DEFAULT_PAGE_SIZE, QueryBuilder
from ..ad.utils import flatten_attributes, project_record
from ..env_settings import EnvSettings
from ..exceptions import DirectorySearchError
from .audit import EventLogger, LoggingEventLogger

logger = logging.getLogger(__name__)


def lookup(
    identity: str,
    search_root: Optional[str] = None,
    credential: Any = None,
    type: ObjectType | str = ObjectType.USER,
    filter: Optional[str] = None,
    scope: SearchScope | str = SearchScope.SUBTREE,
    properties: str | Iterable[str] | None = "distinguishedName",
    *,
    searcher: DirectorySearcher,
    event_logger: EventLogger | None = None,
    settings: EnvSettings | None = None,
) -> list[dict[str, Any]]:
    """Find directory objects by identity and return the requested attributes.

    Input errors (search root, identity, credential) are raised before the
    searcher is called. A failed search is reported to the event logger and
    re-raised as DirectorySearchError.
    """
    builder = QueryBuilder(
        page_size=settings.page_size if settings else DEFAULT_PAGE_SIZE,
        default_root=settings.default_root if settings else "",
    )
    query = builder.build(
        identity,
        search_root=search_root,
        credential=credential,
        type=type,
        filter=filter,
        scope=scope,
        properties=properties,
    )
    cred = ensure_credential(credential)

    try:
        entries = searcher.search(
            query.path,
            query.filter,
            query.scope,
            query.page_size,
            query.attributes,
            cred,
        )
    except DirectorySearchError as e:
        (event_logger or LoggingEventLogger()).log(
            "Directory search failed",
            {"path": query.path, "filter": query.filter},
            e,
            "error",
            "directory",
        )
        raise

    records = [
        project_record(flatten_attributes(entry.attributes), query.attributes, dn=entry.dn)
        for entry in entries
    ]
    logger.info("Lookup %r under %s: %d result(s)", query.search_term, query.path, len(records))
    return records
