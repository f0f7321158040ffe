from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from ..ad import Credential, DirectorySearcher, ObjectType, SearchScope, ensure_credential
from ..db import get_engine, make_session_factory
from ..deps import get_credential, get_event_logger, get_searcher, get_settings
from ..env_settings import EnvSettings
from ..repo import db_session
from ..schema import ErrorResponse, EventOut, LookupResponse
from ..services import lookup, recent_events
from ..services.audit import EventLogger

router = APIRouter(prefix="/api")


@router.get(
    "/lookup",
    response_model=LookupResponse,
    responses={400: {"model": ErrorResponse}, 502: {"model": ErrorResponse}},
)
def lookup_objects(
    identity: str,
    search_root: Optional[str] = None,
    type: ObjectType = ObjectType.USER,
    filter: Optional[str] = None,
    scope: SearchScope = SearchScope.SUBTREE,
    properties: str = "distinguishedName",
    credential: Credential | None = Depends(get_credential),
    searcher: DirectorySearcher = Depends(get_searcher),
    event_logger: EventLogger = Depends(get_event_logger),
    env: EnvSettings = Depends(get_settings),
):
    # ADLookupError subclasses are turned into JSON responses by main.py.
    items = lookup(
        identity,
        search_root=search_root,
        credential=credential,
        type=type,
        filter=filter,
        scope=scope,
        properties=properties,
        searcher=searcher,
        event_logger=event_logger,
        settings=env,
    )
    return LookupResponse(count=len(items), items=items)


@router.get("/events", response_model=list[EventOut])
def list_events(
    limit: int = Query(50, ge=1, le=500),
    credential: Credential | None = Depends(get_credential),
    env: EnvSettings = Depends(get_settings),
):
    if not env.event_db:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Event log is not enabled")
    ensure_credential(credential)
    with db_session(make_session_factory(get_engine())) as db:
        return [EventOut.model_validate(e) for e in recent_events(db, limit=limit)]
