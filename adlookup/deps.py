from __future__ import annotations

from fastapi import Depends
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from .ad import ADClient, ADConfig, Credential, DirectorySearcher
from .db import get_engine, make_session_factory
from .env_settings import EnvSettings, get_env
from .services.audit import DbEventLogger, EventLogger, LoggingEventLogger

basic = HTTPBasic(auto_error=False)


def get_settings() -> EnvSettings:
    return get_env()


def get_searcher(env: EnvSettings = Depends(get_settings)) -> DirectorySearcher:
    return ADClient(ADConfig.from_env(env))


def get_event_logger(env: EnvSettings = Depends(get_settings)) -> EventLogger:
    if env.event_db:
        return DbEventLogger(make_session_factory(get_engine()))
    return LoggingEventLogger()


def get_credential(creds: HTTPBasicCredentials | None = Depends(basic)) -> Credential | None:
    # Validation happens in the lookup service, after the root is resolved.
    if creds is None:
        return None
    return Credential(creds.username, creds.password)
