from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from .env_settings import get_env
from .exceptions import ADLookupError
from .log_config import setup_logging
from .routers import lookup as lookup_router

log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    env = get_env()
    setup_logging(level=env.log_level, retention_days=env.log_retention_days, max_size_mb=env.log_max_size_mb)

    app = FastAPI(title="AD Lookup")
    app.include_router(lookup_router.router)

    @app.exception_handler(ADLookupError)
    async def _lookup_error_handler(request: Request, exc: ADLookupError):
        if exc.status_code >= 500:
            log.warning("Lookup failed: %s", exc)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    return app


app = create_app()
