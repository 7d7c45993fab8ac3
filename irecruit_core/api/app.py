from __future__ import annotations
import logging
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from irecruit_core.api import routes_applications, routes_job_offers
from irecruit_core.domain.errors import InternalError, IRecruitError
from irecruit_core.services.container import Container, get_container
from irecruit_core.utils.logging import get_logger, log_event

logger = get_logger(__name__)


async def _handle_irecruit_error(request: Request, exc: IRecruitError) -> JSONResponse:
    if isinstance(exc, InternalError):
        log_event(logger, logging.ERROR, "request_failed", path=request.url.path, message=exc.message)
    else:
        log_event(logger, logging.INFO, "request_rejected", path=request.url.path, status=exc.status_code, message=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"statusCode": exc.status_code, "message": exc.message})


async def _handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.error("request_crashed", exc_info=exc, extra={"extra": {"path": request.url.path}})
    return JSONResponse(status_code=500, content={"statusCode": 500, "message": "Internal server error"})


def create_app(container: Optional[Container] = None) -> FastAPI:
    app = FastAPI(title="iRecruit API")
    app.state.container = container or get_container()
    app.add_exception_handler(IRecruitError, _handle_irecruit_error)
    app.add_exception_handler(Exception, _handle_unexpected)
    app.include_router(routes_job_offers.router)
    app.include_router(routes_applications.router)
    return app
