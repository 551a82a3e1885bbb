import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from .api.v1 import routers
from .config import settings
from .db import Base, engine
from .exceptions import Internal, InvalidInput, TrackerError, Unauthorized
from .logging_config import setup_logging

setup_logging(settings.log_level, settings.services_log_level, settings.sql_log_level)
logger = logging.getLogger("sleep_tracker.main")

Base.metadata.create_all(bind=engine)

app = FastAPI(title="Sleep Tracker API", version="1.0.0", debug=settings.debug)
logger.info("Application started")
logger.info("CORS origins: %s", settings.cors_allow_origins)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

for router in routers:
    app.include_router(router)


def _error_response(err: TrackerError) -> JSONResponse:
    headers = None
    if isinstance(err, Unauthorized):
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=err.status_code, content={"detail": err.message}, headers=headers
    )


@app.exception_handler(TrackerError)
async def tracker_error_handler(request: Request, exc: TrackerError):
    logger.warning(
        "request failed | %s %s | status=%s | err=%s",
        request.method,
        request.url.path,
        exc.status_code,
        exc.message,
    )
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    problems = "; ".join(
        f"{'.'.join(str(part) for part in err['loc'] if part != 'body')}: {err['msg']}"
        for err in exc.errors()
    )
    logger.warning(
        "request rejected | %s %s | err=%s", request.method, request.url.path, problems
    )
    return _error_response(InvalidInput(problems or None))


@app.exception_handler(SQLAlchemyError)
async def store_error_handler(request: Request, exc: SQLAlchemyError):
    logger.error(
        "store failure | %s %s",
        request.method,
        request.url.path,
        exc_info=exc,
    )
    return _error_response(Internal())


@app.get("/", tags=["health"])
def health_check():
    return {"status": "ok"}
