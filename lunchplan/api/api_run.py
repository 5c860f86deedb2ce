from datetime import datetime, timezone
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from lunchplan.api.routes import auth, ingredients, meals, plans, users
from lunchplan.domain.errors import InvalidArgument, PlannerError
from lunchplan.infra.Storage import StorageBackend, build_storage
from lunchplan.utilities.config import CORS_ORIGIN, DEBUG

# Logging
logger = logging.getLogger("lunchplan_app")


async def _planner_error(request: Request, exc: PlannerError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def _validation_error(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    logger.warning(f"Rejected request {request.method} {request.url.path}: {message}")
    return JSONResponse(status_code=400, content=InvalidArgument(message).to_dict())


async def _unexpected_error(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    content = {"status": "error", "kind": "Internal", "message": "An unexpected error occurred"}
    if DEBUG:
        content["detail"] = repr(exc)
    return JSONResponse(status_code=500, content=content)


def create_app(storage: Optional[StorageBackend] = None) -> FastAPI:
    """Build the API around a storage backend (configured backend when omitted)."""
    app = FastAPI(title="Lunch Planner API")
    app.state.storage = storage or build_storage()
    logger.info(f"Using {type(app.state.storage).__name__}")

    app.add_middleware(CORSMiddleware, allow_origins=[CORS_ORIGIN], allow_methods=["*"], allow_headers=["*"])

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} -> {response.status_code}")
        return response

    app.add_exception_handler(PlannerError, _planner_error)
    app.add_exception_handler(RequestValidationError, _validation_error)
    app.add_exception_handler(Exception, _unexpected_error)

    for module in (auth, users, ingredients, meals, plans):
        app.include_router(module.router)

    @app.get("/health")
    def health():
        return {"status": "UP", "timestamp": datetime.now(timezone.utc).isoformat()}

    return app


app = create_app()
