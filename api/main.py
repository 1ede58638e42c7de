import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from auth import router as auth_router
from core import db
from core.logging import setup_logging
from core.origin import OriginGateMiddleware
from resources.descriptors import ALL_RESOURCE_TYPES
from resources.router import build_router
from uploads import router as uploads_router

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    # Initialize the DB pool once per process and announce ourselves to the seeder.
    await db.init_pool()
    try:
        async with db.serving_lock():
            logger.info("api_started")
            yield
    finally:
        await db.close_pool()
        logger.info("api_stopped")


app = FastAPI(title="Song Market API", lifespan=lifespan)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _validation_message(exc: RequestValidationError) -> str:
    parts = []
    for error in exc.errors():
        loc = ".".join(str(p) for p in error.get("loc", ()) if p != "body")
        msg = str(error.get("msg") or "invalid")
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts) or "Invalid request"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=422,
        content={"message": _validation_message(exc)},
    )


@app.middleware("http")
async def internal_error_boundary(request: Request, call_next):
    # Anything a handler did not map to an HTTPException ends up here as a 500.
    try:
        return await call_next(request)
    except Exception as exc:
        logger.exception("request_failed method=%s path=%s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"message": str(exc) or exc.__class__.__name__},
        )


# Added last so it wraps everything above: disallowed origins never reach a handler.
app.add_middleware(OriginGateMiddleware)

app.include_router(auth_router.router, tags=["auth"])
for resource in ALL_RESOURCE_TYPES:
    app.include_router(build_router(resource))
app.include_router(uploads_router.router, tags=["uploads"])


@app.get("/health")
def health() -> dict:
    return {"status": "ok"}
