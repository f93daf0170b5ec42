import logging
import sys
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from cinexnema.config import get_settings
from cinexnema.errors import ServiceError
from cinexnema.routers import auth, creators, storage, videos
from cinexnema.services.storage import build_object_storage

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # One storage client for the whole process; None keeps storage endpoints answering CONFIGURATION_MISSING
    app.state.storage = build_object_storage(settings)
    if app.state.storage is None:
        logger.warning("Object storage not configured; upload endpoints are disabled")
    try:
        yield
    finally:
        app.state.storage = None


async def service_error_handler(request: Request, exc: ServiceError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.reason or exc.code)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=exc.headers)


async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "INTERNAL_ERROR", "message": "Internal server error"})


def create_app() -> FastAPI:
    app = FastAPI(title="Cinexnema API", version="1.0.0", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=[settings.frontend_url],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)

    app.include_router(auth.router)
    app.include_router(videos.router)
    app.include_router(creators.router)
    app.include_router(storage.router)

    @app.get("/api/ping")
    def ping():
        return {"message": "pong"}

    return app


app = create_app()
