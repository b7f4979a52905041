"""SwachhSnap API entry point."""
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from swachhsnap.core.config import settings
from swachhsnap.core.database import Base, engine
from swachhsnap.core.exceptions import InvalidTransition, MediaUploadError, SwachhSnapError
from swachhsnap.core.logging import configure_logging
from swachhsnap.api import admin, auth, citizen, realtime, sweeper, users
import swachhsnap.models  # noqa: F401  (register tables on Base.metadata)


logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL)
    if settings.ENVIRONMENT == "development":
        Base.metadata.create_all(bind=engine)
    logger.info("app.startup environment=%s upload_backend=%s",
                settings.ENVIRONMENT, settings.UPLOAD_BACKEND)
    yield


app = FastAPI(
    title="SwachhSnap API",
    description="Civic issue reporting: citizens report, sweepers resolve, admins approve.",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(SwachhSnapError)
async def domain_error_handler(request: Request, exc: SwachhSnapError):
    """Map domain errors that escaped a service to a JSON response."""
    if isinstance(exc, InvalidTransition):
        status_code = status.HTTP_409_CONFLICT
    elif isinstance(exc, MediaUploadError):
        status_code = status.HTTP_502_BAD_GATEWAY
    else:
        status_code = status.HTTP_400_BAD_REQUEST
    logger.warning("request.domain_error path=%s error=%s", request.url.path, exc)
    return JSONResponse(status_code=status_code, content={"detail": str(exc)})


app.include_router(auth.router)
app.include_router(users.router)
app.include_router(citizen.router)
app.include_router(sweeper.router)
app.include_router(admin.router)
app.include_router(realtime.router)

if settings.UPLOAD_BACKEND == "local":
    Path(settings.MEDIA_ROOT).mkdir(parents=True, exist_ok=True)
    app.mount("/media", StaticFiles(directory=settings.MEDIA_ROOT), name="media")


@app.get("/health", tags=["Health"])
def health():
    return {"status": "ok"}
