import logging
import os
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .exceptions import SessionExpiredError, TaskApiError
from .redis_client import close_redis_client, get_redis_client
from .routes.calendar import router as calendar_router
from .routes.session import router as session_router
from .routes.tasks import router as tasks_router
from .routes.timeline import router as timeline_router
from .sessions import SessionRegistry

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

# Reduce verbosity of third-party libraries
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Application starting up...")
    try:
        get_redis_client()  # Connection test
        logger.info("Redis connection established")
    except Exception as e:
        logger.warning(f"Redis connection failed - selected dates will not be persisted: {e}")

    yield
    logger.info("Application shutting down...")
    close_redis_client()


def create_app(
    sessions: Optional[SessionRegistry] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    use_lifespan: bool = True,
) -> FastAPI:
    app = FastAPI(
        title="Cleaner App API",
        version="1.0.0",
        lifespan=lifespan if use_lifespan else None,
    )
    app.state.sessions = sessions or SessionRegistry(transport=transport)

    @app.exception_handler(SessionExpiredError)
    async def session_expired_handler(request: Request, exc: SessionExpiredError):
        logger.warning(f"Session expired for {request.url.path}")
        # the backend no longer accepts this token; drop its cached state
        token = request.headers.get("user-access-token")
        if token:
            request.app.state.sessions.close(token)
        return JSONResponse(status_code=401, content={"detail": exc.message})

    @app.exception_handler(TaskApiError)
    async def task_api_error_handler(request: Request, exc: TaskApiError):
        logger.error(f"{request.method} {request.url.path} - Backend error: {exc.message}")
        return JSONResponse(status_code=502, content={"detail": exc.message})

    allowed_origins = os.getenv("ALLOWED_ORIGINS", "http://localhost:8081,http://localhost:19006").split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS", "PATCH"],
        allow_headers=["*"],
    )

    app.include_router(calendar_router)
    app.include_router(timeline_router)
    app.include_router(tasks_router)
    app.include_router(session_router)

    @app.get("/health")
    async def health():
        return {"status": "ok", "sessions": len(app.state.sessions)}

    return app


app = create_app()
