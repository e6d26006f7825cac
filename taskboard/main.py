"""Application factory and the ``taskboard`` console entry point.

Start the service with ``taskboard`` (``run``): it checks settings and the
store before serving and exits with status 1 when either is unusable.
Serving ``taskboard.main:app`` with uvicorn directly also works, but a
startup failure there ends with uvicorn's own exit status (3).
"""

import asyncio
import logging
import sys
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from . import __version__
from .api import auth, health, tasks
from .api.errors import register_exception_handlers
from .config import Settings
from .db.store import Store, open_store
from .errors import StoreUnavailable
from .logging_setup import setup_logging
from .services.auth import AuthService
from .services.credentials import CredentialStore
from .services.tasks import TaskService

logger = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, store: Optional[Store] = None) -> FastAPI:
    """Build the API.

    The store is opened in the lifespan hook, so it lives on the server's
    event loop. Pass ``store`` to inject one (tests do).
    """
    settings = settings or Settings.from_env()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        settings.validate()
        backend = store or open_store(settings.database_url)
        await backend.connect()
        credentials = CredentialStore(backend, rounds=settings.bcrypt_rounds)
        app.state.store = backend
        app.state.auth_service = AuthService(
            credentials, settings.auth_secret, settings.token_expire_minutes
        )
        app.state.task_service = TaskService(backend)
        if not settings.require_auth:
            logger.warning("REQUIRE_AUTH is off: task routes accept requests without a token")
        logger.info("Taskboard API started")
        yield
        await backend.close()
        logger.info("Taskboard API shutting down")

    app = FastAPI(title="Taskboard", version=__version__, lifespan=lifespan)
    app.state.settings = settings

    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    # Mount routers
    app.include_router(auth.router, prefix="/api", tags=["auth"])
    app.include_router(tasks.router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(health.router, tags=["health"])

    @app.get("/")
    async def read_root():
        return {"message": "Welcome to the Taskboard API!"}

    return app


async def check_store(database_url: str) -> None:
    """Open and close the store once; raises StoreUnavailable if it is down."""
    store = open_store(database_url)
    await store.connect()
    await store.close()


def run() -> None:
    """Console entry point. Exits with status 1 if startup fails."""
    settings = Settings.from_env()
    setup_logging(settings.log_level)
    try:
        settings.validate()
        asyncio.run(check_store(settings.database_url))
    except (ValueError, StoreUnavailable) as e:
        logger.error(f"Startup failed: {e}")
        sys.exit(1)
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port)


# for `uvicorn taskboard.main:app`; prefer the `taskboard` command
app = create_app()
