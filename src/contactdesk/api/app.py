"""FastAPI application factory.

API layer:
- Validates inputs, calls services
- Wraps every payload in the standard envelope
- Serves the built frontend when it is present
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Generator

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, PlainTextResponse, RedirectResponse

from contactdesk.api.errors import UnhandledErrorMiddleware, register_exception_handlers
from contactdesk.api.security import install_security_middleware
from contactdesk.config import Settings, load_settings
from contactdesk.db.repo import DbSession
from contactdesk.db.session import get_session_factory, init_db
from contactdesk.models.types import ErrorResponse

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"

# Documented error envelopes shared by every API route
ERROR_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Invalid data"},
    404: {"model": ErrorResponse, "description": "Not found"},
    500: {"model": ErrorResponse, "description": "Internal error"},
}


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    factory = get_session_factory(request.app.state.settings.database_url)
    session = factory()
    try:
        yield session
    finally:
        session.close()


def _mount_frontend(app: FastAPI, static_dir: Path) -> None:
    """Serve the built single-page app, falling back to index.html."""
    root = static_dir.resolve()
    index = root / "index.html"

    @app.get("/{path:path}", include_in_schema=False)
    def serve_frontend(path: str):
        """Return a static file, or index.html so client-side routing works."""
        if path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not found")

        candidate = (root / path).resolve()
        if path and candidate.is_file() and candidate.is_relative_to(root):
            return FileResponse(candidate)
        if index.is_file():
            return FileResponse(index)
        raise HTTPException(status_code=404, detail="Not found")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Optional settings; loaded from the environment when omitted.

    Returns:
        Configured FastAPI application.
    """
    if settings is None:
        settings = load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        init_db(settings.database_url)
        logger.info("ContactDesk API ready (env=%s)", settings.app_env)
        yield

    app = FastAPI(
        title="ContactDesk API",
        description="Contacts, tasks and projects",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings

    # Innermost: 500 envelopes still pass through CORS and security middleware
    app.add_middleware(UnhandledErrorMiddleware, settings=settings)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    install_security_middleware(app, settings)
    register_exception_handlers(app, settings)

    # Include routes
    from contactdesk.api.routes import contacts, projects, tasks

    for router, prefix, tag in (
        (contacts.router, "contact", "contacts"),
        (tasks.router, "task", "tasks"),
        (projects.router, "project", "projects"),
    ):
        app.include_router(
            router, prefix=f"{API_PREFIX}/{prefix}", tags=[tag], responses=ERROR_RESPONSES
        )

    @app.get(f"{API_PREFIX}/health", response_class=PlainTextResponse)
    def api_health_check():
        """Lightweight liveness check, no database access."""
        return "Ok"

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    static_dir = Path(settings.static_dir)
    if static_dir.is_dir():
        _mount_frontend(app, static_dir)
    else:

        @app.get("/", include_in_schema=False)
        def redirect_to_frontend():
            """Send browsers hitting the API port to the frontend dev server."""
            return RedirectResponse(settings.frontend_url)

    return app
