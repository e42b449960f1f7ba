"""ChairUp FastAPI application.

Usage:
    uvicorn chairup.app:app --host 0.0.0.0 --port 8000 --reload

PROTEAN_ENV selects the domain configuration overlay; CHAIRUP_JWT_SECRET must
be set before the first authenticated request.
"""

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from chairup import __version__
from chairup.api.errors import register_error_handlers
from chairup.api.routes import routers
from chairup.domain import chairup

logger = structlog.get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    chairup.init()
    logger.info("ChairUp API started", domain=chairup.name, version=__version__)
    yield


def create_app(initialize_domain: bool = True) -> FastAPI:
    """Build the API. Tests that initialise the domain themselves pass ``False``."""
    app = FastAPI(
        title="ChairUp API",
        description="Chair storefront: catalogue, cart, orders, reviews and promotions",
        version=__version__,
        lifespan=lifespan if initialize_domain else None,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        """Push the Protean domain context for each request."""
        with chairup.domain_context():
            return await call_next(request)

    for router in routers:
        app.include_router(router)
    register_error_handlers(app)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": chairup.name, "version": __version__})

    return app


app = create_app()
