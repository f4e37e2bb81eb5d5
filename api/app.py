"""
FastAPI Application

Main application setup and configuration.

Usage:
    uvicorn api.app:app --reload

    # Or run directly
    python -m api.app
"""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.routes import health, records
from api.deps import _load_runtime_config
from api.errors import APIError, api_error_handler, generic_error_handler
from core.schemas.errors import ConfigurationException


# Configure logging from the same config the routes use (env over config file)
def _resolve_log_level() -> int:
    """Resolve the log level from runtime config, defaulting to INFO."""
    try:
        raw = _load_runtime_config().log_level
    except ConfigurationException:
        raw = None
    return getattr(logging, (raw or "INFO").upper(), logging.INFO)


logging.basicConfig(
    level=_resolve_log_level(),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""

    app = FastAPI(
        title="Foundation API",
        description="""
CRUD controller layer over the foundation toolkit.

## Endpoints

- **GET /records** - List records
- **GET /records/{id}** - Show a record
- **POST /records** - Create a record (validated by `CreateRequest`)
- **PATCH /records/{id}** - Update a record (validated by `UpdateRequest`)
- **DELETE /records/{id}** - Delete a record
- **GET /health** - Health check

Record calls are forwarded to the upstream API configured with
`FOUNDATION_UPSTREAM_URL`.
        """,
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(APIError, api_error_handler)
    app.add_exception_handler(Exception, generic_error_handler)

    app.include_router(health.router)
    app.include_router(records.router)

    return app


# Create the application instance
app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)
