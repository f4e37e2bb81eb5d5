"""
CLI Serve Command

Run the FastAPI application with uvicorn.

Usage:
    foundation serve [--host 127.0.0.1] [--port 8000] [--reload]
"""

from __future__ import annotations

from argparse import Namespace


def serve_cmd(args: Namespace) -> int:
    """Handle the serve command."""
    import uvicorn

    uvicorn.run(
        "api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
        log_level=args.cli_config.log_level.lower(),
    )
    return 0
