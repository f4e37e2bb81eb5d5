"""
Foundation API (FastAPI)

HTTP API over the foundation toolkit:
- GET /health - Health check
- GET/POST /records, GET/PATCH/DELETE /records/{id} - CRUD proxied upstream

Usage:
    uvicorn api.app:app --reload
"""

__version__ = "0.1.0"
