# app/api/__init__.py
"""HTTP API package. Versioned routers live under ``app.api.v1``."""
