"""HTTP service mode for zimcheck."""

from .app import create_app, run_service

__all__ = ["create_app", "run_service"]
