"""HTTP middleware."""
from campusvibe.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
