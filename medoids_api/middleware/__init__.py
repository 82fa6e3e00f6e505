"""
Middleware package for the Medoid Lab API.
"""

from .security import setup_security, SecurityHeadersMiddleware, RequestLoggingMiddleware

__all__ = ["setup_security", "SecurityHeadersMiddleware", "RequestLoggingMiddleware"]
