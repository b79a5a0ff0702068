"""
HTTP middleware: request ids and request/response logging.
"""

from tourlead.middleware.logging import LoggingMiddleware
from tourlead.middleware.request_id import RequestIdMiddleware

__all__ = ["LoggingMiddleware", "RequestIdMiddleware"]
