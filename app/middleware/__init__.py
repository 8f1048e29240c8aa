"""
미들웨어 패키지
"""

from .error_handling import ErrorHandlingMiddleware, HealthCheckMiddleware

__all__ = [
    "ErrorHandlingMiddleware",
    "HealthCheckMiddleware",
]
