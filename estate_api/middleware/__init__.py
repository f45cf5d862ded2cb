"""
Middleware package for the Real Estate API.
"""

from .validation import ValidationMiddleware

__all__ = [
    "ValidationMiddleware",
]
