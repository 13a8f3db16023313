"""API routes package.

This package contains all API route handlers for the application.
"""
from . import boards
from . import layouts

__all__ = [
    "boards",
    "layouts",
]
