"""
Core package - foundation for the application.

Modules:
- config.py - Application settings via Pydantic Settings
- exceptions.py - Custom exception hierarchy
- responses.py - Unified API response format
- handlers.py - FastAPI exception handlers
- logging.py - Centralized logging configuration
- tokens.py - Share token generation
"""

from core.config import settings
from core.exceptions import (
    AppException,
    NotFoundError,
    ValidationError,
    UpstreamError,
    EmptyResultError,
    PersistenceError,
    InvalidStateError,
    ConfigurationError,
)
from core.responses import ApiResponse

__all__ = [
    'settings',
    'AppException',
    'NotFoundError',
    'ValidationError',
    'UpstreamError',
    'EmptyResultError',
    'PersistenceError',
    'InvalidStateError',
    'ConfigurationError',
    'ApiResponse',
]
