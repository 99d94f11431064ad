"""
Share token utilities.
Share tokens grant anonymous access to a single gallery.
"""

import re
import secrets

from core.config import settings

SHARE_TOKEN_PATTERN = re.compile(r'^[A-Za-z0-9_-]{6,64}$')


def generate_share_token(nbytes: int = None) -> str:
    """
    Generate a URL-safe, unguessable share token.
    
    Args:
        nbytes: Random bytes to draw (defaults to SHARE_TOKEN_BYTES)
    
    Returns:
        URL-safe token string
    """
    return secrets.token_urlsafe(nbytes or settings.share_token_bytes)


def is_share_token(value: str) -> bool:
    """Check if a string is shaped like a share token."""
    if not value:
        return False
    return bool(SHARE_TOKEN_PATTERN.match(value))
