"""Transport module - one request, one response"""

from .base import Transport
from .connection import ITerm2Transport

__all__ = [
    "Transport",
    "ITerm2Transport",
]
