"""Utility modules for preline.

Provides:
- logger: get_logger for logging
"""

from preline.utils.logger import get_logger

__all__ = [
    "get_logger",
]
