"""Utility modules for rfctree.

Provides:
- logger: get_logger for logging
"""

from rfctree.utils.logger import get_logger

__all__ = ["get_logger"]
