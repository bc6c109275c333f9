"""Errors shared by every service's resource layer."""

from typing import Optional


class NotFoundError(Exception):
    """Base exception for lookups that matched no row."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)
