"""
Utility modules for URL handling and HTTP response processing.

This package contains utility functions for resolving URLs, working out
response base URLs, and classifying HTTP response codes.
"""

from .http import content_type, error_response, get_response_category, is_success
from .url import is_absolute_url, resolve_url, response_base

__all__ = [
    "resolve_url",
    "is_absolute_url",
    "response_base",
    "get_response_category",
    "is_success",
    "content_type",
    "error_response",
]
