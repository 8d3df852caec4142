"""
webmech scripted web browser package.

This package provides a programmable web browser: fetch pages, find and
follow links, fill in and submit forms, and go back through the pages
visited so far.
"""

__version__ = "1.0.0"
__author__ = "Michael Elliott"

from .core.browser import Browser
from .content.forms import Form, Input
from .core.errors import BrowserStateError, FormError, ResponseError, WebmechError
from .core.headers import DEFAULT_HEADERS, HeaderTable
from .core.link import Link

__all__ = [
    "Browser",
    "Link",
    "Form",
    "Input",
    "HeaderTable",
    "DEFAULT_HEADERS",
    "WebmechError",
    "BrowserStateError",
    "FormError",
    "ResponseError",
]
