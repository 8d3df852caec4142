"""
Core module containing the browsing session.

This package contains the Browser class and the pieces of state it
manages: the link model, page state, page history, shared headers and
the link matcher.
"""

from .browser import Browser
from .errors import BrowserStateError, FormError, ResponseError, WebmechError
from .headers import DEFAULT_HEADERS, HeaderTable
from .history import HistoryEntry, HistoryStack
from .link import Link
from .matcher import ALL, LinkCriteria, find
from .page import PageState

__all__ = [
    "Browser",
    "Link",
    "LinkCriteria",
    "find",
    "ALL",
    "PageState",
    "HistoryEntry",
    "HistoryStack",
    "HeaderTable",
    "DEFAULT_HEADERS",
    "WebmechError",
    "BrowserStateError",
    "FormError",
    "ResponseError",
]
