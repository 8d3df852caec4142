#!/usr/bin/env python3
"""
Exception types raised by the browsing session.

Recoverable conditions (missing links, unknown options, going back past
the first page) are reported as warnings instead; these exceptions are
reserved for misuse the session cannot recover from.
"""


class WebmechError(Exception):
    """Base class for all webmech errors."""


class BrowserStateError(WebmechError):
    """Raised when an operation needs state the browser does not have yet."""


class FormError(WebmechError):
    """Raised for unknown fields or illegal values on a form."""


class ResponseError(WebmechError):
    """
    Raised by an autochecking browser when an exchange fails.

    The failed response is still installed as the current page before
    this is raised.
    """

    def __init__(self, message, response=None):
        super().__init__(message)
        self.response = response
