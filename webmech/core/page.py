#!/usr/bin/env python3
"""
Page state module.

A PageState bundles everything the browser derives from one completed
HTTP exchange. The browser builds a fresh PageState for every exchange
rather than patching the previous one, so links and forms always come
from the same content.
"""

from dataclasses import dataclass, field
from typing import Any, List, Optional

# Content types whose body is parsed for links and forms
HTML_CONTENT_TYPES = ("text/html", "application/xhtml+xml")


@dataclass
class PageState:
    """
    Everything known about the current page.

    Attributes:
        requested_uri: URL of the request that started the exchange
        uri: URL the exchange finally resolved to, after redirects
        response: The requests.Response of the exchange
        status: HTTP status code
        content_type: Media type of the response, without parameters
        base: Base URL for resolving relative references on the page
        content: Decoded response body
        links: Links extracted from the content
        forms: Forms parsed from the content
        form: The selected form, always one of forms or None
    """

    requested_uri: Optional[str] = None
    uri: Optional[str] = None
    response: Any = None
    status: Optional[int] = None
    content_type: str = ""
    base: Optional[str] = None
    content: str = ""
    links: List[Any] = field(default_factory=list)
    forms: List[Any] = field(default_factory=list)
    form: Any = None

    @property
    def is_html(self):
        return self.content_type in HTML_CONTENT_TYPES

    def select_form(self, form):
        """Make form the selected form; it must belong to this page."""
        if form is not None and not any(form is f for f in self.forms):
            raise ValueError("Selected form must be one of the page's forms")
        self.form = form
