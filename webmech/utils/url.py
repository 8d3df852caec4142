#!/usr/bin/env python3
"""
URL handling module.

This module contains functions for resolving relative references and for
working out the base URL of a fetched response.
"""

from urllib.parse import urljoin, urlparse

from requests.utils import requote_uri


def resolve_url(url, base=None):
    """
    Resolve a possibly relative URL against a base URL.

    Args:
        url: The URL to resolve
        base: Base URL, or None to leave url as it is

    Returns:
        str: Absolute URL when a base is known
    """
    url = str(url).strip()
    if base:
        url = urljoin(base, url)
    return requote_uri(url)


def is_absolute_url(url):
    """True if url has both a scheme and a network location."""
    parsed = urlparse(url)
    return bool(parsed.scheme and parsed.netloc)


def response_base(response):
    """
    Base URL of a response as declared by its headers.

    Content-Base and Content-Location take precedence over the URL the
    response was fetched from. A <base> element in the document, if any,
    is applied on top of this by the caller.

    Args:
        response: requests.Response

    Returns:
        str: Base URL
    """
    for header in ('Content-Base', 'Content-Location'):
        value = response.headers.get(header)
        if value:
            return urljoin(response.url, value.strip())
    return response.url
