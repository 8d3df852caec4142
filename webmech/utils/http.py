#!/usr/bin/env python3
"""
HTTP response handling module.

This module contains functions for classifying HTTP status codes and
for building the stand-in response used when a request never got one.
"""

import requests
from requests.structures import CaseInsensitiveDict

# Status code reported for exchanges that failed before a response arrived
CLIENT_ERROR_STATUS = 500


def get_response_category(response_code):
    """
    Get the category of an HTTP response code.

    Args:
        response_code: HTTP status code

    Returns:
        str: Category name (informational, success, redirect, client_error, server_error, unknown)
    """
    if not isinstance(response_code, int):
        return 'unknown'

    if 100 <= response_code < 200:
        return 'informational'
    elif 200 <= response_code < 300:
        return 'success'
    elif 300 <= response_code < 400:
        return 'redirect'
    elif 400 <= response_code < 500:
        return 'client_error'
    elif 500 <= response_code < 600:
        return 'server_error'
    else:
        return 'unknown'


def is_success(response_code):
    """True for 2xx status codes."""
    return get_response_category(response_code) == 'success'


def content_type(response):
    """
    Media type of a response, lowercased and without parameters.

    Args:
        response: requests.Response

    Returns:
        str: e.g. "text/html", or "" if the header is missing
    """
    header = response.headers.get('Content-Type') or ''
    return header.split(';', 1)[0].strip().lower()


def error_response(url, error, prepared_request=None):
    """
    Build a response standing in for a request that failed in transport.

    Connection errors and unparseable URLs become an ordinary
    unsuccessful response so callers handle them like any HTTP error.

    Args:
        url: URL the failed request was addressed to
        error: The exception raised by the transport
        prepared_request: The requests.PreparedRequest that failed, if the
            request got that far

    Returns:
        requests.Response: A 500 response carrying the error text
    """
    response = requests.Response()
    response.status_code = CLIENT_ERROR_STATUS
    response.reason = type(error).__name__
    response.url = url
    response.request = prepared_request
    response.headers = CaseInsensitiveDict({
        'Content-Type': 'text/plain',
        'Client-Warning': 'Internal response',
    })
    response.encoding = 'utf-8'
    response._content = str(error).encode('utf-8')
    return response
