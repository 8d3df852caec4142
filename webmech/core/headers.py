#!/usr/bin/env python3
"""
Shared request headers.

Headers added through a browser are stored in a HeaderTable rather than
in the browser itself, so they are not part of the page history and
survive going back. Browsers created without an explicit table all share
DEFAULT_HEADERS.
"""

from collections.abc import MutableMapping

from requests.structures import CaseInsensitiveDict


class HeaderTable(MutableMapping):
    """Case-insensitive header mapping shared between browsers."""

    def __init__(self, headers=None):
        self._headers = CaseInsensitiveDict(headers or {})

    def __getitem__(self, name):
        return self._headers[name]

    def __setitem__(self, name, value):
        self._headers[name] = value

    def __delitem__(self, name):
        del self._headers[name]

    def __iter__(self):
        return iter(self._headers)

    def __len__(self):
        return len(self._headers)

    def apply(self, headers):
        """
        Copy every entry onto a header mapping, replacing same-named headers.

        Args:
            headers: CaseInsensitiveDict of outgoing request headers
        """
        for name, value in self._headers.items():
            headers[name] = value
        return headers

    def __repr__(self):
        return f"HeaderTable({dict(self._headers.items())!r})"


DEFAULT_HEADERS = HeaderTable()
