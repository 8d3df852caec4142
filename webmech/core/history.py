#!/usr/bin/env python3
"""
Page history module.

The browser pushes a snapshot of itself before every action that replaces
the current page, and pops one when going back.
"""

import copy
from dataclasses import dataclass
from typing import Any, Optional

from .page import PageState


@dataclass
class HistoryEntry:
    """
    A snapshot of browser state.

    Attributes:
        page: The page as it was when the snapshot was taken
        last_uri: Last successfully fetched URL (the next Referer)
        request: The last request issued, used by reload()
    """

    page: PageState
    last_uri: Optional[str] = None
    request: Any = None


class HistoryStack:
    """
    Stack of independent browser snapshots.

    Entries are deep copies: changing a field on the live page never shows
    through a pushed entry, and a popped entry shares no forms with the
    entries left below it.
    """

    def __init__(self, max_depth=None):
        """
        Initialize the history stack.

        Args:
            max_depth: Maximum number of entries kept; the oldest entries
                are dropped beyond it (None for unlimited)
        """
        self.max_depth = max_depth
        self._entries = []

    def push(self, entry):
        """
        Store a deep copy of entry.

        The HTTP response object is shared rather than copied; it is never
        modified once an exchange has completed.
        """
        memo = {}
        response = entry.page.response
        if response is not None:
            memo[id(response)] = response
        self._entries.append(copy.deepcopy(entry, memo))

        if self.max_depth is not None:
            while len(self._entries) > self.max_depth:
                self._entries.pop(0)

    def pop(self):
        """
        Remove and return the most recent entry.

        Returns:
            HistoryEntry: The entry, or None if the stack is empty
        """
        if not self._entries:
            return None
        return self._entries.pop()

    def __len__(self):
        return len(self._entries)

    def __bool__(self):
        return bool(self._entries)
