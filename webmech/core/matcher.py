#!/usr/bin/env python3
"""
Link and input matching module.

This module implements the small selection language used to pick one
link (or every matching link) out of a page, and the ordinal scan that
checkbox ticking shares with it.
"""

import re
from dataclasses import dataclass, fields
from typing import Any, Optional, Union

# Ordinal meaning "every match" instead of the n-th one
ALL = "all"


def find(candidates, predicate=None, n=1):
    """
    Select among candidates by predicate and 1-based ordinal.

    The candidates are scanned once, in order. For an integer ordinal the
    scan stops at the n-th match; for ALL every match is collected.

    Args:
        candidates: Iterable of items to search
        predicate: Callable returning True for matching items (None matches all)
        n: 1-based ordinal among the matches, or ALL

    Returns:
        The n-th matching item or None if there are fewer matches; for ALL,
        a list of every matching item (possibly empty)
    """
    if predicate is None:
        predicate = _accept_all

    if n == ALL:
        return [item for item in candidates if predicate(item)]

    nmatches = 0
    for item in candidates:
        if predicate(item):
            nmatches += 1
            if nmatches == n:
                return item
    return None


def _accept_all(item):
    return True


def _as_regex(pattern):
    if isinstance(pattern, re.Pattern):
        return pattern
    return re.compile(pattern)


@dataclass
class LinkCriteria:
    """
    Criteria for selecting links, combined with logical AND.

    Attributes:
        text: Exact link text
        text_regex: Pattern searched for in the link text
        url: Exact link URL
        url_regex: Pattern searched for in the link URL
        n: 1-based ordinal among the matches, or ALL
    """

    text: Optional[str] = None
    text_regex: Any = None
    url: Optional[str] = None
    url_regex: Any = None
    n: Union[int, str] = 1

    @classmethod
    def names(cls):
        return [f.name for f in fields(cls)]

    @classmethod
    def from_kwargs(cls, warn=None, **kwargs):
        """
        Build criteria from keyword arguments.

        Unknown keys are reported through warn and otherwise ignored.

        Args:
            warn: Callable taking a warning message
            **kwargs: Criteria values keyed by field name

        Returns:
            LinkCriteria: The recognised criteria
        """
        known = set(cls.names())
        for key in sorted(kwargs):
            if key not in known:
                if warn is not None:
                    warn(f'Unknown link-finding parameter "{key}"')

        values = {key: value for key, value in kwargs.items() if key in known}
        if values.get("n") is None:
            values.pop("n", None)
        return cls(**values)

    def predicate(self):
        """
        Fold the supplied criteria into a single predicate over links.

        Returns:
            callable: Function taking a Link and returning a bool
        """
        conditions = []

        if self.url is not None:
            url = self.url
            conditions.append(lambda link: link.url == url)
        if self.url_regex is not None:
            url_regex = _as_regex(self.url_regex)
            conditions.append(lambda link: url_regex.search(link.url) is not None)
        if self.text is not None:
            text = self.text
            conditions.append(lambda link: link.text is not None and link.text == text)
        if self.text_regex is not None:
            text_regex = _as_regex(self.text_regex)
            conditions.append(
                lambda link: link.text is not None and text_regex.search(link.text) is not None
            )

        if not conditions:
            return _accept_all
        return lambda link: all(condition(link) for condition in conditions)

    def find(self, links):
        """Apply these criteria to a sequence of links."""
        return find(links, self.predicate(), self.n)


def find_checkbox(form, name, value):
    """
    Find the first checkbox called name that can take value.

    Args:
        form: Form to search
        name: Checkbox name
        value: The value the checkbox must be able to take

    Returns:
        Input: The matching checkbox, or None
    """
    pairs = (
        (inp, possible)
        for inp in form.inputs
        if inp.name == name and inp.type == "checkbox"
        for possible in inp.possible_values()
        if possible is not None
    )
    match = find(pairs, lambda pair: pair[1] == value)
    if match is None:
        return None
    return match[0]
