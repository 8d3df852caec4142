#!/usr/bin/env python3
"""
Browser session module.

This module contains the Browser class: a scripted web client that
fetches pages, keeps the links and forms of the current page, fills in
and submits forms, and remembers earlier pages so it can go back.
"""

import re
import sys

import requests
from requests.structures import CaseInsensitiveDict

from .. import __version__
from ..content.forms import parse_forms
from ..content.links import extract_links
from ..content.markdown import render_content, save_content
from ..content.parser import find_base_href, get_title, make_soup
from ..utils.http import content_type, error_response, is_success
from ..utils.url import resolve_url, response_base
from .errors import BrowserStateError, FormError, ResponseError
from .headers import DEFAULT_HEADERS
from .history import HistoryEntry, HistoryStack
from .matcher import ALL, LinkCriteria, find_checkbox
from .page import PageState

DEFAULT_AGENT = f"webmech/{__version__}"

# Same limit requests applies when it follows redirects itself
DEFAULT_MAX_REDIRECTS = 30

SUBMIT_FORM_OPTIONS = ("form_number", "form_name", "fields", "button", "x", "y")

# Headers describing a request body, dropped when a redirect drops the body
BODY_HEADERS = ("Content-Type", "Content-Length", "Transfer-Encoding")


def print_warning(message):
    """Default warning handler: print the message to stderr."""
    print(f"Warning: {message}", file=sys.stderr)


class Browser:
    """
    Scripted web browser.

    The browser owns a requests.Session as its transport and keeps the
    state of the current page: its URL, response, content, links and
    forms, and the form selected for filling in. Every action that
    replaces the current page first pushes a snapshot onto the history,
    so back() can restore it exactly.

    Problems the caller can recover from (no matching link, unknown
    options, an empty history) are reported as warnings and signalled by
    the return value. Failed HTTP exchanges are not errors either: check
    success() after each navigation.
    """

    def __init__(
        self,
        agent=None,
        quiet=False,
        autocheck=False,
        max_redirects=DEFAULT_MAX_REDIRECTS,
        timeout=None,
        stack_depth=None,
        headers=None,
        transport=None,
        onwarn=None,
    ):
        """
        Initialize the browser.

        Args:
            agent: User-Agent string (default "webmech/<version>")
            quiet: Suppress warnings
            autocheck: Raise ResponseError whenever an exchange fails
            max_redirects: Maximum redirects followed per request
            timeout: Timeout in seconds passed to the transport
            stack_depth: Maximum history depth (None for unlimited)
            headers: HeaderTable applied to every request; defaults to the
                table shared by all browsers
            transport: requests.Session to use instead of a new one
            onwarn: Callable receiving warning messages
        """
        self.transport = transport if transport is not None else requests.Session()
        self.transport.headers["User-Agent"] = agent or DEFAULT_AGENT
        self.headers = DEFAULT_HEADERS if headers is None else headers

        self.quiet = quiet
        self.autocheck = autocheck
        self.max_redirects = max_redirects
        self.timeout = timeout
        self.onwarn = onwarn or print_warning

        self.page = PageState()
        self.history = HistoryStack(max_depth=stack_depth)

        # Last successfully fetched URL, sent as Referer
        self._last_uri = None
        # Last request issued, for reload()
        self._request = None
        # Target of the exchange in flight, updated on every redirect
        self._redirected_uri = None

    @classmethod
    def from_config(cls, config, **kwargs):
        """
        Create a browser from a BrowserConfig.

        Headers named in the configuration are added to the header table
        the browser ends up using.
        """
        browser = cls(
            agent=config.agent,
            quiet=config.quiet,
            autocheck=config.autocheck,
            max_redirects=config.max_redirects,
            timeout=config.timeout,
            stack_depth=config.stack_depth,
            **kwargs,
        )
        for name, value in (config.headers or {}).items():
            browser.add_header(name, value)
        return browser

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()

    def close(self):
        """Close the underlying transport."""
        self.transport.close()

    # Diagnostics

    def warn(self, message):
        """Report a recoverable problem unless the browser is quiet."""
        if not self.quiet:
            self.onwarn(message)

    # Page accessors

    @property
    def agent(self):
        return self.transport.headers.get("User-Agent")

    @agent.setter
    def agent(self, value):
        self.transport.headers["User-Agent"] = value

    @property
    def uri(self):
        """URL of the current page, after redirects."""
        return self.page.uri

    @property
    def response(self):
        return self.page.response

    res = response

    @property
    def status(self):
        return self.page.status

    @property
    def ct(self):
        """Content type of the current page."""
        return self.page.content_type

    @property
    def base(self):
        return self.page.base

    @property
    def content(self):
        return self.page.content

    @property
    def links(self):
        return self.page.links

    @property
    def forms(self):
        return self.page.forms

    @property
    def current_form(self):
        return self.page.form

    @property
    def is_html(self):
        return self.page.is_html

    @property
    def title(self):
        """Contents of the page's <title>, or None for non-HTML pages."""
        if not self.is_html:
            return None
        return get_title(self.page.content)

    @property
    def history_depth(self):
        return len(self.history)

    def success(self):
        """True if the last exchange returned a 2xx response."""
        return self.page.response is not None and is_success(self.page.status)

    def content_as(self, format="html"):
        """
        The current content rendered as "html", "text" or "markdown".

        Raises:
            ValueError: For an unknown format
        """
        return render_content(self.page.content, format, self.is_html, self.page.base or "")

    def save_content(self, file_path, format="html"):
        """Write the current content to file_path and return the path."""
        return save_content(file_path, self.content_as(format))

    # Headers

    def add_header(self, name, value):
        """
        Send a header with every request.

        The header lives in the shared header table, not in the page
        state, so going back does not remove it.
        """
        self.headers[name] = value

    def delete_header(self, name):
        """Stop sending a header added with add_header()."""
        self.headers.pop(name, None)

    # Fetching

    def get(self, uri):
        """
        Fetch a URL, resolved against the current page's base.

        Args:
            uri: Absolute or relative URL

        Returns:
            requests.Response: The response, successful or not
        """
        url = resolve_url(uri, self.page.base)
        return self.request(requests.Request("GET", url))

    def reload(self):
        """
        Repeat the last request.

        Returns:
            requests.Response: The response, or None if nothing was fetched yet
        """
        if self._request is None:
            self.warn("Can't reload: no request has been made")
            return None
        return self.request(self._request)

    def back(self):
        """
        Return to the previous page.

        Returns:
            bool: False if there was no previous page
        """
        entry = self.history.pop()
        if entry is None:
            self.warn("Can't go back: already at the first page")
            return False

        self.page = entry.page
        self._last_uri = entry.last_uri
        self._request = entry.request
        return True

    def request(self, request):
        """
        Issue a request and make its response the current page.

        A Referer header for the last successfully fetched page and every
        entry of the header table are added to the request first. Note
        that request is modified.

        Args:
            request: requests.Request to send

        Returns:
            requests.Response: The final response, after redirects

        Raises:
            ResponseError: If autocheck is on and the exchange failed
        """
        headers = CaseInsensitiveDict(request.headers or {})
        if self._last_uri:
            headers["Referer"] = self._last_uri
        self.headers.apply(headers)
        request.headers = headers

        self._request = request
        response = self._send(request)
        self._update_page(request, response)

        if self.autocheck and not self.success():
            raise ResponseError(
                f"Error {request.method}ing {request.url}: {response.status_code} {response.reason}",
                response,
            )
        return response

    def _send(self, request):
        """
        Send a request, following redirects one hop at a time.

        A URL that cannot be prepared, whether requested or sent back in a
        Location header, fails the exchange like any other transport error.
        """
        self._redirected_uri = request.url
        history = []
        prepared = None

        try:
            prepared = self.transport.prepare_request(request)
            self._redirected_uri = prepared.url

            while True:
                # Proxy and certificate settings from the environment
                settings = self.transport.merge_environment_settings(
                    prepared.url, {}, None, None, None
                )
                response = self.transport.send(
                    prepared, allow_redirects=False, timeout=self.timeout, **settings
                )

                target = self.transport.get_redirect_target(response)
                if target is None:
                    break
                if len(history) >= self.max_redirects:
                    self.warn(f"Stopped after {self.max_redirects} redirects at {response.url}")
                    break

                history.append(response)
                prepared = self._redirect_request(request, prepared, response, target)
        except requests.RequestException as e:
            # The failing hop is the one _redirected_uri names
            if prepared is not None and prepared.url != self._redirected_uri:
                prepared = None
            response = error_response(self._redirected_uri, e, prepared)

        response.history = history
        return response

    def _redirect_request(self, request, prepared, response, target):
        """
        Build the next hop of a redirect chain.

        The method follows the usual requests rules, except that a POST is
        always turned into a GET the way browsers do it, whatever the
        redirect status.
        """
        url = resolve_url(target, response.url)
        self._redirected_uri = url

        probe = prepared.copy()
        self.transport.rebuild_method(probe, response)
        method = probe.method
        if method == "POST":
            method = "GET"

        headers = CaseInsensitiveDict(request.headers)
        hop = requests.Request(method, url, headers=headers)
        if method == request.method:
            hop.data = request.data
            hop.files = request.files
            hop.json = request.json
        else:
            for name in BODY_HEADERS:
                headers.pop(name, None)

        # Cookies set along the way are already in the session jar
        return self.transport.prepare_request(hop)

    def _update_page(self, request, response):
        """Derive the page state from a completed exchange."""
        page = PageState(
            requested_uri=request.url,
            uri=self._redirected_uri,
            response=response,
            status=response.status_code,
            content_type=content_type(response),
            base=response_base(response),
            content=response.text,
        )

        if is_success(response.status_code):
            self._last_uri = page.uri

        if page.is_html:
            soup = make_soup(page.content)
            page.base = find_base_href(soup, page.base)
            page.forms = parse_forms(soup, page.base)
            page.links = extract_links(soup, page.base)
            if page.forms:
                page.form = page.forms[0]

        self.page = page

    # Links

    def find_link(self, **criteria):
        """
        Find a link on the current page.

        Keyword Args:
            text: Exact link text
            text_regex: Pattern (string or compiled) searched in the text
            url: Exact URL as written in the page
            url_regex: Pattern searched in the URL
            n: 1-based ordinal among matching links (default 1), or "all"

        Returns:
            The matching Link, None if there is none, or a list of links
            when n is "all"
        """
        return LinkCriteria.from_kwargs(self.warn, **criteria).find(self.page.links)

    def find_all_links(self, **criteria):
        """Every link matching the criteria, in page order."""
        criteria["n"] = ALL
        return self.find_link(**criteria)

    def follow_link(self, **criteria):
        """
        Follow the link selected by find_link() criteria.

        Returns:
            requests.Response: The response, or None if no link matched
        """
        if criteria.get("n") == ALL:
            del criteria["n"]
            self.warn('follow_link(n="all") is not valid')

        link = self.find_link(**criteria)
        if link is None:
            return None

        self._push_history()
        return self.get(link.url)

    def follow(self, link):
        """
        Follow a link by 0-based position or by a pattern matched on its text.

        Prefer follow_link(), which accepts the full set of criteria.

        Returns:
            bool: True if a link was followed, None otherwise
        """
        links = self.page.links
        if re.fullmatch(r"\d+", str(link)):
            index = int(link)
            if index >= len(links):
                self.warn(
                    f"Link number {index} is greater than maximum link "
                    f"{len(links) - 1} on this page ({self.uri})"
                )
                return None
            target = links[index]
        else:
            target = LinkCriteria(text_regex=str(link)).find(links)
            if target is None:
                self.warn(f"Can't find any link matching {link} on this page ({self.uri})")
                return None

        self._push_history()
        self.get(target.url)
        return True

    # Form selection

    def form_number(self, number):
        """
        Select the number-th form on the page (1-based).

        Args:
            number: Form number, as an int or a string of digits

        Returns:
            bool: False, with a warning, if there is no such form
        """
        number = int(number)
        forms = self.page.forms
        if 1 <= number <= len(forms):
            self.page.select_form(forms[number - 1])
            return True
        self.warn(f"There is no form numbered {number}")
        return False

    def form_name(self, name):
        """
        Select the first form whose name attribute equals name.

        Returns:
            bool: False, with a warning, if no form has that name
        """
        matches = [form for form in self.page.forms if form.name == name]
        if not matches:
            self.warn(f'There is no form named "{name}"')
            return False

        if len(matches) > 1:
            self.warn(f"There are {len(matches)} forms named {name}. The first one was used.")
        self.page.select_form(matches[0])
        return True

    def form(self, number_or_name):
        """Select a form by number if the argument is all digits, else by name."""
        if re.fullmatch(r"\d+", str(number_or_name)):
            return self.form_number(int(number_or_name))
        return self.form_name(number_or_name)

    # Form filling

    def _require_form(self):
        if self.page.form is None:
            raise BrowserStateError("No form selected on the current page")
        return self.page.form

    def field(self, name, value, number=1):
        """
        Set the value of a field of the selected form.

        Args:
            name: Field name
            value: New value
            number: Which of several same-named fields to set (1-based)

        Raises:
            BrowserStateError: If no form is selected
            FormError: If there is no such field or the value is illegal
        """
        form = self._require_form()
        inp = form.find_input(name, occurrence=number or 1)
        if inp is None:
            raise FormError(f"No field {name!r} number {number} in form")
        inp.value = value

    def set_fields(self, fields):
        """
        Set several fields of the selected form.

        Args:
            fields: Mapping of field name to value, or to a (value, number)
                tuple to pick one of several same-named fields
        """
        self._require_form()
        for name, value in fields.items():
            if isinstance(value, (tuple, list)):
                self.field(name, value[0], value[1])
            else:
                self.field(name, value)

    def tick(self, name, value, set=True):
        """
        Tick the first checkbox called name that has the given value.

        Args:
            name: Checkbox name
            value: The checkbox's value
            set: Pass False to untick instead

        Returns:
            bool: False, with a warning, if no such checkbox exists
        """
        checkbox = find_checkbox(self._require_form(), name, value)
        if checkbox is None:
            self.warn(f'No checkbox "{name}" for value "{value}" in form')
            return False

        checkbox.value = value if set else None
        return True

    def untick(self, name, value):
        """Untick a checkbox; shorthand for tick(name, value, False)."""
        return self.tick(name, value, False)

    # Form submission

    def click(self, button=None, x=1, y=1):
        """
        Click a button of the selected form.

        Args:
            button: Name of the button; None clicks the first button
            x: Horizontal click coordinate, for image buttons
            y: Vertical click coordinate, for image buttons

        Returns:
            requests.Response: The response
        """
        submission = self._require_form().click(button, x, y)
        self._push_history()
        return self.request(submission)

    def submit(self):
        """Submit the selected form without clicking any button."""
        submission = self._require_form().make_request()
        self._push_history()
        return self.request(submission)

    def submit_form(self, **options):
        """
        Select, fill in and submit a form in one call.

        Keyword Args:
            form_number: Select the form with this 1-based number
            form_name: Select the form with this name
            fields: Mapping passed to set_fields()
            button: Button to click; the form is submitted without a
                click if this is missing
            x: Horizontal click coordinate (default 0)
            y: Vertical click coordinate (default 0)

        Returns:
            requests.Response: The response
        """
        for key in options:
            if key not in SUBMIT_FORM_OPTIONS:
                self.warn(f'Unknown submit_form parameter "{key}"')

        if options.get("form_number"):
            self.form_number(options["form_number"])
        elif options.get("form_name"):
            self.form_name(options["form_name"])

        fields = options.get("fields")
        if fields:
            if hasattr(fields, "items"):
                self.set_fields(fields)
            else:
                self.warn("submit_form fields must be a mapping of name to value")

        if options.get("button"):
            return self.click(options["button"], options.get("x") or 0, options.get("y") or 0)
        return self.submit()

    # History

    def _push_history(self):
        self.history.push(HistoryEntry(
            page=self.page,
            last_uri=self._last_uri,
            request=self._request,
        ))

    def __repr__(self):
        return f"<Browser uri={self.uri!r} status={self.status!r} history={len(self.history)}>"
