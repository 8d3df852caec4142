#!/usr/bin/env python3
"""
HTML form module.

This module parses the <form> elements of a page into plain Form and
Input objects and turns a filled-in form back into an outgoing request.

Forms hold no references into the parse tree, so a Form can be copied
with copy.deepcopy and the copy is fully independent of the original.
"""

from urllib.parse import urlencode, urljoin, urlparse, urlunparse

import requests

from ..core.errors import FormError
from .parser import make_soup, trimmed_text

URLENCODED = "application/x-www-form-urlencoded"
MULTIPART = "multipart/form-data"

# Input types that submit the form when clicked
CLICKABLE_TYPES = ("submit", "image")

# Input types whose value is either one of their options or None
TOGGLE_TYPES = ("checkbox", "radio", "option")

# <input> types that never contribute to the submission
IGNORED_TYPES = ("reset", "button")


class Input:
    """
    One named control of a form.

    Choice controls (checkboxes, radio groups, selects and the options of
    a multiple select) carry a list of possible values and refuse any
    value outside it.
    """

    def __init__(self, name, type="text", value=None, options=None,
                 disabled=False, readonly=False, attrs=None):
        self.name = name
        self.type = type
        self.options = options
        self.disabled = disabled
        self.readonly = readonly
        self.attrs = attrs or {}
        self._value = value

    @property
    def value(self):
        return self._value

    @value.setter
    def value(self, value):
        if self.options is not None and value not in self.possible_values():
            raise FormError(
                f"Illegal value {value!r} for field {self.name!r}; "
                f"expected one of {self.possible_values()!r}"
            )
        self._value = value

    def possible_values(self):
        """
        List the values this input accepts.

        Returns:
            list: Allowed values (None means "unchecked" for toggles), or an
            empty list for free-text inputs
        """
        if self.options is None:
            return []
        if self.type in TOGGLE_TYPES:
            return [None] + [v for v in self.options if v is not None]
        return list(self.options)

    @property
    def is_clickable(self):
        return self.type in CLICKABLE_TYPES

    def click_pairs(self, x, y):
        """Name/value pairs submitted when this input is the clicked one."""
        if self.type == "image":
            prefix = f"{self.name}." if self.name else ""
            return [(prefix + "x", str(x)), (prefix + "y", str(y))]
        if self.name:
            return [(self.name, self.value or "")]
        return []

    def __repr__(self):
        return f"<Input {self.type} {self.name}={self.value!r}>"


class Form:
    """
    A parsed HTML form.

    Inputs are kept in document order. The same name may appear several
    times; occurrences are addressed with 1-based numbers.
    """

    def __init__(self, action, method="GET", enctype=URLENCODED, name=None,
                 attrs=None, inputs=None):
        self.action = action
        self.method = method
        self.enctype = enctype
        self.name = name
        self.attrs = attrs or {}
        self.inputs = inputs or []

    def attr(self, name):
        """Return an attribute of the <form> element, or None."""
        return self.attrs.get(name)

    def find_input(self, name, type=None, occurrence=1):
        """
        Find the occurrence-th input with the given name (and type).

        Args:
            name: Input name, or None to match any input
            type: Optional input type to restrict the search to
            occurrence: 1-based index among the matching inputs

        Returns:
            Input: The input, or None if there are fewer matches
        """
        seen = 0
        for inp in self.inputs:
            if name is not None and inp.name != name:
                continue
            if type is not None and inp.type != type:
                continue
            seen += 1
            if seen == occurrence:
                return inp
        return None

    def _require_input(self, name, occurrence=1):
        inp = self.find_input(name, occurrence=occurrence)
        if inp is None:
            raise FormError(f"No such field {name!r}")
        return inp

    def value(self, name):
        """Current value of the first input called name."""
        return self._require_input(name).value

    def set_value(self, name, value, occurrence=1):
        """
        Set the value of a named input.

        Raises:
            FormError: If there is no such input or the value is not allowed
        """
        self._require_input(name, occurrence).value = value

    def possible_values(self, name):
        return self._require_input(name).possible_values()

    def form_data(self, clicked=None, x=1, y=1):
        """
        Compute the name/value pairs this form submits.

        Args:
            clicked: The clickable Input that triggered the submission
            x: Horizontal click coordinate for image buttons
            y: Vertical click coordinate for image buttons

        Returns:
            list: (name, value) tuples in document order
        """
        pairs = []
        for inp in self.inputs:
            if inp.disabled:
                continue
            if inp.is_clickable:
                if inp is clicked:
                    pairs.extend(inp.click_pairs(x, y))
                continue
            if not inp.name:
                continue
            if inp.value is None and inp.options is not None:
                continue
            pairs.append((inp.name, inp.value or ""))
        return pairs

    def make_request(self, pairs=None):
        """
        Build the request that submits this form without clicking a button.

        Args:
            pairs: Name/value pairs to send (defaults to form_data())

        Returns:
            requests.Request: The unsent request
        """
        if pairs is None:
            pairs = self.form_data()

        if self.method == "POST":
            if self.enctype == MULTIPART:
                files = [(name, (None, value)) for name, value in pairs]
                return requests.Request("POST", self.action, files=files)
            return requests.Request("POST", self.action, data=pairs)

        # GET submissions replace any query string already on the action
        url = urlunparse(urlparse(self.action)._replace(query=urlencode(pairs)))
        return requests.Request("GET", url)

    def click(self, button=None, x=1, y=1):
        """
        Build the request sent by clicking a submit button.

        With no button name the first clickable input is used; a form
        without buttons is submitted as if by make_request().

        Args:
            button: Name of the submit or image button to click
            x: Horizontal click coordinate
            y: Vertical click coordinate

        Returns:
            requests.Request: The unsent request

        Raises:
            FormError: If there is no clickable input with that name
        """
        clickables = [i for i in self.inputs if i.is_clickable and not i.disabled]
        if button is None:
            clicked = clickables[0] if clickables else None
        else:
            clicked = next((i for i in clickables if i.name == button), None)
            if clicked is None:
                raise FormError(f"No clickable input with name {button!r}")
        return self.make_request(self.form_data(clicked, x, y))

    def dump(self):
        """Render the form as indented text, one input per line."""
        header = f"{self.method} {self.action}"
        if self.enctype != URLENCODED:
            header += f" ({self.enctype})"
        if self.name:
            header += f" [{self.name}]"

        lines = [header]
        for inp in self.inputs:
            value = "" if inp.value is None else inp.value
            line = f"  {inp.name or ''}={value} ({inp.type})"
            if inp.options is not None:
                choices = "|".join("<UNDEF>" if v is None else v for v in inp.possible_values())
                line += f" [{choices}]"
            if inp.disabled:
                line += " (disabled)"
            lines.append(line)
        return "\n".join(lines)

    def __repr__(self):
        return f"<Form {self.method} {self.action} name={self.name!r} inputs={len(self.inputs)}>"


def _option_value(option):
    value = option.get("value")
    if value is None:
        value = trimmed_text(option.get_text())
    return value


def _select_inputs(tag, name, disabled):
    options = tag.find_all("option")
    values = [_option_value(o) for o in options]
    selected = [v for o, v in zip(options, values) if o.has_attr("selected")]

    if tag.has_attr("multiple"):
        # One toggle per option so each can be set independently
        return [
            Input(name, "option", value=v if o.has_attr("selected") else None,
                  options=[v], disabled=disabled, attrs=dict(o.attrs))
            for o, v in zip(options, values)
        ]

    if selected:
        value = selected[0]
    else:
        value = values[0] if values else None
    return [Input(name, "select", value=value, options=values,
                  disabled=disabled, attrs=dict(tag.attrs))]


def _textarea_value(tag):
    text = tag.get_text()
    # A single newline right after <textarea> is not part of the value
    if text.startswith("\r\n"):
        return text[2:]
    if text.startswith("\n"):
        return text[1:]
    return text


def _parse_form(form_tag, base):
    action = form_tag.get("action")
    if action:
        action = urljoin(base, action.strip()) if base else action.strip()
    else:
        action = base or ""

    method = "POST" if (form_tag.get("method") or "").strip().upper() == "POST" else "GET"
    enctype = (form_tag.get("enctype") or URLENCODED).strip().lower()

    form = Form(action, method=method, enctype=enctype,
                name=form_tag.get("name"), attrs=dict(form_tag.attrs))
    radios = {}

    for tag in form_tag.find_all(["input", "textarea", "select", "button"]):
        name = tag.get("name")
        disabled = tag.has_attr("disabled")
        readonly = tag.has_attr("readonly")
        attrs = dict(tag.attrs)

        if tag.name == "select":
            form.inputs.extend(_select_inputs(tag, name, disabled))
            continue

        if tag.name == "textarea":
            form.inputs.append(Input(name, "textarea", value=_textarea_value(tag),
                                     disabled=disabled, readonly=readonly, attrs=attrs))
            continue

        if tag.name == "button":
            kind = (tag.get("type") or "submit").strip().lower()
            if kind != "submit":
                continue
            form.inputs.append(Input(name, "submit", value=tag.get("value", ""),
                                     disabled=disabled, attrs=attrs))
            continue

        kind = (tag.get("type") or "text").strip().lower()
        if kind in IGNORED_TYPES:
            continue

        if kind == "checkbox":
            on_value = tag.get("value", "on")
            form.inputs.append(Input(name, "checkbox",
                                     value=on_value if tag.has_attr("checked") else None,
                                     options=[on_value], disabled=disabled, attrs=attrs))
        elif kind == "radio":
            on_value = tag.get("value", "on")
            group = radios.get(name)
            if group is None:
                group = Input(name, "radio", options=[], disabled=disabled, attrs=attrs)
                radios[name] = group
                form.inputs.append(group)
            group.options.append(on_value)
            if tag.has_attr("checked"):
                group._value = on_value
        else:
            form.inputs.append(Input(name, kind, value=tag.get("value", ""),
                                     disabled=disabled, readonly=readonly, attrs=attrs))

    return form


def parse_forms(markup, base=None):
    """
    Parse every <form> on a page.

    Args:
        markup: HTML string or BeautifulSoup object
        base: Base URL used to resolve form actions

    Returns:
        list: Form objects in document order
    """
    soup = make_soup(markup)
    return [_parse_form(form_tag, base) for form_tag in soup.find_all("form")]
