import pytest
import requests_mock

from webmech import Browser
from webmech.core.headers import DEFAULT_HEADERS

HTML = {"Content-Type": "text/html; charset=utf-8"}


@pytest.fixture(autouse=True)
def clean_default_headers():
    DEFAULT_HEADERS.clear()
    yield
    DEFAULT_HEADERS.clear()


@pytest.fixture
def http():
    with requests_mock.Mocker() as m:
        yield m


@pytest.fixture
def warnings_seen():
    return []


@pytest.fixture
def browser(http, warnings_seen):
    b = Browser(onwarn=warnings_seen.append)
    yield b
    b.close()


def serve(http, url, body, method="GET", **kwargs):
    """Register an HTML page on the mocker."""
    headers = dict(HTML)
    headers.update(kwargs.pop("headers", {}))
    return http.register_uri(method, url, text=body, headers=headers, **kwargs)
