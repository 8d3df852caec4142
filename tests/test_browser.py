import re

import pytest
import requests

from webmech import Browser, BrowserStateError, FormError, HeaderTable, ResponseError
from webmech.core.headers import DEFAULT_HEADERS

from .conftest import serve

HOME = "http://example.com/"

HOME_HTML = """
<html>
<head><title> Example   Home </title></head>
<body>
  <a href="/a">First</a>
  <a href="/b">Second</a>
  <a href="/b">Third</a>
  <a href="page2.html" name="next">Next page</a>
  <form name="search" action="/search">
    <input name="q" value="">
    <input type="checkbox" name="opt" value="yes">
    <input type="submit" name="go" value="Go">
  </form>
  <form name="login" method="post" action="/login">
    <input name="user">
    <input name="user">
    <input type="submit" name="enter" value="Enter">
  </form>
  <form name="login"></form>
</body>
</html>
"""

PAGE2_HTML = """
<html><head><title>Page 2</title></head>
<body><a href="/">Home</a><form action="/p2"><input name="x"></form></body></html>
"""


@pytest.fixture
def site(http):
    serve(http, HOME, HOME_HTML)
    serve(http, HOME + "page2.html", PAGE2_HTML)
    serve(http, HOME + "a", "<p>A</p>")
    serve(http, HOME + "b", "<p>B</p>")
    return http


@pytest.fixture
def home(browser, site):
    browser.get(HOME)
    return browser


def test_fresh_browser_has_no_page(browser):
    assert browser.uri is None
    assert browser.response is None
    assert not browser.success()
    assert browser.links == []
    assert browser.forms == []
    assert browser.current_form is None


def test_get_derives_page_state(home):
    assert home.success()
    assert home.status == 200
    assert home.uri == HOME
    assert home.ct == "text/html"
    assert home.is_html
    assert home.base == HOME
    assert home.title == "Example Home"
    assert len(home.links) == 4
    assert [f.name for f in home.forms] == ["search", "login", "login"]
    assert home.current_form is home.forms[0]
    assert home.response is home.res


def test_non_html_has_no_links_or_forms(browser, http):
    http.get(HOME + "data.json", text='{"a": "<a href=/x>x</a>"}',
             headers={"Content-Type": "application/json"})
    browser.get(HOME + "data.json")

    assert browser.success()
    assert not browser.is_html
    assert browser.links == []
    assert browser.forms == []
    assert browser.current_form is None
    assert browser.title is None


def test_relative_get_uses_base(home, site):
    home.get("page2.html")

    assert home.uri == HOME + "page2.html"
    assert home.title == "Page 2"


def test_base_element_overrides_response_url(browser, http):
    serve(http, HOME + "x/", '<base href="http://other.test/root/"><a href="y">Y</a>')
    browser.get(HOME + "x/")

    assert browser.base == "http://other.test/root/"
    assert browser.links[0].url_abs == "http://other.test/root/y"


def test_find_link_example(home):
    assert home.find_link(url="/b").text == "Second"
    assert home.find_link(url="/b", n=2).text == "Third"
    assert [l.text for l in home.find_link(url="/b", n="all")] == ["Second", "Third"]
    assert [l.text for l in home.find_all_links(url_regex="^/")] == ["First", "Second", "Third"]
    assert home.find_link(text="Nope") is None


def test_find_link_warns_on_unknown_criteria(home, warnings_seen):
    assert home.find_link(txt="First").url == "/a"
    assert warnings_seen == ['Unknown link-finding parameter "txt"']


def test_follow_link_pushes_history(home):
    response = home.follow_link(text_regex=re.compile("next", re.I))

    assert response.status_code == 200
    assert home.uri == HOME + "page2.html"
    assert home.history_depth == 1


def test_follow_link_without_match_changes_nothing(home):
    page = home.page

    assert home.follow_link(text="Missing") is None
    assert home.page is page
    assert home.history_depth == 0


def test_follow_link_rejects_all(home, warnings_seen):
    home.follow_link(n="all")

    assert home.uri == HOME + "a"
    assert warnings_seen == ['follow_link(n="all") is not valid']


def test_back_restores_previous_page(home):
    form = home.current_form
    home.follow_link(url="/a")
    assert home.uri == HOME + "a"

    assert home.back() is True
    assert home.uri == HOME
    assert [l.url for l in home.links][:2] == ["/a", "/b"]
    assert home.current_form.name == form.name


def test_back_on_first_page_warns(home, warnings_seen):
    assert home.back() is False
    assert home.uri == HOME
    assert warnings_seen == ["Can't go back: already at the first page"]


def test_back_restores_filled_in_forms(home, http):
    serve(http, HOME + "search", "<p>results</p>")
    home.form_number(2)
    home.field("user", "before")
    home.submit_form(form_name="search", fields={"q": "cats"}, button="go")

    home.back()
    assert home.current_form is home.forms[0]
    assert home.current_form.value("q") == "cats"
    assert home.forms[1].value("user") == "before"


def test_form_selection(home, warnings_seen):
    assert home.form_number(2) is True
    assert home.current_form is home.forms[1]

    assert home.form_number(9) is False
    assert home.current_form is home.forms[1]

    assert home.form_name("search") is True
    assert home.current_form is home.forms[0]

    assert home.form_name("login") is True
    assert home.current_form is home.forms[1]

    assert home.form_name("nope") is False
    assert warnings_seen == [
        "There is no form numbered 9",
        "There are 2 forms named login. The first one was used.",
        'There is no form named "nope"',
    ]


def test_form_dispatches_on_digits(home):
    home.form("2")
    assert home.current_form is home.forms[1]
    home.form("search")
    assert home.current_form is home.forms[0]


def test_field_and_set_fields(home):
    home.form_name("login")
    home.field("user", "first")
    home.field("user", "second", 2)
    assert [i.value for i in home.current_form.inputs[:2]] == ["first", "second"]

    home.set_fields({"user": ("third", 2)})
    assert home.current_form.inputs[1].value == "third"

    with pytest.raises(FormError):
        home.field("user", "x", 3)


def test_field_without_form_is_fatal(browser, http):
    serve(http, HOME, "<p>no forms</p>")
    browser.get(HOME)

    with pytest.raises(BrowserStateError):
        browser.field("q", "x")
    with pytest.raises(BrowserStateError):
        browser.submit()


def test_tick_and_untick(home):
    home.form_number(1)
    checkbox = home.current_form.find_input("opt")

    home.tick("opt", "yes")
    assert checkbox.value == "yes"

    home.untick("opt", "yes")
    assert checkbox.value is None


def test_tick_missing_checkbox_warns(home, warnings_seen):
    assert home.tick("opt", "no") is False
    assert warnings_seen == ['No checkbox "opt" for value "no" in form']


def test_click_submits_get_form(home, http):
    serve(http, HOME + "search", "<p>results</p>")
    home.field("q", "kittens")
    home.tick("opt", "yes")
    home.click("go")

    assert http.last_request.url == HOME + "search?q=kittens&opt=yes&go=Go"
    assert home.uri == HOME + "search?q=kittens&opt=yes&go=Go"
    assert home.history_depth == 1


def test_submit_sends_no_button(home, http):
    serve(http, HOME + "search", "<p>results</p>")
    home.submit()

    assert http.last_request.url == HOME + "search?q="


def test_submit_form_warns_on_unknown_option(home, http, warnings_seen):
    serve(http, HOME + "login", "<p>ok</p>", method="POST")
    home.submit_form(form_number=2, fields={"user": "joe"}, colour="red")

    assert http.last_request.method == "POST"
    assert http.last_request.text == "user=joe&user="
    assert warnings_seen == ['Unknown submit_form parameter "colour"']


def test_submit_form_click_uses_zero_coordinates(browser, http):
    serve(http, HOME, '<form action="/map"><input type="image" name="pic" src="p.png"></form>')
    serve(http, HOME + "map", "<p>map</p>")
    browser.get(HOME)
    browser.submit_form(button="pic")

    assert http.last_request.url == HOME + "map?pic.x=0&pic.y=0"


def test_click_uses_one_one_by_default(browser, http):
    serve(http, HOME, '<form action="/map"><input type="image" name="pic" src="p.png"></form>')
    serve(http, HOME + "map", "<p>map</p>")
    browser.get(HOME)
    browser.click("pic")

    assert http.last_request.url == HOME + "map?pic.x=1&pic.y=1"


def test_unknown_button_leaves_history_alone(home):
    with pytest.raises(FormError):
        home.click("nope")

    assert home.history_depth == 0
    assert home.uri == HOME


def test_submit_form_accepts_digit_string_form_number(home, http):
    serve(http, HOME + "login", "<p>ok</p>", method="POST")
    home.submit_form(form_number="2")

    assert http.last_request.method == "POST"
    assert http.last_request.url == HOME + "login"


def test_post_redirect_becomes_get(home, http):
    http.post(HOME + "login", status_code=302, headers={"Location": "/welcome"})
    serve(http, HOME + "welcome", "<p>hi</p>")
    home.form_number(2)
    home.click("enter")

    methods = [(r.method, r.url) for r in http.request_history[-2:]]
    assert methods == [("POST", HOME + "login"), ("GET", HOME + "welcome")]
    assert http.last_request.body is None
    assert home.uri == HOME + "welcome"
    assert home.response.history[0].status_code == 302


def test_temporary_redirect_of_post_also_becomes_get(home, http):
    http.post(HOME + "login", status_code=307, headers={"Location": HOME + "welcome"})
    serve(http, HOME + "welcome", "<p>hi</p>")
    home.form_number(2)
    home.submit()

    assert http.last_request.method == "GET"
    assert "Content-Type" not in http.last_request.headers
    assert home.uri == HOME + "welcome"


def test_get_redirect_chain(browser, http):
    http.get(HOME + "old", status_code=301, headers={"Location": "/older"})
    http.get(HOME + "older", status_code=302, headers={"Location": "/new"})
    serve(http, HOME + "new", "<p>new</p>")
    browser.get(HOME + "old")

    assert [r.method for r in http.request_history] == ["GET", "GET", "GET"]
    assert browser.uri == HOME + "new"
    assert browser.page.requested_uri == HOME + "old"
    assert browser.success()


def test_redirect_limit(browser, http, warnings_seen):
    browser.max_redirects = 1
    http.get(HOME + "one", status_code=302, headers={"Location": "/two"})
    http.get(HOME + "two", status_code=302, headers={"Location": "/three"})
    browser.get(HOME + "one")

    assert browser.status == 302
    assert not browser.success()
    assert warnings_seen == [f"Stopped after 1 redirects at {HOME}two"]


def test_referer_is_last_successful_page(home, http):
    http.get(HOME + "missing", status_code=404, text="gone")
    home.get("/missing")
    assert http.last_request.headers["Referer"] == HOME

    home.get("/a")
    # The 404 page never becomes the referer
    assert http.last_request.headers["Referer"] == HOME
    home.get("/b")
    assert http.last_request.headers["Referer"] == HOME + "a"


def test_failed_page_is_still_installed(home, http):
    http.get(HOME + "missing", status_code=404, text="<a href='/x'>x</a>",
             headers={"Content-Type": "text/html"})
    home.get("/missing")

    assert not home.success()
    assert home.status == 404
    assert home.uri == HOME + "missing"
    assert [l.url for l in home.links] == ["/x"]


def test_transport_errors_become_responses(browser, http):
    http.get(HOME, exc=requests.exceptions.ConnectTimeout("timed out"))
    response = browser.get(HOME)

    assert response.status_code == 500
    assert not browser.success()
    assert browser.content == "timed out"
    assert browser.ct == "text/plain"


def test_unparseable_redirect_target_becomes_response(browser, http):
    serve(http, HOME, '<a href="/r">R</a>')
    http.get(HOME + "r", status_code=302, headers={"Location": "http://exa mple.com:abc/"})
    browser.get(HOME)

    response = browser.follow_link(url="/r")

    assert response.status_code == 500
    assert response.history[0].status_code == 302
    assert not browser.success()
    assert browser.uri.startswith("http://exa%20mple.com:abc")
    assert browser.history_depth == 1
    assert browser.back() is True
    assert browser.uri == HOME


def test_relative_get_without_base_becomes_response(browser, http):
    response = browser.get("page.html")

    assert response.status_code == 500
    assert not browser.success()
    assert browser.uri == "page.html"
    assert "No scheme supplied" in browser.content
    assert http.call_count == 0


def test_autocheck_raises_after_installing_page(http):
    http.get(HOME, status_code=503, text="busy")
    with Browser(autocheck=True) as browser:
        with pytest.raises(ResponseError) as excinfo:
            browser.get(HOME)

        assert excinfo.value.response.status_code == 503
        assert browser.status == 503


def test_added_headers_are_sent_and_survive_back(home, http):
    home.add_header("X-Token", "abc")
    home.follow_link(url="/a")
    assert http.last_request.headers["X-Token"] == "abc"

    home.back()
    home.follow_link(url="/b")
    assert http.last_request.headers["X-Token"] == "abc"

    home.delete_header("X-Token")
    home.get("/a")
    assert "X-Token" not in http.last_request.headers


def test_default_header_table_is_shared(http):
    serve(http, HOME, "<p>x</p>")
    first = Browser()
    second = Browser()
    first.add_header("X-Shared", "1")
    second.get(HOME)

    assert http.last_request.headers["X-Shared"] == "1"
    assert DEFAULT_HEADERS["x-shared"] == "1"


def test_private_header_table(http):
    serve(http, HOME, "<p>x</p>")
    private = Browser(headers=HeaderTable({"X-Private": "yes"}))
    Browser().add_header("X-Shared", "1")
    private.get(HOME)

    assert http.last_request.headers["X-Private"] == "yes"
    assert "X-Shared" not in http.last_request.headers


def test_header_table_overrides_request_headers(home, http):
    home.add_header("Referer", "http://elsewhere.test/")
    home.get("/a")

    assert http.last_request.headers["Referer"] == "http://elsewhere.test/"


def test_reload(home, http):
    assert home.reload().status_code == 200
    assert http.call_count == 2
    assert http.last_request.url == HOME


def test_reload_without_request(browser, warnings_seen):
    assert browser.reload() is None
    assert warnings_seen == ["Can't reload: no request has been made"]


def test_quiet_suppresses_warnings(home, warnings_seen):
    home.quiet = True
    home.back()
    home.form_number(7)

    assert warnings_seen == []


def test_follow_by_index_and_text(home):
    assert home.follow(1) is True
    assert home.uri == HOME + "b"
    home.back()

    assert home.follow("Next") is True
    assert home.uri == HOME + "page2.html"
    home.back()

    assert home.follow(40) is None
    assert home.follow("nothing like it") is None
    assert home.history_depth == 0


def test_follow_negative_number_is_a_text_pattern(home, warnings_seen):
    assert home.follow(-1) is None
    assert home.uri == HOME
    assert home.history_depth == 0
    assert warnings_seen == [f"Can't find any link matching -1 on this page ({HOME})"]


def test_user_agent(http):
    serve(http, HOME, "<p>x</p>")
    browser = Browser(agent="wonderbot 1.01")
    browser.get(HOME)
    assert http.last_request.headers["User-Agent"] == "wonderbot 1.01"

    browser.agent = "other"
    browser.reload()
    assert http.last_request.headers["User-Agent"] == "other"


def test_content_formats(home, tmp_path):
    text = home.content_as("text")
    assert "First" in text
    assert "<a" not in text

    markdown = home.content_as("markdown")
    assert "[First](http://example.com/a)" in markdown

    path = home.save_content(str(tmp_path / "out" / "page.html"))
    with open(path, encoding="utf-8") as f:
        assert f.read() == home.content

    with pytest.raises(ValueError):
        home.content_as("pdf")
