"""
Tests for portal login, session building and cookie handling.
"""

import unittest
from unittest.mock import MagicMock

import requests

from portal_fetcher.auth import login
from portal_fetcher.config import PortalSettings
from portal_fetcher.session import build_session, cookie_headers


SETTINGS = PortalSettings(
    login_url="https://portal.example/login",
    resource_url="https://portal.example/library/",
    username="alice",
    password="s3cret",
)


def _login_response(cookies=None, status_code=302):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.cookies = requests.cookies.RequestsCookieJar()
    for name, value in (cookies or {}).items():
        resp.cookies.set(name, value)
    return resp


class TestBuildSession(unittest.TestCase):
    def test_session_has_keep_alive(self):
        session = build_session()
        self.assertEqual(session.headers["Connection"], "keep-alive")

    def test_session_has_user_agent(self):
        session = build_session()
        self.assertIn("Mozilla", session.headers["User-Agent"])

    def test_verify_ssl_flag(self):
        self.assertFalse(build_session(verify_ssl=False).verify)

    def test_retry_adapter_mounted(self):
        adapter = build_session().get_adapter("https://portal.example/")
        self.assertIn(503, adapter.max_retries.status_forcelist)


class TestCookieHeaders(unittest.TestCase):
    def test_cookie_header(self):
        self.assertEqual(cookie_headers("SESSION=abc"), {"Cookie": "SESSION=abc"})


class TestLogin(unittest.TestCase):
    def test_posts_credentials_without_following_redirects(self):
        session = MagicMock()
        session.post.return_value = _login_response({"SESSION": "abc"})
        login(session, SETTINGS)
        args, kwargs = session.post.call_args
        self.assertEqual(args[0], "https://portal.example/login")
        self.assertEqual(kwargs["data"], {"username": "alice", "password": "s3cret"})
        self.assertFalse(kwargs["allow_redirects"])

    def test_single_cookie(self):
        session = MagicMock()
        session.post.return_value = _login_response({"SESSION": "abc"})
        self.assertEqual(login(session, SETTINGS), "SESSION=abc")

    def test_multiple_cookies_joined(self):
        session = MagicMock()
        session.post.return_value = _login_response({"SESSION": "abc", "XSRF": "t0k"})
        cookie = login(session, SETTINGS)
        self.assertEqual(sorted(cookie.split("; ")), ["SESSION=abc", "XSRF=t0k"])

    def test_no_cookie_returns_none(self):
        session = MagicMock()
        session.post.return_value = _login_response(status_code=200)
        with self.assertLogs("portal-fetcher", level="ERROR"):
            self.assertIsNone(login(session, SETTINGS))

    def test_transport_error_returns_none(self):
        session = MagicMock()
        session.post.side_effect = requests.ConnectionError("refused")
        with self.assertLogs("portal-fetcher", level="ERROR"):
            self.assertIsNone(login(session, SETTINGS))


if __name__ == "__main__":
    unittest.main()
