"""HTTP session factory for the portal fetcher."""

import requests
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from portal_fetcher.config import MAX_RETRIES, USER_AGENT


def build_session(verify_ssl: bool = True) -> requests.Session:
    """Return a ``requests.Session`` with retry logic and keep-alive
    pre-configured."""
    session = requests.Session()
    retry = Retry(
        total=MAX_RETRIES,
        backoff_factor=0.5,
        status_forcelist=[500, 502, 503, 504],
    )
    adapter = HTTPAdapter(max_retries=retry)
    session.mount("http://", adapter)
    session.mount("https://", adapter)
    session.verify = verify_ssl
    session.headers.update({
        "User-Agent": USER_AGENT,
        "Accept": (
            "text/html,application/xhtml+xml,application/xml;q=0.9,"
            "*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "Connection": "keep-alive",
    })
    return session


def cookie_headers(cookie: str) -> dict[str, str]:
    """Headers that replay the portal session *cookie* on a request."""
    return {"Cookie": cookie}
