"""Portal login and session-cookie capture."""

import requests

from portal_fetcher.config import REQUEST_TIMEOUT, PortalSettings
from portal_fetcher.utils.log import log


def login(session: requests.Session, settings: PortalSettings) -> str | None:
    """
    POST the configured credentials to the portal login form.

    Returns the session cookies as a ready-to-send ``Cookie`` header value
    (``name=value`` pairs joined with ``"; "``), or ``None`` when the
    request fails or the portal sets no cookie.
    """
    payload = {
        "username": settings.username,
        "password": settings.password,
    }
    try:
        # The session cookie is set on the login response itself; a
        # redirect would hand it to the jar and hide it from resp.cookies.
        resp = session.post(
            settings.login_url,
            data=payload,
            timeout=REQUEST_TIMEOUT,
            allow_redirects=False,
        )
    except requests.RequestException as exc:
        log.error("[LOGIN] Login POST failed: %s", exc)
        return None

    cookies = [f"{c.name}={c.value}" for c in resp.cookies]
    if not cookies:
        log.error("[LOGIN] Portal returned no session cookie (HTTP %s)", resp.status_code)
        return None

    log.info("[LOGIN] Login successful (HTTP %s). Cookies: %s",
             resp.status_code, [c.name for c in resp.cookies])
    return "; ".join(cookies)
