"""HTTP fetching of company pages and session validation."""

import logging

import requests

logger = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/107.0.0.0 Safari/537.36"
)
ACCEPT_LANGUAGE = "en-US,en;q=0.9"
FEED_URL = "https://www.linkedin.com/feed/"
SESSION_COOKIE_NAME = "li_at"
REQUEST_TIMEOUT = 120


class ScraperError(Exception):
    """Raised when a page cannot be fetched."""


def _new_session(proxy_url: str) -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {"User-Agent": USER_AGENT, "Accept-Language": ACCEPT_LANGUAGE}
    )
    if proxy_url:
        session.proxies = {"http": proxy_url, "https": proxy_url}
    return session


def fetch_html(url: str, session_cookie: str, proxy_url: str) -> str:
    """Fetch ``url`` and return its body, sending the session cookie if given."""
    cookies = {SESSION_COOKIE_NAME: session_cookie} if session_cookie else None
    with _new_session(proxy_url) as session:
        try:
            response = session.get(url, cookies=cookies, timeout=REQUEST_TIMEOUT)
        except requests.RequestException as exc:
            raise ScraperError(f"http get request failed: {exc}") from exc
    if not 200 <= response.status_code < 300:
        raise ScraperError(f"bad status code: {response.status_code}")
    return response.text


def validate_session(session_cookie: str, proxy_url: str) -> bool:
    """Return whether the feed page answers 200 for the given session cookie.

    Redirects are not followed, so an expired session (which redirects to
    the login page) reports as invalid.
    """
    with _new_session(proxy_url) as session:
        try:
            response = session.get(
                FEED_URL,
                cookies={SESSION_COOKIE_NAME: session_cookie},
                allow_redirects=False,
                timeout=REQUEST_TIMEOUT,
            )
        except requests.RequestException as exc:
            raise ScraperError(f"request to validation URL failed: {exc}") from exc
    return response.status_code == 200