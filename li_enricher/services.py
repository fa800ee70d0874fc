"""Services behind the HTTP routes: auth validation, enrichment and search."""

import json
import logging
from dataclasses import asdict, dataclass
from typing import Any

import requests

from .parser import ParseError, extract_company_json, extract_ld_json_data
from .scraper import (
    ACCEPT_LANGUAGE,
    FEED_URL,
    REQUEST_TIMEOUT,
    SESSION_COOKIE_NAME,
    USER_AGENT,
    ScraperError,
    fetch_html,
    validate_session,
)
from .summarizer import SummaryError, create_summary
from .utils import safe_get, safe_get_string

logger = logging.getLogger(__name__)

COMPANY_URL = "https://www.linkedin.com/company/{slug}"
SEARCH_URL = (
    "https://www.linkedin.com/voyager/api/graphql?includeWebMetadata=true"
    "&variables={variables}"
    "&queryId=voyagerSearchDashTypeahead.fa9acbcb761f7b5ec2c808e6da796296"
)
COMPANY_URN_PREFIX = "urn:li:company:"
JSESSIONID_COOKIE_NAME = "JSESSIONID"
_QUOTE_CHAR = '"'


class ServiceError(Exception):
    """Raised when a service operation fails.

    ``scrape_type`` names the kind of scrape that was attempted, if any.
    """

    def __init__(self, message: str, scrape_type: str = "") -> None:
        super().__init__(message)
        self.scrape_type = scrape_type


class AuthService:
    """Checks LinkedIn session cookies."""

    def validate_session(self, session_cookie: str, proxy_url: str) -> bool:
        try:
            return validate_session(session_cookie, proxy_url)
        except ScraperError as exc:
            raise ServiceError(f"session validation request failed: {exc}") from exc


class CompanyService:
    """Fetches and extracts company data."""

    def enrich_company_data(
        self, slug: str, session_cookie: str, proxy_url: str
    ) -> tuple[dict[str, Any], str]:
        """Return ``(data, scrape_type)`` where scrape_type is "full" or "public"."""
        url = COMPANY_URL.format(slug=slug)
        try:
            html = fetch_html(url, session_cookie, proxy_url)
        except ScraperError as exc:
            raise ServiceError(f"failed to fetch HTML: {exc}") from exc

        if session_cookie:
            logger.info("Service: Performing full scrape.")
            try:
                raw = extract_company_json(html)
            except ParseError as exc:
                raise ServiceError(
                    "failed to parse detailed JSON (is session cookie valid?): "
                    f"{exc}",
                    "full",
                ) from exc
            try:
                return create_summary(raw), "full"
            except SummaryError as exc:
                raise ServiceError(f"failed to summarize data: {exc}", "full") from exc

        logger.info("Service: Performing public scrape.")
        try:
            company = extract_ld_json_data(html)
        except ParseError as exc:
            raise ServiceError(
                f"failed to extract public ld+json data: {exc}", "public"
            ) from exc
        return company.to_dict(), "public"


@dataclass(frozen=True)
class SearchResult:
    """A company suggestion from the typeahead search."""

    id: str
    name: str
    text: str

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


def _search_session() -> requests.Session:
    session = requests.Session()
    session.headers.update(
        {"User-Agent": USER_AGENT, "Accept-Language": ACCEPT_LANGUAGE}
    )
    return session


def _acquire_csrf_token(
    session: requests.Session, session_cookie: str
) -> tuple[str, str]:
    """Prime the session via the feed page; return (csrf token, raw JSESSIONID)."""
    logger.info("Attempting to acquire CSRF token via /feed/")
    try:
        response = session.get(
            FEED_URL,
            cookies={SESSION_COOKIE_NAME: session_cookie},
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise ServiceError(f"priming request failed: {exc}") from exc
    if not 200 <= response.status_code < 300:
        raise ServiceError(f"priming request returned status: {response.status_code}")

    for cookie in response.cookies:
        if cookie.name == JSESSIONID_COOKIE_NAME and cookie.value is not None:
            raw_value = cookie.value
            logger.info("CSRF token acquired")
            return raw_value.strip(_QUOTE_CHAR), raw_value
    raise ServiceError("JSESSIONID cookie not found")


def _call_search_api(
    session: requests.Session,
    query: str,
    csrf_token: str,
    session_cookie: str,
    jsessionid: str,
) -> bytes:
    variables = f"(query:{query})"
    logger.info("Query variables: %s", variables)
    try:
        response = session.get(
            SEARCH_URL.format(variables=variables),
            headers={
                "accept": "application/vnd.linkedin.normalized+json+2.1",
                "csrf-token": csrf_token,
            },
            cookies={
                SESSION_COOKIE_NAME: session_cookie,
                JSESSIONID_COOKIE_NAME: jsessionid,
            },
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as exc:
        raise ServiceError(f"search request failed: {exc}") from exc
    if not 200 <= response.status_code < 300:
        logger.info("Search API response: %s", response.text)
        raise ServiceError(
            f"search request failed: {response.status_code}, content: {response.text}"
        )
    return response.content


def search_companies(query: str, session_cookie: str) -> list[SearchResult]:
    """Search companies through the typeahead API using a session cookie."""
    with _search_session() as session:
        try:
            csrf_token, jsessionid = _acquire_csrf_token(session, session_cookie)
        except ServiceError as exc:
            raise ServiceError(f"failed to acquire CSRF token: {exc}") from exc
        try:
            body = _call_search_api(
                session, query, csrf_token, session_cookie, jsessionid
            )
        except ServiceError as exc:
            raise ServiceError(f"failed to call LinkedIn search API: {exc}") from exc
    return parse_search_results(body)


def parse_search_results(api_response: bytes | str) -> list[SearchResult]:
    """Pick company entities out of a typeahead API response body."""
    try:
        data = json.loads(api_response)
    except ValueError as exc:
        raise ServiceError(f"failed to unmarshal JSON: {exc}") from exc
    if data is not None and not isinstance(data, dict):
        raise ServiceError("failed to unmarshal JSON: top level is not an object")

    elements = safe_get(
        data, "data", "data", "searchDashTypeaheadByGlobalTypeahead", "elements"
    )
    if not isinstance(elements, list):
        return []

    results = []
    for element in elements:
        if not isinstance(element, dict):
            continue
        if safe_get_string(element, "suggestionType") != "ENTITY_TYPEAHEAD":
            continue
        urn = safe_get_string(element, "entityLockupView", "trackingUrn")
        if urn.startswith(COMPANY_URN_PREFIX):
            results.append(
                SearchResult(
                    id=urn[len(COMPANY_URN_PREFIX):],
                    name=safe_get_string(element, "entityLockupView", "title", "text"),
                    text=safe_get_string(
                        element, "entityLockupView", "subtitle", "text"
                    ),
                )
            )
    return results