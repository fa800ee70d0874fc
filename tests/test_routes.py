import re
from http import HTTPStatus

import pytest
import responses

from li_enricher.routes import create_app
from li_enricher.services import ServiceError

FEED_URL = "https://www.linkedin.com/feed/"
SEARCH_URL_PATTERN = re.compile(r"https://www\.linkedin\.com/voyager/api/graphql.*")


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


class FakeCompanyService:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.calls = []

    def enrich_company_data(self, slug, session_cookie, proxy_url):
        self.calls.append((slug, session_cookie, proxy_url))
        if self.error is not None:
            raise self.error
        return self.result


class FakeAuthService:
    def __init__(self, valid=True, error=None):
        self.valid = valid
        self.error = error
        self.calls = []

    def validate_session(self, session_cookie, proxy_url):
        self.calls.append((session_cookie, proxy_url))
        if self.error is not None:
            raise self.error
        return self.valid


def make_client(company=None, auth=None):
    app = create_app(company or FakeCompanyService(), auth or FakeAuthService())
    return app.test_client()


def test_validate_cookie_requires_header():
    auth = FakeAuthService()
    response = make_client(auth=auth).get("/api/v1/validate-cookie")
    assert response.status_code == HTTPStatus.BAD_REQUEST
    assert response.get_json() == {
        "error": "Header 'X-Linkedin-Session-Cookie' is required"
    }
    assert auth.calls == []


@pytest.mark.parametrize("valid", [True, False])
def test_validate_cookie_reports_service_result(valid):
    auth = FakeAuthService(valid=valid)
    response = make_client(auth=auth).get(
        "/api/v1/validate-cookie",
        headers={
            "X-Linkedin-Session-Cookie": "token",
            "X-Proxy-Url": "http://proxy.example.com:8080",
        },
    )
    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {"valid": valid}
    assert auth.calls == [("token", "http://proxy.example.com:8080")]


def test_validate_cookie_service_error_is_500():
    auth = FakeAuthService(error=ServiceError("boom"))
    response = make_client(auth=auth).get(
        "/api/v1/validate-cookie", headers={"X-Linkedin-Session-Cookie": "token"}
    )
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.get_json() == {"error": "boom"}
    assert auth.calls == [("token", "")]


def test_validate_cookie_with_real_service_follows_no_redirect(mocked):
    mocked.add(
        responses.GET,
        FEED_URL,
        status=302,
        headers={"Location": "https://www.linkedin.com/login"},
    )
    client = create_app(company_service=FakeCompanyService()).test_client()
    response = client.get(
        "/api/v1/validate-cookie", headers={"X-Linkedin-Session-Cookie": "token"}
    )
    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {"valid": False}
    assert len(mocked.calls) == 1


def test_scrape_company_returns_data_and_type():
    data = {"name": "Acme", "headquarters": "Springfield"}
    company = FakeCompanyService(result=(data, "public"))
    response = make_client(company=company).get("/api/v1/companies/acme")
    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == {"scrapeType": "public", "data": data}
    assert company.calls == [("acme", "", "")]


def test_scrape_company_passes_headers_to_service():
    company = FakeCompanyService(result=({"name": "Acme"}, "full"))
    response = make_client(company=company).get(
        "/api/v1/companies/acme",
        headers={
            "X-Linkedin-Session-Cookie": "token",
            "X-Proxy-Url": "http://proxy.example.com:8080",
        },
    )
    assert response.get_json()["scrapeType"] == "full"
    assert company.calls == [("acme", "token", "http://proxy.example.com:8080")]


def test_scrape_company_service_error_is_500_with_details():
    company = FakeCompanyService(error=ServiceError("failed to fetch HTML", "full"))
    response = make_client(company=company).get("/api/v1/companies/acme")
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    assert response.get_json() == {
        "error": "Failed to process company data",
        "details": "failed to fetch HTML",
    }


def test_search_requires_session_cookie():
    response = make_client().get("/api/v1/companies/search/acme")
    assert response.status_code == HTTPStatus.UNAUTHORIZED
    assert response.get_json() == {
        "error": "X-Linkedin-Session-Cookie header is required"
    }


def test_search_returns_company_results(mocked):
    mocked.add(
        responses.GET,
        FEED_URL,
        status=200,
        headers={"Set-Cookie": "JSESSIONID=token; Path=/"},
    )
    body = {
        "data": {
            "data": {
                "searchDashTypeaheadByGlobalTypeahead": {
                    "elements": [
                        {
                            "suggestionType": "ENTITY_TYPEAHEAD",
                            "entityLockupView": {
                                "trackingUrn": "urn:li:company:1441",
                                "title": {"text": "Acme"},
                                "subtitle": {"text": "Software"},
                            },
                        },
                        {
                            "suggestionType": "ENTITY_TYPEAHEAD",
                            "entityLockupView": {
                                "trackingUrn": "urn:li:member:77",
                                "title": {"text": "Someone"},
                            },
                        },
                    ]
                }
            }
        }
    }
    mocked.add(responses.GET, SEARCH_URL_PATTERN, json=body, status=200)

    response = make_client().get(
        "/api/v1/companies/search/acme",
        headers={"X-Linkedin-Session-Cookie": "token"},
    )
    assert response.status_code == HTTPStatus.OK
    assert response.get_json() == [{"id": "1441", "name": "Acme", "text": "Software"}]
    assert mocked.calls[1].request.headers["csrf-token"] == "token"


def test_search_without_matches_returns_null(mocked):
    mocked.add(
        responses.GET,
        FEED_URL,
        status=200,
        headers={"Set-Cookie": "JSESSIONID=token; Path=/"},
    )
    mocked.add(responses.GET, SEARCH_URL_PATTERN, json={"data": {}}, status=200)

    response = make_client().get(
        "/api/v1/companies/search/acme",
        headers={"X-Linkedin-Session-Cookie": "token"},
    )
    assert response.status_code == HTTPStatus.OK
    assert response.get_json() is None


def test_search_failure_is_500(mocked):
    mocked.add(responses.GET, FEED_URL, status=500)
    response = make_client().get(
        "/api/v1/companies/search/acme",
        headers={"X-Linkedin-Session-Cookie": "token"},
    )
    assert response.status_code == HTTPStatus.INTERNAL_SERVER_ERROR
    payload = response.get_json()
    assert payload["error"] == "Failed to execute search"
    assert payload["details"].startswith("failed to acquire CSRF token")