"""HTTP routes of the enricher API."""

import logging
from http import HTTPStatus

from flask import Blueprint, Flask, jsonify, request

from .services import AuthService, CompanyService, ServiceError, search_companies

logger = logging.getLogger(__name__)

API_PREFIX = "/api/v1"
SESSION_HEADER = "X-Linkedin-Session-Cookie"
PROXY_HEADER = "X-Proxy-Url"


def create_app(company_service=None, auth_service=None) -> Flask:
    """Build the Flask application with the API routes mounted under /api/v1."""
    companies = company_service if company_service is not None else CompanyService()
    auth = auth_service if auth_service is not None else AuthService()

    app = Flask(__name__)
    api = Blueprint("api", __name__, url_prefix=API_PREFIX)

    @api.get("/validate-cookie")
    def validate_cookie():
        session_cookie = request.headers.get(SESSION_HEADER, "")
        if not session_cookie:
            return (
                jsonify({"error": f"Header '{SESSION_HEADER}' is required"}),
                HTTPStatus.BAD_REQUEST,
            )
        proxy_url = request.headers.get(PROXY_HEADER, "")
        try:
            is_valid = auth.validate_session(session_cookie, proxy_url)
        except ServiceError as exc:
            logger.error("Error during session validation: %s", exc)
            return jsonify({"error": str(exc)}), HTTPStatus.INTERNAL_SERVER_ERROR
        return jsonify({"valid": is_valid}), HTTPStatus.OK

    @api.get("/companies/<slug>")
    def scrape_company(slug: str):
        session_cookie = request.headers.get(SESSION_HEADER, "")
        proxy_url = request.headers.get(PROXY_HEADER, "")
        if not slug:
            return (
                jsonify({"error": "Company slug cannot be empty"}),
                HTTPStatus.BAD_REQUEST,
            )
        try:
            data, scrape_type = companies.enrich_company_data(
                slug, session_cookie, proxy_url
            )
        except ServiceError as exc:
            logger.error("Error from service: %s", exc)
            return (
                jsonify(
                    {"error": "Failed to process company data", "details": str(exc)}
                ),
                HTTPStatus.INTERNAL_SERVER_ERROR,
            )
        return jsonify({"scrapeType": scrape_type, "data": data}), HTTPStatus.OK

    @api.get("/companies/search/<query>")
    def search(query: str):
        session_cookie = request.headers.get(SESSION_HEADER, "")
        if not query:
            return (
                jsonify({"error": "Search query cannot be empty"}),
                HTTPStatus.BAD_REQUEST,
            )
        if not session_cookie:
            return (
                jsonify({"error": f"{SESSION_HEADER} header is required"}),
                HTTPStatus.UNAUTHORIZED,
            )
        try:
            results = search_companies(query, session_cookie)
        except ServiceError as exc:
            return (
                jsonify({"error": "Failed to execute search", "details": str(exc)}),
                HTTPStatus.INTERNAL_SERVER_ERROR,
            )
        # An empty result set is reported as JSON null.
        payload = [result.to_dict() for result in results] or None
        return jsonify(payload), HTTPStatus.OK

    app.register_blueprint(api)
    return app