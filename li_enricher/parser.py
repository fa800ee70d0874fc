"""Extraction of company data embedded in company-page HTML."""

import json
import logging
from dataclasses import dataclass
from typing import Any

from bs4 import BeautifulSoup

logger = logging.getLogger(__name__)

_COMPANY_KEYS = (
    "organizationDashCompaniesByUniversalName",
    "*organizationDashCompaniesByIds",
)


class ParseError(ValueError):
    """Raised when the expected data cannot be found in the HTML."""


@dataclass
class LiCompany:
    """Company data taken from the public ld+json block."""

    name: str = ""
    description: str = ""
    website: Any = None
    slogan: str = ""
    employee_count: Any = None
    headquarters: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Return the populated fields as a JSON-ready dict, omitting empty ones."""
        result: dict[str, Any] = {}
        for key in ("name", "description"):
            if getattr(self, key):
                result[key] = getattr(self, key)
        if self.website is not None:
            result["website"] = self.website
        if self.slogan:
            result["slogan"] = self.slogan
        if self.employee_count is not None:
            result["employee_count"] = self.employee_count
        if self.headquarters:
            result["headquarters"] = self.headquarters
        return result


def _is_company_json(data: Any) -> bool:
    outer = data.get("data") if isinstance(data, dict) else None
    inner = outer.get("data") if isinstance(outer, dict) else None
    if not isinstance(inner, dict):
        return False
    return any(key in inner for key in _COMPANY_KEYS)


def extract_company_json(html_content: str) -> dict[str, Any]:
    """Return the last valid company JSON object from ``<code id="bpr-guid...">`` tags.

    Intended for pages fetched with a valid session cookie.
    """
    soup = BeautifulSoup(html_content, "html.parser")
    valid_results = []
    for tag in soup.select('code[id^="bpr-guid"]'):
        raw = tag.get_text()
        if not raw:
            continue
        try:
            parsed = json.loads(raw)
        except ValueError:
            continue
        if _is_company_json(parsed):
            valid_results.append(parsed)

    if not valid_results:
        raise ParseError("no valid company JSON object found in the HTML")
    if len(valid_results) > 1:
        logger.info(
            "Found %d valid JSON objects. Returning the last one.", len(valid_results)
        )
    logger.info("Found %d valid JSON objects in the HTML.", len(valid_results))
    return valid_results[-1]


def _headquarters(address: dict[str, Any]) -> str:
    parts = []
    for key in ("addressLocality", "addressRegion", "addressCountry"):
        value = address.get(key)
        if isinstance(value, str) and value:
            parts.append(value)
    return ", ".join(parts)


def _company_from_item(item: dict[str, Any]) -> LiCompany:
    company = LiCompany()
    for attr in ("name", "description", "slogan"):
        value = item.get(attr)
        if isinstance(value, str):
            setattr(company, attr, value)
    if "sameAs" in item:
        company.website = item["sameAs"]
    employees = item.get("numberOfEmployees")
    if isinstance(employees, dict):
        company.employee_count = employees.get("value")
    address = item.get("address")
    if isinstance(address, dict):
        company.headquarters = _headquarters(address)
    return company


def extract_ld_json_data(html_content: str) -> LiCompany:
    """Parse the public ``application/ld+json`` block and return its Organization."""
    soup = BeautifulSoup(html_content, "html.parser")
    scripts = soup.select("script[type='application/ld+json']")
    if not scripts:
        raise ParseError("could not find the ld+json script tag in the HTML")

    raw = "".join(script.get_text() for script in scripts)
    try:
        parsed = json.loads(raw)
    except ValueError as exc:
        raise ParseError(f"error parsing ld+json data: {exc}") from exc
    if not isinstance(parsed, dict):
        raise ParseError("error parsing ld+json data: top level is not an object")

    graph = parsed.get("@graph")
    if graph is None:
        graph = []
    if not isinstance(graph, list) or not all(
        item is None or isinstance(item, dict) for item in graph
    ):
        raise ParseError("error parsing ld+json data: '@graph' is not a list of objects")

    for item in graph:
        if item and item.get("@type") == "Organization":
            logger.info("Found 'Organization' profile within the ld+json data.")
            return _company_from_item(item)

    raise ParseError("no 'Organization' profile found in ld+json data")