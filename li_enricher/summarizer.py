"""Turn raw authenticated company JSON into a flat summary."""

from datetime import datetime, timezone
from typing import Any

from .utils import safe_get, safe_get_string


class SummaryError(ValueError):
    """Raised when the raw data lacks the company object."""


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def create_summary(data: dict[str, Any]) -> dict[str, Any]:
    """Build a structured summary from the raw company JSON."""
    included = data.get("included") if isinstance(data, dict) else None
    if not isinstance(included, list):
        raise SummaryError("'included' field is not a valid array")

    company = next(
        (
            item
            for item in included
            if isinstance(item, dict) and item.get("pageType") == "COMPANY"
        ),
        None,
    )
    if company is None:
        raise SummaryError("could not find company data object in 'included' array")

    summary: dict[str, Any] = {
        "name": safe_get_string(company, "name"),
        "linkedin_handle": safe_get_string(company, "universalName"),
        "linkedin_profile_url": safe_get_string(company, "url"),
        "external_id": safe_get_string(company, "entityUrn"),
        "website": safe_get_string(company, "websiteUrl"),
        "tagline": safe_get_string(company, "tagline"),
        "description": safe_get_string(company, "description"),
    }

    year = safe_get(company, "foundedOn", "year")
    if isinstance(company.get("foundedOn"), dict) and _is_number(year):
        summary["founded_year"] = int(year)

    specialities = company.get("specialities")
    if isinstance(specialities, list):
        summary["specialities"] = specialities

    emp_range = company.get("employeeCountRange")
    if isinstance(emp_range, dict):
        start, end = emp_range.get("start"), emp_range.get("end")
        if _is_number(start) and _is_number(end):
            summary["employee_count_range"] = f"{int(start)}-{int(end)}"

    summary["headquarters"] = _extract_headquarters(company)
    summary["office_locations"] = _extract_office_locations(company)
    summary["funding_summary"] = _extract_funding_summary(company)
    return summary


def _extract_headquarters(company: dict[str, Any]) -> dict[str, Any] | None:
    address = safe_get(company, "headquarter", "address")
    if not isinstance(company.get("headquarter"), dict) or not isinstance(address, dict):
        return None
    return {
        "is_headquarters": True,
        "city": safe_get_string(address, "city"),
        "state": safe_get_string(address, "geographicArea"),
        "country": safe_get_string(address, "country"),
        "postal_code": safe_get_string(address, "postalCode"),
    }


def _extract_office_locations(company: dict[str, Any]) -> list[dict[str, Any]]:
    groups = company.get("groupedLocations")
    if not isinstance(groups, list):
        return []
    offices = []
    for group in groups:
        if not isinstance(group, dict):
            continue
        locations = group.get("locations")
        if not isinstance(locations, list) or not locations:
            continue
        detail = locations[0]
        if not isinstance(detail, dict):
            continue
        address = detail.get("address")
        if not isinstance(address, dict):
            continue
        offices.append(
            {
                "is_headquarters": detail.get("headquarter"),
                "city": address.get("city"),
                "state": address.get("geographicArea"),
                "country": address.get("country"),
                "postal_code": address.get("postalCode"),
            }
        )
    return offices


def _format_unix(seconds: float) -> str | None:
    try:
        moment = datetime.fromtimestamp(int(seconds), tz=timezone.utc)
    except (OverflowError, OSError, ValueError):
        return None
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def _extract_funding_summary(company: dict[str, Any]) -> dict[str, Any] | None:
    funding = company.get("crunchbaseFundingData")
    if not isinstance(funding, dict):
        return None

    summary: dict[str, Any] = {
        "total_rounds": funding.get("numberOfFundingRounds"),
        "crunchbase_profile_url": funding.get("organizationUrl"),
        "crunchbase_funding_url": funding.get("fundingRoundsUrl"),
    }

    updated_at = funding.get("updatedAt")
    if _is_number(updated_at):
        formatted = _format_unix(updated_at)
        if formatted is not None:
            summary["data_last_updated_utc"] = formatted

    last_round = funding.get("lastFundingRound")
    if isinstance(last_round, dict):
        round_summary: dict[str, Any] = {"type": last_round.get("localizedFundingType")}
        announced = last_round.get("announcedOn")
        if isinstance(announced, dict):
            year, month, day = (announced.get(k) for k in ("year", "month", "day"))
            if _is_number(year) and _is_number(month) and _is_number(day):
                round_summary["announced_on"] = (
                    f"{int(year)}-{int(month):02d}-{int(day):02d}"
                )
        summary["last_round"] = round_summary
    return summary