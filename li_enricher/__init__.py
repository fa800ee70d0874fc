"""Flask API and helpers for enriching company data from LinkedIn pages and search."""

__version__ = "1.0.0"