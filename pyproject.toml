[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "li-enricher"
version = "1.0.0"
description = "HTTP API that enriches company data from LinkedIn company pages and search."
requires-python = ">=3.10"
keywords = ["linkedin", "enrichment", "scraping", "company", "api", "flask"]
classifiers = [
    "Development Status :: 4 - Beta",
    "Environment :: Web Environment",
    "Framework :: Flask",
    "Intended Audience :: Developers",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Internet :: WWW/HTTP :: Indexing/Search",
]
dependencies = [
    "beautifulsoup4",
    "requests",
    "flask",
]

[project.optional-dependencies]
test = [
    "pytest",
    "responses",
]

[tool.hatch.build.targets.wheel]
packages = ["li_enricher"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
