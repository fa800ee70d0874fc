# li-enricher

A Flask application and a small library for enriching company data from
LinkedIn.

It can:

- scrape a LinkedIn company page. Without a session cookie it does a public
  scrape, which reads the page's JSON-LD block. With a session cookie it does
  a full scrape, which returns a structured summary of the company.
- check whether a LinkedIn `li_at` session cookie is still valid.
- search LinkedIn for companies by name.

## Installation

```
pip install .
```

To install the test dependencies as well, run `pip install ".[test]"`. The
tests are in `tests/` and run with pytest.

## Serving the API

`li_enricher.routes.create_app(company_service=None, auth_service=None)`
builds a Flask application. If you pass no services, it creates a
`CompanyService` and an `AuthService` itself. Serve the application the way
you serve any Flask app:

```python
from li_enricher.routes import create_app

app = create_app()
app.run(port=3000)
```

### What the package does not do

The package has no command-line program for starting the server. It does not
read a `.env` file or a `PORT` variable, and it serves no Swagger or OpenAPI
documentation. Your own code chooses the host and port and runs the app, with
`app.run` or with any WSGI server.

## Endpoints

All endpoints are under `/api/v1`.

### `GET /api/v1/companies/<slug>`

Scrapes `https://www.linkedin.com/company/<slug>`.

Headers:

- `X-Linkedin-Session-Cookie` (optional): the `li_at` cookie. If present, the
  endpoint does a full scrape. If absent, it does a public scrape.
- `X-Proxy-Url` (optional): a proxy to send the request through.

Response:

```json
{"scrapeType": "public", "data": {"name": "...", "headquarters": "City, Region, Country"}}
```

`scrapeType` is either `full` or `public`.

- A public scrape returns the non-empty fields among `name`, `description`,
  `website`, `slogan`, `employee_count` and `headquarters`.
- A full scrape returns these fields: `name`, `linkedin_handle`,
  `linkedin_profile_url`, `external_id`, `website`, `tagline`, `description`,
  `headquarters`, `office_locations` and `funding_summary`. It also returns
  `founded_year`, `specialities` and `employee_count_range` when the page has
  them.

On failure the endpoint answers 500 with `error` and `details` fields.

### `GET /api/v1/validate-cookie`

Headers:

- `X-Linkedin-Session-Cookie` (required)
- `X-Proxy-Url` (optional)

Response: `{"valid": true}` or `{"valid": false}`. The endpoint requests the
feed page without following redirects, and the cookie counts as valid only if
that request answers 200.

- A missing cookie gives 400.
- A request failure gives 500.

### `GET /api/v1/companies/search/<query>`

Headers:

- `X-Linkedin-Session-Cookie` (required; a missing cookie gives 401)

Response: a JSON list of matching companies, each with `id`, `name` and
`text`. When nothing matches, the response is `null`. If the search fails,
the endpoint answers 500 with `error` and `details` fields.

## Using it as a library

```python
from li_enricher.parser import extract_company_json, extract_ld_json_data
from li_enricher.summarizer import create_summary
from li_enricher.services import (
    AuthService,
    CompanyService,
    parse_search_results,
    search_companies,
)

company = extract_ld_json_data(html).to_dict()       # public page
summary = create_summary(extract_company_json(html))  # authenticated page

data, scrape_type = CompanyService().enrich_company_data("example", "", "")
```

Errors are raised as exceptions:

| Exception | Raised by |
| --- | --- |
| `li_enricher.parser.ParseError` | the parsers |
| `li_enricher.summarizer.SummaryError` | the summarizer |
| `li_enricher.scraper.ScraperError` | `fetch_html` and `validate_session` |
| `li_enricher.services.ServiceError` | the services |

`li_enricher.utils` provides `safe_get` and `safe_get_string`, which read
values out of nested dictionaries.