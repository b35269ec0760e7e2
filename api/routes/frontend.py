"""
Frontend HTML routes.

Serves the Jinja2 templates for the directory page and its results partial.

Routes:
    GET /                   → index.html (filter form + results table)
    GET /partials/results   → partials/results.html (HTMX swap target)

Criteria travel in the query string:
    first_name, last_name, city, degree, years_of_experience  (single values)
    specialty                                                 (repeatable)

Every request, including each HTMX refresh while the user types, reads
the whole advocates table and narrows it in memory with directory.filters,
the same code the terminal front end runs.  No criterion ever reaches the
SQL, and the JSON endpoint always returns the full collection.
"""

import sqlite3
from typing import Any

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from fastapi.templating import Jinja2Templates

from api.database import get_db
from api.routes.advocates import load_advocates
from directory.filters import FilterCriteria, filter_advocates, parse_criteria, specialty_options

router = APIRouter(tags=["frontend"])

# Templates instance is set by create_app() after mounting.
_templates: Jinja2Templates | None = None


def set_templates(t: Jinja2Templates) -> None:
    global _templates
    _templates = t


def _tmpl() -> Jinja2Templates:
    if _templates is None:
        raise RuntimeError("Templates not initialised; call set_templates() first")
    return _templates


def _parse_filters(request: Request) -> FilterCriteria:
    """Extract filter criteria from the query string."""
    params = request.query_params
    return parse_criteria(params, specialties=params.getlist("specialty"))


def _query_results(criteria: FilterCriteria, conn: sqlite3.Connection) -> dict[str, Any]:
    """Load the collection and derive the template context."""
    advocates = load_advocates(conn)
    items = filter_advocates(advocates, criteria)
    return {
        "items":      items,
        "total":      len(advocates),
        "options":    specialty_options(advocates),
        "criteria":   criteria,
        "any_active": criteria.is_active(),
    }


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
def index(request: Request, conn: sqlite3.Connection = Depends(get_db)) -> HTMLResponse:
    """Directory page."""
    criteria = _parse_filters(request)
    return _tmpl().TemplateResponse(
        request, "index.html", _query_results(criteria, conn),
    )


@router.get("/partials/results", response_class=HTMLResponse, include_in_schema=False)
def results_partial(
    request: Request,
    conn: sqlite3.Connection = Depends(get_db),
) -> HTMLResponse:
    """HTMX partial: filtered results table."""
    criteria = _parse_filters(request)
    return _tmpl().TemplateResponse(
        request, "partials/results.html", _query_results(criteria, conn),
    )
