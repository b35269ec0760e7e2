"""
Advocate records endpoint.

GET /api/advocates  → {"data": [advocate, ...]}

The full collection is returned in one response; filtering happens in the
consumer over the in-memory list.
"""

import json
import sqlite3

from fastapi import APIRouter, Depends

from api.database import get_db
from api.models import AdvocateOut, AdvocatesResponse, ErrorResponse
from directory.models import Advocate

router = APIRouter(tags=["advocates"])

_SELECT_ADVOCATES = (
    "SELECT id, first_name, last_name, city, degree, specialties, "
    "years_of_experience, phone_number FROM advocates ORDER BY id"
)


def _row_specialties(raw) -> tuple[str, ...]:
    if not raw:
        return ()
    value = json.loads(raw)
    if isinstance(value, str):
        return (value,)
    return tuple(str(s) for s in value)


def load_advocates(conn: sqlite3.Connection) -> list[Advocate]:
    """Read every advocate row into Advocate values."""
    rows = conn.execute(_SELECT_ADVOCATES).fetchall()
    return [
        Advocate(
            id=str(r["id"]),
            first_name=r["first_name"] or "",
            last_name=r["last_name"] or "",
            city=r["city"] or "",
            degree=r["degree"] or "",
            specialties=_row_specialties(r["specialties"]),
            years_of_experience=int(r["years_of_experience"] or 0),
            phone_number=str(r["phone_number"] or ""),
        )
        for r in rows
    ]


@router.get(
    "/api/advocates",
    response_model=AdvocatesResponse,
    summary="List all advocates",
    responses={500: {"model": ErrorResponse, "description": "Unexpected server error"}},
)
def list_advocates(conn: sqlite3.Connection = Depends(get_db)) -> AdvocatesResponse:
    """Return every advocate in the directory."""
    advocates = load_advocates(conn)
    return AdvocatesResponse(
        data=[
            AdvocateOut(
                id=a.id,
                first_name=a.first_name,
                last_name=a.last_name,
                city=a.city,
                degree=a.degree,
                specialties=list(a.specialties),
                years_of_experience=a.years_of_experience,
                phone_number=a.phone_number,
            )
            for a in advocates
        ]
    )
