"""
Pytest fixtures for the advocate directory tests.

Provides sample Advocate values, a seeded temporary SQLite database, a
FastAPI TestClient wired to it, and mock HTTP sessions for record-source
tests (no network access needed).
"""

import sys
import threading
from pathlib import Path
from unittest.mock import MagicMock

import pytest
import requests

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from directory.models import Advocate  # noqa: E402


# ── Sample data ───────────────────────────────────────────────────────────────

def make_advocate(id="1", first_name="Ann", last_name="Lee", city="Boston",
                  degree="MD", specialties=(), years_of_experience=5,
                  phone_number="5550000000") -> Advocate:
    return Advocate(
        id=id, first_name=first_name, last_name=last_name, city=city,
        degree=degree, specialties=tuple(specialties),
        years_of_experience=years_of_experience, phone_number=phone_number,
    )


def wire_record(**overrides) -> dict:
    """One camelCase record as the records endpoint sends it."""
    record = {
        "id": 1,
        "firstName": "Ann",
        "lastName": "Lee",
        "city": "Boston",
        "degree": "MD",
        "specialties": ["Bipolar"],
        "yearsOfExperience": 5,
        "phoneNumber": "5550000000",
    }
    record.update(overrides)
    return record


@pytest.fixture()
def advocates() -> list[Advocate]:
    """Four advocates spanning every filterable field."""
    return [
        make_advocate("1", "John", "Doe", "New York", "MD",
                      ("Bipolar", "LGBTQ"), 10, "5551234567"),
        make_advocate("2", "Jane", "Smith", "Los Angeles", "PhD",
                      ("Trauma & PTSD",), 4, "5559876543"),
        make_advocate("3", "Alice", "SMITHSON", "New Orleans", "MSW",
                      ("LGBTQ", "Eating disorders"), 7, "5554567890"),
        make_advocate("4", "Bob", "Brown", "Chicago", "md",
                      (), 0, "5556543210"),
    ]


# ── Database + app ────────────────────────────────────────────────────────────

@pytest.fixture(scope="session")
def advocates_db(tmp_path_factory) -> Path:
    """Return a Path to a SQLite database seeded with the sample roster."""
    from build_advocates_db import build_database

    db_path = tmp_path_factory.mktemp("advocates_db") / "advocates.sqlite"
    build_database(db_path, rebuild=True)
    return db_path


@pytest.fixture(scope="module")
def app_client(advocates_db):
    """FastAPI TestClient serving the seeded database."""
    pytest.importorskip("httpx")
    from fastapi.testclient import TestClient
    from api.app import create_app
    from api.database import Database

    app = create_app(database=Database(advocates_db))
    with TestClient(app, raise_server_exceptions=False) as c:
        yield c


# ── HTTP session doubles ──────────────────────────────────────────────────────

def mock_response(payload=None, status=200, json_error=None):
    resp = MagicMock()
    resp.status_code = status
    if status >= 400:
        err = requests.HTTPError(f"{status} Error")
        err.response = resp
        resp.raise_for_status.side_effect = err
    else:
        resp.raise_for_status.return_value = None
    if json_error is not None:
        resp.json.side_effect = json_error
    else:
        resp.json.return_value = payload
    return resp


def mock_session_manager(response=None, raise_exc=None, get=None):
    """Session manager double whose session.get returns *response*."""
    session = MagicMock()
    if get is not None:
        session.get.side_effect = get
    elif raise_exc is not None:
        session.get.side_effect = raise_exc
    else:
        session.get.return_value = response
    manager = MagicMock()
    manager.session = session
    return manager


class BlockingGet:
    """session.get replacement that waits until released.

    ``entered`` is set once the request is in flight; ``release`` lets it
    return *response*.
    """

    def __init__(self, response):
        self.response = response
        self.entered = threading.Event()
        self.release = threading.Event()

    def __call__(self, url, timeout=None):
        self.entered.set()
        self.release.wait(5)
        return self.response
