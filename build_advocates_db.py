"""
Advocate Directory Database Builder

Creates the ``advocates`` table in a SQLite database and loads the sample
advocate roster into it.

Usage:
    python build_advocates_db.py                          # Uses DATABASE_URL
    python build_advocates_db.py --db advocates.sqlite    # Explicit path
    python build_advocates_db.py --rebuild                # Drop and re-seed
"""

import argparse
import json
import logging
import sqlite3
import sys
from pathlib import Path

from api.database import parse_database_url
from utils.config import AppConfig, ConfigurationError
from utils.logging import configure_logging

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path("advocates.sqlite")

SCHEMA = """
CREATE TABLE IF NOT EXISTS advocates (
    id                  INTEGER PRIMARY KEY AUTOINCREMENT,
    first_name          TEXT NOT NULL,
    last_name           TEXT NOT NULL,
    city                TEXT NOT NULL,
    degree              TEXT NOT NULL,
    specialties         TEXT NOT NULL DEFAULT '[]',
    years_of_experience INTEGER NOT NULL CHECK (years_of_experience >= 0),
    phone_number        TEXT NOT NULL,
    created_at          TEXT DEFAULT CURRENT_TIMESTAMP
);
"""

SPECIALTIES = [
    "Bipolar",
    "LGBTQ",
    "Medication/Prescribing",
    "Suicide History/Attempts",
    "General Mental Health (anxiety, depression, stress, grief, life transitions)",
    "Men's issues",
    "Relationship Issues (family, friends, couple, etc)",
    "Trauma & PTSD",
    "Personality disorders",
    "Personal growth",
    "Substance use/abuse",
    "Pediatrics",
    "Women's issues (post-partum, infertility, family planning)",
    "Chronic pain",
    "Weight loss & nutrition",
    "Eating disorders",
    "Diabetic Diet and nutrition",
    "Coaching (leadership, career, academic and wellness)",
    "Life coaching",
    "Obsessive-compulsive disorders",
    "Neuropsychological evaluations & testing (ADHD testing)",
    "Attention and Hyperactivity (ADHD)",
    "Sleep issues",
    "Schizophrenia and psychotic disorders",
    "Learning disorders",
    "Domestic abuse",
]

# (first, last, city, degree, specialty indexes, years, phone)
SAMPLE_ADVOCATES = [
    ("John", "Doe", "New York", "MD", (0, 3), 10, "5551234567"),
    ("Jane", "Smith", "Los Angeles", "PhD", (1, 7, 9), 8, "5559876543"),
    ("Alice", "Johnson", "Chicago", "MSW", (4, 5), 5, "5554567890"),
    ("Michael", "Brown", "Houston", "MD", (2, 10), 12, "5556543210"),
    ("Emily", "Davis", "Phoenix", "PhD", (6, 8, 9), 7, "5553210987"),
    ("Chris", "Martinez", "Philadelphia", "MSW", (11,), 9, "5557890123"),
    ("Jessica", "Taylor", "San Antonio", "MD", (12, 13), 11, "5554561234"),
    ("David", "Harris", "San Diego", "PhD", (14, 15, 16), 6, "5557896543"),
    ("Laura", "Clark", "Dallas", "MSW", (17, 18), 4, "5550123456"),
    ("Daniel", "Lewis", "San Jose", "MD", (19, 20, 21), 13, "5553217654"),
    ("Sarah", "Lee", "Austin", "PhD", (22, 23), 10, "5551238765"),
    ("James", "King", "Jacksonville", "MSW", (24,), 5, "5556540987"),
    ("Megan", "Green", "San Francisco", "MD", (25, 7), 14, "5559873456"),
    ("Joshua", "Walker", "Columbus", "PhD", (3, 4, 7), 9, "5556781234"),
    ("Amanda", "Hall", "Fort Worth", "MSW", (9, 17), 3, "5559872345"),
]


def sample_rows() -> list[tuple]:
    """Sample advocates as INSERT parameter tuples."""
    return [
        (first, last, city, degree,
         json.dumps([SPECIALTIES[i] for i in idxs]), years, phone)
        for first, last, city, degree, idxs, years, phone in SAMPLE_ADVOCATES
    ]


def create_schema(conn: sqlite3.Connection) -> None:
    conn.executescript(SCHEMA)


def seed_advocates(conn: sqlite3.Connection, rows: list[tuple] | None = None) -> int:
    """Insert advocate rows and return how many were written."""
    rows = sample_rows() if rows is None else rows
    conn.executemany(
        "INSERT INTO advocates "
        "(first_name, last_name, city, degree, specialties, "
        " years_of_experience, phone_number) "
        "VALUES (?, ?, ?, ?, ?, ?, ?)",
        rows,
    )
    conn.commit()
    return len(rows)


def build_database(db_path: Path, rebuild: bool = False) -> int:
    """Create (or re-create) the advocates database at *db_path*.

    An existing populated table is left alone unless *rebuild* is set.

    Returns:
        Number of advocates inserted.
    """
    db_path.parent.mkdir(parents=True, exist_ok=True)
    conn = sqlite3.connect(str(db_path))
    try:
        if rebuild:
            logger.info("dropping advocates table in %s", db_path)
            conn.execute("DROP TABLE IF EXISTS advocates")
        create_schema(conn)
        existing = conn.execute("SELECT COUNT(*) FROM advocates").fetchone()[0]
        if existing:
            logger.info("%s already holds %d advocates; use --rebuild to re-seed",
                        db_path, existing)
            return 0
        inserted = seed_advocates(conn)
        logger.info("inserted %d advocates into %s", inserted, db_path)
        return inserted
    finally:
        conn.close()


def main(argv: list[str] | None = None) -> int:
    """Parse command-line arguments and build the database."""
    cfg = AppConfig.from_env()
    parser = argparse.ArgumentParser(description="Build the advocate directory database")
    parser.add_argument("--db", type=Path, default=None,
                        help="Database path (default: DATABASE_URL, "
                             f"else {DEFAULT_DB_PATH})")
    parser.add_argument("--rebuild", action="store_true",
                        help="Drop and re-seed the advocates table")
    args = parser.parse_args(argv)

    configure_logging(cfg.log_format, cfg.log_level)

    db_path = args.db
    if db_path is None:
        if cfg.database_url:
            try:
                db_path = parse_database_url(cfg.database_url)
            except ConfigurationError as exc:
                print(f"ERROR: {exc}", file=sys.stderr)
                return 2
        else:
            db_path = DEFAULT_DB_PATH

    build_database(db_path, rebuild=args.rebuild)
    print(f"Database ready: {db_path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
