"""Advocate directory: record model, record source, filtering and page state."""

from directory.models import Advocate, MalformedResponseError, parse_envelope
from directory.filters import (
    FilterCriteria,
    FilterEngine,
    filter_advocates,
    parse_criteria,
    specialty_options,
)
from directory.record_source import RecordSource
from directory.page import DirectoryPage

__all__ = [
    "Advocate",
    "MalformedResponseError",
    "parse_envelope",
    "FilterCriteria",
    "FilterEngine",
    "filter_advocates",
    "parse_criteria",
    "specialty_options",
    "RecordSource",
    "DirectoryPage",
]
