"""
Advocate filtering.

Criteria are ANDed across fields; within the specialty field a record needs
at least one of the selected tags.  Text fields match case-insensitively as
substrings.  A minimum-years value that does not parse as an integer imposes
no constraint.

Usage::

    from directory.filters import FilterCriteria, filter_advocates

    criteria = FilterCriteria(city="york", years_of_experience="5")
    criteria.toggle_specialty("Trauma & PTSD")
    matches = filter_advocates(advocates, criteria)

``FilterEngine`` wraps the same functions for callers that edit criteria
one field at a time and want the derived view kept current.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, Mapping

from directory.models import Advocate
from utils.strings import contains_casefold, normalize_whitespace, safe_int

logger = logging.getLogger(__name__)

# Single-value criteria, in display order
TEXT_FIELDS = ("first_name", "last_name", "city", "degree")
SCALAR_FIELDS = TEXT_FIELDS + ("years_of_experience",)

FIELD_LABELS = {
    "first_name": "First name",
    "last_name": "Last name",
    "city": "City",
    "degree": "Degree",
    "years_of_experience": "Min. years",
    "specialties": "Specialties",
}


@dataclass
class FilterCriteria:
    """User-entered filter state.  Empty values are inactive."""

    first_name: str = ""
    last_name: str = ""
    city: str = ""
    degree: str = ""
    years_of_experience: str = ""
    specialties: set[str] = field(default_factory=set)

    def is_active(self) -> bool:
        """True when any field would narrow the results."""
        return any(getattr(self, f) for f in SCALAR_FIELDS) or bool(self.specialties)

    def set_field(self, name: str, value: Any) -> None:
        """Set one single-value field.

        Raises:
            ValueError: *name* is not a single-value criterion.
        """
        if name not in SCALAR_FIELDS:
            raise ValueError(
                f"Unknown filter field: '{name}'. "
                f"Must be one of: {', '.join(SCALAR_FIELDS)}"
            )
        setattr(self, name, "" if value is None else str(value))

    def toggle_specialty(self, specialty: str) -> None:
        """Add *specialty* if absent, remove it if present."""
        if specialty in self.specialties:
            self.specialties.discard(specialty)
        else:
            self.specialties.add(specialty)

    def reset(self) -> None:
        """Clear every field in one step."""
        for name in SCALAR_FIELDS:
            setattr(self, name, "")
        self.specialties = set()

    def copy(self) -> "FilterCriteria":
        return FilterCriteria(
            **{name: getattr(self, name) for name in SCALAR_FIELDS},
            specialties=set(self.specialties),
        )

    def min_years(self) -> int | None:
        """Parsed minimum years, or None when blank or not an integer."""
        return safe_int(self.years_of_experience)

    def describe(self) -> str:
        """One-line human summary of the active fields."""
        parts = []
        for name in SCALAR_FIELDS:
            value = getattr(self, name)
            if value:
                parts.append(f"{FIELD_LABELS[name]}: {value}")
        if self.specialties:
            parts.append(
                f"{FIELD_LABELS['specialties']}: {', '.join(sorted(self.specialties))}"
            )
        return "; ".join(parts)


def parse_criteria(params: Mapping[str, Any], specialties: Iterable[str] = ()) -> FilterCriteria:
    """Build criteria from query-string style input.

    Unknown keys are ignored; runs of whitespace collapse to one space.  *specialties* carries the
    multi-valued field separately since query mappings flatten it.
    """
    criteria = FilterCriteria()
    for name in SCALAR_FIELDS:
        value = params.get(name)
        if value is not None:
            criteria.set_field(name, normalize_whitespace(str(value)))
    criteria.specialties = {s for s in specialties if s}
    return criteria


def matches(advocate: Advocate, criteria: FilterCriteria) -> bool:
    """True when *advocate* satisfies every active field of *criteria*."""
    for name in TEXT_FIELDS:
        term = getattr(criteria, name)
        if term and not contains_casefold(getattr(advocate, name), term):
            return False

    min_years = criteria.min_years()
    if min_years is not None and advocate.years_of_experience < min_years:
        return False

    if criteria.specialties and criteria.specialties.isdisjoint(advocate.specialties):
        return False

    return True


def filter_advocates(advocates: Iterable[Advocate], criteria: FilterCriteria) -> list[Advocate]:
    """Return the advocates matching *criteria*, preserving input order.

    Always returns a new list; the input collection is left untouched.
    """
    return [a for a in advocates if matches(a, criteria)]


def specialty_options(advocates: Iterable[Advocate]) -> list[str]:
    """Sorted distinct specialties across *advocates*."""
    return sorted({s for a in advocates for s in a.specialties})


Listener = Callable[["FilterEngine"], None]


class FilterEngine:
    """Holds the base collection and criteria and keeps derived views current.

    ``filtered`` and ``options`` are recomputed synchronously after every
    mutation.  Each recomputation produces fresh lists, so a caller holding
    an earlier ``filtered`` list never sees it change.
    """

    def __init__(self, advocates: Iterable[Advocate] = (),
                 criteria: FilterCriteria | None = None) -> None:
        self._advocates: tuple[Advocate, ...] = tuple(advocates)
        self.criteria = criteria or FilterCriteria()
        self._listeners: list[Listener] = []
        self.filtered: list[Advocate] = []
        self.options: list[str] = []
        self._recompute_options()
        self._recompute_filtered()

    @property
    def advocates(self) -> tuple[Advocate, ...]:
        return self._advocates

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after each recomputation; returns an unsubscribe."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ── mutations ─────────────────────────────────────────────────────────

    def set_records(self, advocates: Iterable[Advocate]) -> None:
        self._advocates = tuple(advocates)
        self._recompute_options()
        self._changed()

    def set_criterion(self, name: str, value: Any) -> None:
        self.criteria.set_field(name, value)
        self._changed()

    def toggle_specialty(self, specialty: str) -> None:
        self.criteria.toggle_specialty(specialty)
        self._changed()

    def reset(self) -> None:
        self.criteria.reset()
        self._changed()

    def is_active(self) -> bool:
        return self.criteria.is_active()

    # ── derivation ────────────────────────────────────────────────────────

    def _recompute_options(self) -> None:
        self.options = specialty_options(self._advocates)

    def _recompute_filtered(self) -> None:
        self.filtered = filter_advocates(self._advocates, self.criteria)

    def _changed(self) -> None:
        self._recompute_filtered()
        logger.debug("filtered %d of %d advocates", len(self.filtered), len(self._advocates))
        for listener in list(self._listeners):
            listener(self)
