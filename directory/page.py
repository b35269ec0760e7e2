"""
Directory page state: record source -> filter engine -> rendering.

``DirectoryPage`` plays the part of the single directory screen.  It is
``idle`` until mounted.  Mounting starts the one retrieval; while that is
outstanding the page reports ``loading`` and does no filtering.  An error
preempts the table.  Once unmounted, a late response cannot touch the page.
"""

from __future__ import annotations

import logging

from directory.filters import FilterEngine
from directory.record_source import ERROR, LOADED, RecordSource
from utils.formatting import TableFormatter, format_specialties, truncate_text

logger = logging.getLogger(__name__)

IDLE = "idle"
LOADING = "loading"
READY = "ready"
FAILED = "error"

LOADING_MESSAGE = "Loading…"
IDLE_MESSAGE = "Not loaded."

SPECIALTIES_WIDTH = 60

TABLE_COLUMNS = [
    "First Name", "Last Name", "City", "Degree",
    "Specialties", "Years of Experience", "Phone Number",
]


class DirectoryPage:
    """Wires a RecordSource to a FilterEngine and renders the result."""

    def __init__(self, source: RecordSource, engine: FilterEngine | None = None) -> None:
        self.source = source
        self.engine = engine if engine is not None else FilterEngine()
        self.status = IDLE
        self.error: str | None = None
        # Bumped on every state change; lets callers detect updates.
        self.revision = 0
        self._mounted = False
        self._unmounted = False

    @property
    def mounted(self) -> bool:
        return self._mounted and not self._unmounted

    def mount(self) -> None:
        """Start the retrieval.  Mounting twice does not fetch twice."""
        if self._unmounted:
            raise RuntimeError("DirectoryPage cannot be mounted after unmount")
        if self._mounted:
            return
        self._mounted = True
        self.status = LOADING
        self.source.start(on_settled=self._on_source_settled)

    def unmount(self) -> None:
        """Tear down: abandon any in-flight retrieval."""
        if self._unmounted:
            return
        self._unmounted = True
        self.source.close()

    def _on_source_settled(self, source: RecordSource) -> None:
        if self._unmounted:
            return
        if source.status == LOADED:
            self.engine.set_records(source.advocates)
            self.status = READY
        elif source.status == ERROR:
            self.error = source.error
            self.status = FAILED
        self.revision += 1
        logger.debug("directory page is %s", self.status)

    # ── user actions (forwarded to the engine once data is present) ───────

    def set_filter(self, name: str, value: str) -> None:
        self.engine.set_criterion(name, value)

    def toggle_specialty(self, specialty: str) -> None:
        self.engine.toggle_specialty(specialty)

    def reset_filters(self) -> None:
        self.engine.reset()

    @property
    def show_reset(self) -> bool:
        return self.engine.is_active()

    # ── rendering ─────────────────────────────────────────────────────────

    def render(self) -> str:
        """Text rendering of the current page state."""
        if self.status == IDLE:
            return IDLE_MESSAGE
        if self.status == LOADING:
            return LOADING_MESSAGE
        if self.status == FAILED:
            return f"Error: {self.error}"

        lines = ["Solace Advocates", ""]
        if self.show_reset:
            lines.append(f"Filters: {self.engine.criteria.describe()}  (type 'reset' to clear)")
            lines.append("")

        advocates = self.engine.filtered
        if not advocates:
            lines.append("No advocates found.")
            return "\n".join(lines)

        table = TableFormatter(list(TABLE_COLUMNS))
        for a in advocates:
            table.add_row([
                a.first_name, a.last_name, a.city, a.degree,
                truncate_text(format_specialties(a.specialties), SPECIALTIES_WIDTH),
                a.years_of_experience, a.phone_number,
            ])
        lines.append(table.to_string())
        lines.append("")
        lines.append(f"{len(advocates)} of {len(self.engine.advocates)} advocates")
        return "\n".join(lines)
