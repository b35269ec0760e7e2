"""Output formatting utilities for the advocate directory.

Provides reusable functions for:
- Tabular text output
- Display helpers for advocate fields
"""

from typing import Optional, List, Any


def format_specialties(specialties, sep: str = ", ") -> str:
    """Join specialties in their display order.

    Examples:
        format_specialties(("Bipolar", "LGBTQ")) -> "Bipolar, LGBTQ"
        format_specialties(()) -> "-"
    """
    if not specialties:
        return "-"
    return sep.join(specialties)


def truncate_text(text: str, max_length: int = 60, suffix: str = "...") -> str:
    """Truncate text to max_length, adding suffix if truncated.

    Examples:
        truncate_text("Trauma & PTSD", 8) -> "Traum..."
    """
    if not text or len(text) <= max_length:
        return text or ""
    return text[:max_length - len(suffix)] + suffix


class TableFormatter:
    """Formats data as aligned tabular output."""

    def __init__(self, columns: List[str], column_widths: Optional[List[int]] = None):
        """Initialize table formatter.

        Args:
            columns: List of column headers
            column_widths: Optional list of column widths (auto-calculated if None)
        """
        self.columns = columns
        self.column_widths = column_widths or [len(col) for col in columns]
        self.rows: List[List[str]] = []

    def add_row(self, values: List[Any]) -> None:
        """Add a row to the table.

        Args:
            values: List of values matching column count

        Raises:
            ValueError: If value count doesn't match column count
        """
        if len(values) != len(self.columns):
            raise ValueError(f"Expected {len(self.columns)} values, got {len(values)}")

        str_values = []
        for i, val in enumerate(values):
            str_val = str(val) if val is not None else "-"
            str_values.append(str_val)
            if len(str_val) > self.column_widths[i]:
                self.column_widths[i] = len(str_val)

        self.rows.append(str_values)

    def _format_row(self, values: List[str], is_header: bool = False) -> str:
        cells = []
        for i, val in enumerate(values):
            width = self.column_widths[i]
            # Numbers right-aligned; phone numbers and text left-aligned
            if not is_header and val.isdigit() and len(val) <= 4:
                cells.append(val.rjust(width))
            else:
                cells.append(val.ljust(width))
        return "  ".join(cells).rstrip()

    def to_string(self, show_header: bool = True, show_separator: bool = True) -> str:
        """Format table as multi-line string.

        Args:
            show_header: Include header row (default: True)
            show_separator: Add separator line after header (default: True)

        Returns:
            Formatted table as string
        """
        lines = []

        if show_header:
            lines.append(self._format_row(self.columns, is_header=True))
            if show_separator:
                lines.append("  ".join("-" * w for w in self.column_widths))

        for row in self.rows:
            lines.append(self._format_row(row))

        return "\n".join(lines)

    def print_table(self, show_header: bool = True, show_separator: bool = True) -> None:
        """Print table to stdout."""
        print(self.to_string(show_header, show_separator))


def format_phone(value: Any) -> str:
    """Format a ten-digit North American number for display.

    Other values are returned unchanged, since phone numbers are not
    validated on input.

    Examples:
        format_phone("5551234567") -> "(555) 123-4567"
        format_phone("+44 20 7946 0958") -> "+44 20 7946 0958"
    """
    if value is None:
        return "-"
    s = str(value).strip()
    if len(s) == 10 and s.isdigit():
        return f"({s[:3]}) {s[3:6]}-{s[6:]}"
    return s
