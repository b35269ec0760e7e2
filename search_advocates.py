"""
Advocate Directory Search Tool

Loads the advocate collection from the records endpoint once and filters it
in memory.

Usage:
    python search_advocates.py
    python search_advocates.py --city york --years 5
    python search_advocates.py --specialty "Trauma & PTSD" --specialty LGBTQ
    python search_advocates.py --url http://localhost:8000/api/advocates
    python search_advocates.py --interactive
"""

import argparse
import sys
import textwrap

from directory.filters import FIELD_LABELS
from directory.page import FAILED, LOADING_MESSAGE, DirectoryPage
from directory.record_source import RecordSource
from utils.config import AppConfig
from utils.logging import configure_logging

# REPL prefix -> criteria field
_FIELD_PREFIXES = {
    "first": "first_name",
    "last": "last_name",
    "city": "city",
    "degree": "degree",
    "years": "years_of_experience",
}

HELP = """\
  Commands:
    first:<text>           Filter by first name (empty text clears)
    last:<text>            Filter by last name
    city:<text>            Filter by city
    degree:<text>          Filter by degree
    years:<n>              Minimum years of experience
    toggle <specialty>     Select / deselect a specialty
    specialties            List specialties ([x] = selected)
    reset                  Clear all filters
    show                   Show the results table
    quit / exit            Exit
"""


def load_page(url: str, timeout: float) -> DirectoryPage | None:
    """Mount a page and wait for its one retrieval.

    Returns None when the user interrupts the load (the page is unmounted
    first, so a late response is dropped).
    """
    page = DirectoryPage(RecordSource(url, timeout=timeout))
    print(LOADING_MESSAGE)
    page.mount()
    try:
        while not page.source.wait(0.1):
            pass
    except KeyboardInterrupt:
        page.unmount()
        print("\nCancelled.")
        return None
    return page


def _match_specialty(page: DirectoryPage, text: str) -> str | None:
    for option in page.engine.options:
        if option.casefold() == text.casefold():
            return option
    if text in page.engine.criteria.specialties:
        return text
    return None


def list_specialties(page: DirectoryPage) -> str:
    selected = page.engine.criteria.specialties
    lines = [f"  [{'x' if o in selected else ' '}] {o}" for o in page.engine.options]
    return "\n".join(lines) if lines else "  (no specialties)"


def apply_command(page: DirectoryPage, raw: str) -> str | None:
    """Apply one REPL command to *page*.

    Returns:
        Text to print, or None when the user asked to quit.
    """
    cmd = raw.strip()
    lowered = cmd.lower()
    if lowered in ("quit", "exit", "q"):
        return None
    if not cmd or lowered == "show":
        return page.render()
    if lowered == "help":
        return HELP
    if lowered == "reset":
        page.reset_filters()
        return page.render()
    if lowered == "specialties":
        return list_specialties(page)
    if lowered.startswith("toggle "):
        wanted = cmd[len("toggle "):].strip()
        specialty = _match_specialty(page, wanted)
        if specialty is None:
            return f"Unknown specialty: {wanted!r}. Type 'specialties' to list them."
        page.toggle_specialty(specialty)
        return page.render()

    prefix, sep, value = cmd.partition(":")
    field = _FIELD_PREFIXES.get(prefix.strip().lower()) if sep else None
    if field is None:
        return f"Unrecognised command: {cmd!r}. Type 'help' for commands."
    page.set_filter(field, value.strip())
    return page.render()


def interactive_mode(page: DirectoryPage) -> None:
    """Interactive filter REPL."""
    print("=" * 65)
    print(f"  ADVOCATE DIRECTORY - Interactive Filter ({len(page.engine.advocates)} advocates)")
    print("=" * 65)
    print()
    print(HELP)

    while True:
        try:
            raw = input("filter> ")
        except (EOFError, KeyboardInterrupt):
            print("\nGoodbye.")
            break
        out = apply_command(page, raw)
        if out is None:
            print("Goodbye.")
            break
        print(out)


def main(argv: list[str] | None = None) -> int:
    cfg = AppConfig.from_env()
    parser = argparse.ArgumentParser(
        description="Search the advocate directory",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=textwrap.dedent("""
            Examples:
              python search_advocates.py --city york
              python search_advocates.py --last smith --degree md
              python search_advocates.py --specialty LGBTQ --years 5
              python search_advocates.py --interactive
        """),
    )
    parser.add_argument("--url", default=cfg.advocates_url,
                        help=f"Records endpoint (default: {cfg.advocates_url})")
    parser.add_argument("--timeout", type=float, default=cfg.request_timeout,
                        help="Request timeout in seconds")
    parser.add_argument("--first", dest="first_name", default="",
                        help=FIELD_LABELS["first_name"])
    parser.add_argument("--last", dest="last_name", default="",
                        help=FIELD_LABELS["last_name"])
    parser.add_argument("--city", default="", help=FIELD_LABELS["city"])
    parser.add_argument("--degree", default="", help=FIELD_LABELS["degree"])
    parser.add_argument("--years", dest="years_of_experience", default="",
                        help="Minimum years of experience")
    parser.add_argument("--specialty", action="append", default=[],
                        help="Required specialty (repeatable; any one matches)")
    parser.add_argument("--interactive", "-i", action="store_true",
                        help="Interactive filter mode")
    args = parser.parse_args(argv)

    configure_logging(cfg.log_format, "WARNING" if cfg.log_level == "INFO" else cfg.log_level)

    page = load_page(args.url, args.timeout)
    if page is None:
        return 130
    try:
        if page.status == FAILED:
            print(page.render(), file=sys.stderr)
            return 1

        for field in _FIELD_PREFIXES.values():
            value = getattr(args, field)
            if value:
                page.set_filter(field, value)
        for specialty in dict.fromkeys(args.specialty):
            page.toggle_specialty(specialty)

        if args.interactive:
            interactive_mode(page)
        else:
            print(page.render())
        return 0
    finally:
        page.unmount()


if __name__ == "__main__":
    sys.exit(main())
