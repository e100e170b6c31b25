"""
SetCounter services.

Card lookups and run orchestration.
"""

from setcounter.services.print_resolver import (
    PrintResolver,
    ScryfallPrintResolver,
    parse_print,
    select_image_url,
)
from setcounter.services.run_coordinator import RunCoordinator, SessionRegistry
from setcounter.services.set_counter import build_report, count_sets, resolve_all

__all__ = [
    "PrintResolver",
    "RunCoordinator",
    "ScryfallPrintResolver",
    "SessionRegistry",
    "build_report",
    "count_sets",
    "parse_print",
    "resolve_all",
    "select_image_url",
]
