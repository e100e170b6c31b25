"""
Per-card lookup outcomes and the report produced by one run.

A run never drops a card silently: every decklist entry ends up with a
CardOutcome, and the report carries the coverage figure derived from them.
"""

from dataclasses import dataclass, field
from enum import Enum

from setcounter.models.aggregate import ExclusiveGroup, SetAggregate
from setcounter.models.card import PrintRecord
from setcounter.models.failure import FailureDetail


class LookupStatus(str, Enum):
    """What happened when a card was looked up."""

    RESOLVED = "resolved"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass
class CardOutcome:
    """
    Lookup result for one decklist line.

    Attributes:
        line_number: 1-based line in the submitted text
        card_name: Name as parsed from the line
        status: Lookup classification
        prints: Printing history (empty unless RESOLVED)
        failure: Why the card is missing from the results (None if RESOLVED)
    """

    line_number: int
    card_name: str
    status: LookupStatus
    prints: list[PrintRecord] = field(default_factory=list)
    failure: FailureDetail | None = None

    @property
    def resolved(self) -> bool:
        return self.status is LookupStatus.RESOLVED

    def set_codes(self) -> set[str]:
        """Distinct set codes across the printing history."""
        return {record.set_code for record in self.prints}


@dataclass(frozen=True)
class Coverage:
    """How many distinct cards were looked up and how many resolved."""

    looked_up: int
    resolved: int
    not_found: int
    failed: int

    @property
    def all_failed(self) -> bool:
        """True when lookups happened but none succeeded."""
        return self.looked_up > 0 and self.resolved == 0

    def summary(self) -> str:
        """Human-readable coverage line, e.g. '42/50 cards resolved'."""
        return f"{self.resolved}/{self.looked_up} cards resolved"


@dataclass
class SkippedLine:
    """A decklist line excluded before lookup."""

    line_number: int
    content: str
    reason: str


@dataclass
class SetCountReport:
    """
    Everything one run produces.

    Attributes:
        aggregates: Set code -> distinct member cards
        exclusives: Set code -> cards printed only in that set
        ranked: Aggregates ordered for display (count desc, set code asc)
        outcomes: One outcome per decklist entry, in input order
        skipped: Lines excluded before lookup
        coverage: Distinct-card lookup tally
    """

    aggregates: dict[str, SetAggregate]
    exclusives: dict[str, ExclusiveGroup]
    ranked: list[SetAggregate]
    outcomes: list[CardOutcome]
    skipped: list[SkippedLine]
    coverage: Coverage
