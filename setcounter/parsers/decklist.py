"""
Decklist parser.

Turns pasted decklist text into the card names to look up. Quantities
are informational only: "3 Lightning Bolt" and "Lightning Bolt" name the
same card, and a card listed twice is kept twice here. Deduplication
happens downstream in the aggregator and classifier.

Lines that can never be counted (bare quantities, basic lands) are
reported as skipped rather than raised as errors.
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from setcounter.models.outcome import SkippedLine

# Never looked up, counted or classified
BASIC_LANDS: frozenset[str] = frozenset(
    {
        "Forest",
        "Island",
        "Mountain",
        "Plains",
        "Swamp",
    }
)

SKIP_QUANTITY_ONLY = "quantity_only"
SKIP_BASIC_LAND = "basic_land"


@dataclass
class DecklistEntry:
    """A countable decklist line."""

    card_name: str
    quantity: int | None
    line_number: int


@dataclass
class ParsedDecklist:
    """Parser output: countable entries plus the lines that were skipped."""

    entries: list[DecklistEntry]
    skipped: list[SkippedLine]

    def card_names(self) -> list[str]:
        """Card names in input order, duplicates preserved."""
        return [entry.card_name for entry in self.entries]

    def unique_names(self) -> list[str]:
        """Distinct card names in first-seen order."""
        return list(dict.fromkeys(self.card_names()))


class DecklistParser:
    """
    Parser for "[quantity] name" decklist text.

    Usage:
        parser = DecklistParser()
        parsed = parser.parse(raw_text)
    """

    # "<digits><whitespace>" prefix, e.g. the "4 " of "4 Brainstorm"
    _QUANTITY_PATTERN = re.compile(r"^(\d+)\s+")

    _NUMBER_PATTERN = re.compile(r"^\d+$")

    def __init__(self, excluded_names: frozenset[str] = BASIC_LANDS) -> None:
        self.excluded_names = excluded_names

    def parse(self, raw_input: str) -> ParsedDecklist:
        """
        Parse decklist text.

        Args:
            raw_input: Newline-separated decklist

        Returns:
            ParsedDecklist with entries in input order
        """
        entries: list[DecklistEntry] = []
        skipped: list[SkippedLine] = []

        for line_num, line in enumerate(raw_input.splitlines(), 1):
            stripped = line.strip()
            if not stripped:
                continue

            quantity, name = self._split_quantity(stripped)

            if self._NUMBER_PATTERN.match(name):
                skipped.append(SkippedLine(line_num, stripped, SKIP_QUANTITY_ONLY))
                continue

            if name in self.excluded_names:
                skipped.append(SkippedLine(line_num, stripped, SKIP_BASIC_LAND))
                continue

            entries.append(DecklistEntry(card_name=name, quantity=quantity, line_number=line_num))

        return ParsedDecklist(entries=entries, skipped=skipped)

    def _split_quantity(self, line: str) -> tuple[int | None, str]:
        """Strip a leading quantity, returning (quantity, bare name)."""
        match = self._QUANTITY_PATTERN.match(line)
        if match is None:
            return None, line
        return int(match.group(1)), line[match.end() :].strip()


def parse_decklist(raw_input: str) -> ParsedDecklist:
    """Parse decklist text with the default basic-land exclusions."""
    return DecklistParser().parse(raw_input)


def parse_card_name(line: str) -> str | None:
    """
    Card name for a single line, or None if the line is not countable.

    "3 Lightning Bolt" -> "Lightning Bolt"; "4 " -> None; "Forest" -> None.
    """
    parsed = parse_decklist(line)
    return parsed.entries[0].card_name if parsed.entries else None
