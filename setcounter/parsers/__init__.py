from setcounter.parsers.decklist import (
    BASIC_LANDS,
    DecklistEntry,
    DecklistParser,
    ParsedDecklist,
    parse_card_name,
    parse_decklist,
)

__all__ = [
    "BASIC_LANDS",
    "DecklistEntry",
    "DecklistParser",
    "ParsedDecklist",
    "parse_card_name",
    "parse_decklist",
]
