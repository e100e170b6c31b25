from dataclasses import dataclass, field

from setcounter.models.card import CardEntry


@dataclass
class SetAggregate:
    """
    Distinct decklist cards printed in one set.

    Attributes:
        set_code: Short set identifier
        set_name: Set display name
        cards: Member cards in first-added order, each name at most once
    """

    set_code: str
    set_name: str
    cards: list[CardEntry] = field(default_factory=list)

    @property
    def count(self) -> int:
        """Number of distinct member cards."""
        return len(self.cards)

    def contains(self, card_name: str) -> bool:
        """True if a card with this name is already a member."""
        return any(card.name == card_name for card in self.cards)

    def card_names(self) -> list[str]:
        """Member names in insertion order."""
        return [card.name for card in self.cards]


@dataclass
class ExclusiveGroup:
    """Cards whose whole printing history lies in this one set."""

    set_code: str
    set_name: str
    cards: list[CardEntry] = field(default_factory=list)

    def card_names(self) -> list[str]:
        """Member names in insertion order."""
        return [card.name for card in self.cards]
