"""
Set aggregation.

Folds printing histories into per-set tallies of distinct decklist cards.
A card joins every set it was ever printed in: the question answered is
"in which sets could I find a copy of this card", not "which set does
this card belong to".

Folding is idempotent. A card already present in a set is never added
again, whether the same set shows up twice in one history (several
variants sharing a set code) or the same history is folded twice.
"""

from collections.abc import Iterable

from setcounter.models.aggregate import SetAggregate
from setcounter.models.card import CardEntry, PrintRecord


class SetAggregator:
    """
    Accumulates SetAggregates for one run.

    Not safe for concurrent writers; fold from a single task.
    """

    def __init__(self) -> None:
        self._aggregates: dict[str, SetAggregate] = {}

    def add(self, card_name: str, prints: Iterable[PrintRecord]) -> None:
        """
        Fold one card's printing history into the aggregates.

        Args:
            card_name: Card identity
            prints: Every printing of the card
        """
        for record in prints:
            aggregate = self._aggregates.get(record.set_code)
            if aggregate is None:
                aggregate = SetAggregate(set_code=record.set_code, set_name=record.set_name)
                self._aggregates[record.set_code] = aggregate

            if aggregate.contains(card_name):
                continue

            aggregate.cards.append(CardEntry(name=card_name, image_url=record.image_url))

    @property
    def aggregates(self) -> dict[str, SetAggregate]:
        """Set code -> aggregate, in first-seen order."""
        return self._aggregates


def aggregate_sets(histories: Iterable[tuple[str, list[PrintRecord]]]) -> dict[str, SetAggregate]:
    """
    Build aggregates from (card name, printings) pairs.

    Args:
        histories: Resolved cards in the order they should be folded

    Returns:
        Dict mapping set code to SetAggregate
    """
    aggregator = SetAggregator()
    for card_name, prints in histories:
        aggregator.add(card_name, prints)
    return aggregator.aggregates
