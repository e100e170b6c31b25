"""
Exclusivity classification.

A card is exclusive when its entire printing history lies in exactly one
set. Membership is tracked as a set of distinct set codes per card, never
as a count of printings: a card with three variants in one set is printed
in one set, not three.

Cards with no resolved printings are not classified at all.
"""

from collections.abc import Iterable

from setcounter.models.aggregate import ExclusiveGroup
from setcounter.models.card import CardEntry, PrintRecord


class ExclusivityClassifier:
    """
    Tracks each card's distinct sets, then groups single-set cards.

    Not safe for concurrent writers; observe from a single task.
    """

    def __init__(self) -> None:
        # card name -> set codes, in first-seen card order
        self._memberships: dict[str, set[str]] = {}
        # set code -> (set name, image for the first card seen there)
        self._set_names: dict[str, str] = {}
        self._images: dict[tuple[str, str], str] = {}

    def observe(self, card_name: str, prints: Iterable[PrintRecord]) -> None:
        """Record the sets a card was printed in."""
        records = list(prints)
        if not records:
            return

        membership = self._memberships.setdefault(card_name, set())
        for record in records:
            membership.add(record.set_code)
            self._set_names.setdefault(record.set_code, record.set_name)
            self._images.setdefault((card_name, record.set_code), record.image_url)

    def distinct_set_count(self, card_name: str) -> int:
        """Number of distinct sets a card was seen in (0 if never resolved)."""
        return len(self._memberships.get(card_name, ()))

    def memberships(self) -> dict[str, frozenset[str]]:
        """Card name -> distinct set codes."""
        return {name: frozenset(codes) for name, codes in self._memberships.items()}

    def is_exclusive(self, card_name: str) -> bool:
        return self.distinct_set_count(card_name) == 1

    def groups(self) -> dict[str, ExclusiveGroup]:
        """
        Exclusive cards keyed by their only set.

        Returns:
            Dict mapping set code to ExclusiveGroup, groups and members in
            first-observed card order
        """
        groups: dict[str, ExclusiveGroup] = {}

        for card_name, set_codes in self._memberships.items():
            if len(set_codes) != 1:
                continue

            (set_code,) = set_codes
            group = groups.get(set_code)
            if group is None:
                group = ExclusiveGroup(set_code=set_code, set_name=self._set_names[set_code])
                groups[set_code] = group

            group.cards.append(
                CardEntry(name=card_name, image_url=self._images[(card_name, set_code)])
            )

        return groups


def classify_exclusives(
    histories: Iterable[tuple[str, list[PrintRecord]]],
) -> dict[str, ExclusiveGroup]:
    """
    Group single-set cards by set.

    Args:
        histories: Resolved cards as (card name, printings) pairs

    Returns:
        Dict mapping set code to ExclusiveGroup
    """
    classifier = ExclusivityClassifier()
    for card_name, prints in histories:
        classifier.observe(card_name, prints)
    return classifier.groups()
