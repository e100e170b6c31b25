"""
Set ranking for display.

Orders aggregates by distinct card count, highest first. Equal counts
fall back to set code ascending so the order never depends on lookup
completion order.
"""

from collections.abc import Mapping

from setcounter.models.aggregate import SetAggregate


def rank_sets(aggregates: Mapping[str, SetAggregate]) -> list[SetAggregate]:
    """
    Rank sets by how many decklist cards were printed in them.

    Args:
        aggregates: Set code -> aggregate (not modified)

    Returns:
        Aggregates sorted by count descending, then set code ascending
    """
    return sorted(aggregates.values(), key=lambda a: (-a.count, a.set_code))


def top_sets(aggregates: Mapping[str, SetAggregate], limit: int) -> list[SetAggregate]:
    """The `limit` highest-ranked sets."""
    return rank_sets(aggregates)[:limit]
