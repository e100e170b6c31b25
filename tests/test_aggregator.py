from setcounter.analysis.aggregator import SetAggregator, aggregate_sets
from setcounter.models.card import PrintRecord


def _ice() -> PrintRecord:
    return PrintRecord("ice", "Ice Age", "https://img.example/ice.jpg")


def _ema() -> PrintRecord:
    return PrintRecord("ema", "Eternal Masters", "https://img.example/ema.jpg")


class TestSetAggregator:
    def test_first_printing_creates_aggregate(self) -> None:
        aggregator = SetAggregator()

        aggregator.add("Brainstorm", [_ice()])

        aggregate = aggregator.aggregates["ice"]
        assert aggregate.set_name == "Ice Age"
        assert aggregate.count == 1
        assert aggregate.card_names() == ["Brainstorm"]

    def test_card_joins_every_set(self) -> None:
        aggregator = SetAggregator()

        aggregator.add("Brainstorm", [_ice(), _ema()])

        assert set(aggregator.aggregates) == {"ice", "ema"}
        assert aggregator.aggregates["ema"].card_names() == ["Brainstorm"]

    def test_different_cards_in_same_set(self) -> None:
        aggregator = SetAggregator()

        aggregator.add("Brainstorm", [_ice()])
        aggregator.add("Counterspell", [_ice()])

        assert aggregator.aggregates["ice"].count == 2
        assert aggregator.aggregates["ice"].card_names() == ["Brainstorm", "Counterspell"]

    def test_same_set_twice_in_history_counted_once(self) -> None:
        """Variants sharing a set code do not inflate the count."""
        aggregator = SetAggregator()
        variant = PrintRecord("ice", "Ice Age", "https://img.example/ice-alt.jpg")

        aggregator.add("Brainstorm", [_ice(), variant])

        assert aggregator.aggregates["ice"].count == 1

    def test_keeps_image_of_first_printing(self) -> None:
        aggregator = SetAggregator()
        variant = PrintRecord("ice", "Ice Age", "https://img.example/ice-alt.jpg")

        aggregator.add("Brainstorm", [_ice(), variant])

        assert aggregator.aggregates["ice"].cards[0].image_url == "https://img.example/ice.jpg"

    def test_folding_twice_is_idempotent(self) -> None:
        aggregator = SetAggregator()

        aggregator.add("Brainstorm", [_ice(), _ema()])
        aggregator.add("Brainstorm", [_ice(), _ema()])

        assert aggregator.aggregates["ice"].count == 1
        assert aggregator.aggregates["ema"].count == 1

    def test_empty_history_adds_nothing(self) -> None:
        aggregator = SetAggregator()

        aggregator.add("Brainstorm", [])

        assert aggregator.aggregates == {}

    def test_count_matches_members(self) -> None:
        aggregator = SetAggregator()
        for name in ["A", "B", "A", "C", "B"]:
            aggregator.add(name, [_ice(), _ice()])

        aggregate = aggregator.aggregates["ice"]
        assert aggregate.count == len(aggregate.cards) == 3
        assert len(set(aggregate.card_names())) == aggregate.count


class TestAggregateSets:
    def test_builds_from_histories(self) -> None:
        aggregates = aggregate_sets(
            [
                ("Brainstorm", [_ice(), _ema()]),
                ("Ponder", [PrintRecord("csp", "Coldsnap")]),
            ]
        )

        assert {code: a.count for code, a in aggregates.items()} == {
            "ice": 1,
            "ema": 1,
            "csp": 1,
        }

    def test_preserves_first_seen_set_order(self) -> None:
        aggregates = aggregate_sets([("Brainstorm", [_ema(), _ice()])])

        assert list(aggregates) == ["ema", "ice"]
