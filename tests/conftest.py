import asyncio
from collections.abc import Callable

import pytest

from setcounter.models.card import PrintRecord
from setcounter.models.failure import CardNotFoundError, LookupFailedError


class FakePrintResolver:
    """
    In-memory PrintResolver.

    Values in `histories` are either a list of PrintRecords or an
    exception to raise. Unknown names raise CardNotFoundError.
    """

    def __init__(
        self,
        histories: dict[str, list[PrintRecord] | Exception],
        delays: dict[str, float] | None = None,
    ) -> None:
        self.histories = histories
        self.delays = delays or {}
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def resolve(self, card_name: str) -> list[PrintRecord]:
        self.calls.append(card_name)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(card_name, 0))
            history = self.histories.get(card_name)
            if history is None:
                raise CardNotFoundError(card_name)
            if isinstance(history, Exception):
                raise history
            return list(history)
        finally:
            self.in_flight -= 1


@pytest.fixture
def make_resolver() -> Callable[..., FakePrintResolver]:
    """Factory for FakePrintResolver instances."""
    return FakePrintResolver


@pytest.fixture
def card_histories() -> dict[str, list[PrintRecord] | Exception]:
    """Printing histories for a small decklist."""
    return {
        "Brainstorm": [
            PrintRecord("ice", "Ice Age", "https://img.example/ice/brainstorm.jpg"),
            PrintRecord("ema", "Eternal Masters", "https://img.example/ema/brainstorm.jpg"),
        ],
        "Ponder": [
            PrintRecord("csp", "Coldsnap", "https://img.example/csp/ponder.jpg"),
        ],
        # Two variants in one set: still a single set
        "Thassa's Oracle": [
            PrintRecord("thb", "Theros Beyond Death", "https://img.example/thb/oracle.jpg"),
            PrintRecord("thb", "Theros Beyond Death", "https://img.example/thb/oracle-alt.jpg"),
        ],
        "Counterspell": [
            PrintRecord("lea", "Limited Edition Alpha", ""),
            PrintRecord("ice", "Ice Age", "https://img.example/ice/counterspell.jpg"),
            PrintRecord("ema", "Eternal Masters", "https://img.example/ema/counterspell.jpg"),
        ],
        "Force of Will": LookupFailedError("Force of Will", detail="HTTP 503"),
    }


@pytest.fixture
def resolver(
    make_resolver: Callable[..., FakePrintResolver],
    card_histories: dict[str, list[PrintRecord] | Exception],
) -> FakePrintResolver:
    return make_resolver(card_histories)


@pytest.fixture
def sample_decklist() -> str:
    return "1 Brainstorm\n1 Forest\n1 Ponder"
