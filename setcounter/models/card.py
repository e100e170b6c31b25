from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class PrintRecord:
    """
    One printing of a card.

    Attributes:
        set_code: Short set identifier (e.g., "ice", "ema")
        set_name: Set display name (e.g., "Ice Age")
        image_url: Card image for this printing, empty if Scryfall has none
    """

    set_code: str
    set_name: str
    image_url: str = ""


@dataclass(frozen=True, slots=True)
class CardEntry:
    """
    A card as shown inside a set grouping.

    The name is the identity; the image is display payload taken from
    the first printing seen in that set.
    """

    name: str
    image_url: str = ""
