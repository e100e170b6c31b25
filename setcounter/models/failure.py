"""
Failure classification for card lookups and requests.

Every card that cannot be counted is classified, so a caller can tell
"no printings anywhere" apart from "every lookup failed".

Failure kinds:
- NOT_FOUND: Scryfall has no card with that exact name
- EXTERNAL_API_ERROR: Scryfall answered with an unexpected status or payload
- SERVICE_UNAVAILABLE: Scryfall could not be reached, or the lookup timed out
- INVALID_INPUT: The request itself is unusable (e.g. empty decklist)
- SUPERSEDED: A newer run replaced this one before it finished
"""

from enum import Enum

from pydantic import BaseModel, Field


class FailureKind(str, Enum):
    """Classification of failure types."""

    INVALID_INPUT = "invalid_input"
    NOT_FOUND = "not_found"
    EXTERNAL_API_ERROR = "external_api_error"
    SERVICE_UNAVAILABLE = "service_unavailable"
    SUPERSEDED = "superseded"


class FailureDetail(BaseModel):
    """Detailed information about a failure."""

    kind: FailureKind = Field(
        ...,
        description="Classification of the failure",
    )
    message: str = Field(
        ...,
        description="User-appropriate explanation of what went wrong",
    )
    detail: str | None = Field(
        default=None,
        description="Additional technical detail (optional)",
    )
    suggestion: str | None = Field(
        default=None,
        description="Suggested action for the user",
    )


class KnownError(Exception):
    """
    Base class for exceptions that represent known, explainable failures.

    Subclass this for errors where the system knows exactly what went wrong.
    """

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        detail: str | None = None,
        suggestion: str | None = None,
        status_code: int = 400,
    ):
        self.kind = kind
        self.message = message
        self.detail = detail
        self.suggestion = suggestion
        self.status_code = status_code
        super().__init__(message)

    def to_detail(self) -> FailureDetail:
        """Convert to a FailureDetail."""
        return FailureDetail(
            kind=self.kind,
            message=self.message,
            detail=self.detail,
            suggestion=self.suggestion,
        )


class CardNotFoundError(KnownError):
    """Raised when no card matches the exact name."""

    def __init__(self, card_name: str):
        self.card_name = card_name
        super().__init__(
            kind=FailureKind.NOT_FOUND,
            message=f"No card named '{card_name}' was found.",
            suggestion="Check the spelling. Names must match exactly.",
            status_code=404,
        )


class LookupFailedError(KnownError):
    """
    Raised when a card's printings could not be fetched.

    Covers transport errors, timeouts, unexpected statuses and malformed
    payloads. The card itself may well exist.
    """

    def __init__(
        self,
        card_name: str,
        detail: str | None = None,
        kind: FailureKind = FailureKind.EXTERNAL_API_ERROR,
    ):
        self.card_name = card_name
        super().__init__(
            kind=kind,
            message=f"Could not look up '{card_name}'.",
            detail=detail,
            suggestion="Try again in a moment.",
            status_code=502,
        )


class EmptyDecklistError(KnownError):
    """Raised when a decklist is empty or whitespace only."""

    def __init__(self) -> None:
        super().__init__(
            kind=FailureKind.INVALID_INPUT,
            message="The decklist is empty.",
            suggestion="Paste one card per line, e.g. '4 Lightning Bolt'.",
            status_code=400,
        )


class RunSupersededError(KnownError):
    """Raised when a newer submission replaced a run before it finished."""

    def __init__(self, generation: int, current: int):
        self.generation = generation
        self.current = current
        super().__init__(
            kind=FailureKind.SUPERSEDED,
            message="A newer decklist was submitted; this result was discarded.",
            detail=f"Run {generation} superseded by run {current}",
            status_code=409,
        )
