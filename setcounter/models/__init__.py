from setcounter.models.aggregate import ExclusiveGroup, SetAggregate
from setcounter.models.card import CardEntry, PrintRecord
from setcounter.models.failure import (
    CardNotFoundError,
    EmptyDecklistError,
    FailureDetail,
    FailureKind,
    KnownError,
    LookupFailedError,
    RunSupersededError,
)
from setcounter.models.outcome import (
    CardOutcome,
    Coverage,
    LookupStatus,
    SetCountReport,
    SkippedLine,
)

__all__ = [
    "CardEntry",
    "CardNotFoundError",
    "CardOutcome",
    "Coverage",
    "EmptyDecklistError",
    "ExclusiveGroup",
    "FailureDetail",
    "FailureKind",
    "KnownError",
    "LookupFailedError",
    "LookupStatus",
    "PrintRecord",
    "RunSupersededError",
    "SetAggregate",
    "SetCountReport",
    "SkippedLine",
]
