"""
Set count API endpoint.

Takes a pasted decklist and returns, per set, how many of its cards were
ever printed there, plus the cards exclusive to a single set.
"""

from typing import Annotated, NoReturn

from fastapi import APIRouter, Depends, HTTPException
from pydantic import BaseModel, Field

from setcounter.api.dependencies import get_resolver
from setcounter.models.aggregate import ExclusiveGroup, SetAggregate
from setcounter.models.card import CardEntry
from setcounter.models.failure import EmptyDecklistError, FailureDetail, KnownError
from setcounter.models.outcome import LookupStatus, SetCountReport
from setcounter.services.print_resolver import PrintResolver
from setcounter.services.set_counter import count_sets

router = APIRouter(prefix="/sets", tags=["sets"])


class CountRequest(BaseModel):
    """Request model for a set count run."""

    decklist: str = Field(
        ...,
        description="Newline-separated '[quantity] name' entries",
        examples=["1 Brainstorm\n1 Forest\n1 Ponder"],
    )


class CardResponse(BaseModel):
    """A card inside a set grouping."""

    name: str
    image_url: str = ""


class SetCountResponse(BaseModel):
    """Distinct decklist cards printed in one set."""

    set_code: str
    set_name: str
    count: int
    cards: list[CardResponse] = Field(default_factory=list)


class ExclusiveGroupResponse(BaseModel):
    """Cards printed only in this set."""

    set_code: str
    set_name: str
    cards: list[CardResponse] = Field(default_factory=list)


class CardOutcomeResponse(BaseModel):
    """Lookup result for one decklist line."""

    line_number: int
    card_name: str
    status: LookupStatus
    set_codes: list[str] = Field(
        default_factory=list,
        description="Distinct sets the card was printed in (sorted)",
    )
    failure: FailureDetail | None = None


class SkippedLineResponse(BaseModel):
    """A line excluded before lookup."""

    line_number: int
    content: str
    reason: str


class CoverageResponse(BaseModel):
    """How many distinct cards resolved."""

    looked_up: int
    resolved: int
    not_found: int
    failed: int
    summary: str


class CountResponse(BaseModel):
    """Response model for a set count run."""

    exclusive_cards: list[ExclusiveGroupResponse] = Field(
        default_factory=list,
        description="Single-set cards grouped by set",
    )
    set_counts: list[SetCountResponse] = Field(
        default_factory=list,
        description="Sets ordered by count descending, then set code",
    )
    outcomes: list[CardOutcomeResponse] = Field(default_factory=list)
    skipped: list[SkippedLineResponse] = Field(default_factory=list)
    coverage: CoverageResponse


def _card_response(card: CardEntry) -> CardResponse:
    return CardResponse(name=card.name, image_url=card.image_url)


def _set_response(aggregate: SetAggregate) -> SetCountResponse:
    return SetCountResponse(
        set_code=aggregate.set_code,
        set_name=aggregate.set_name,
        count=aggregate.count,
        cards=[_card_response(c) for c in aggregate.cards],
    )


def _group_response(group: ExclusiveGroup) -> ExclusiveGroupResponse:
    return ExclusiveGroupResponse(
        set_code=group.set_code,
        set_name=group.set_name,
        cards=[_card_response(c) for c in group.cards],
    )


def report_to_response(report: SetCountReport) -> CountResponse:
    """Convert an engine report to the API response model."""
    coverage = report.coverage
    return CountResponse(
        exclusive_cards=[
            _group_response(report.exclusives[code]) for code in sorted(report.exclusives)
        ],
        set_counts=[_set_response(a) for a in report.ranked],
        outcomes=[
            CardOutcomeResponse(
                line_number=o.line_number,
                card_name=o.card_name,
                status=o.status,
                set_codes=sorted(o.set_codes()),
                failure=o.failure,
            )
            for o in report.outcomes
        ],
        skipped=[
            SkippedLineResponse(line_number=s.line_number, content=s.content, reason=s.reason)
            for s in report.skipped
        ],
        coverage=CoverageResponse(
            looked_up=coverage.looked_up,
            resolved=coverage.resolved,
            not_found=coverage.not_found,
            failed=coverage.failed,
            summary=coverage.summary(),
        ),
    )


def require_cards(decklist: str) -> None:
    """
    Reject blank decklists.

    A decklist whose lines are all skipped (basic lands, bare quantities)
    is not rejected; its report lists the skipped lines.

    Raises:
        EmptyDecklistError: Empty or whitespace-only text
    """
    if not decklist.strip():
        raise EmptyDecklistError()


def raise_http(error: KnownError) -> NoReturn:
    """Re-raise a KnownError as an HTTPException carrying its FailureDetail."""
    raise HTTPException(
        status_code=error.status_code,
        detail=error.to_detail().model_dump(mode="json"),
    ) from error


@router.post("/count", response_model=CountResponse)
async def count_decklist_sets(
    request: CountRequest,
    resolver: Annotated[PrintResolver, Depends(get_resolver)],
) -> CountResponse:
    """
    Count sets for a decklist.

    Every non-basic-land card is looked up; each line's outcome is
    reported so failed lookups are visible. Returns 400 if the decklist
    is blank.
    """
    try:
        require_cards(request.decklist)
    except KnownError as e:
        raise_http(e)

    report = await count_sets(request.decklist, resolver)
    return report_to_response(report)
