"""
Set counting engine.

One call turns decklist text into set tallies and exclusive-card groups:

    parse -> resolve (bounded pool) -> fold in input order -> rank

Each distinct card name is looked up once per run, at most
`max_concurrency` at a time, each bounded by `lookup_timeout`. A lookup
that fails or times out only affects its own card. Folding happens in
the calling task after every lookup has settled, in decklist order, so
the result does not depend on which lookup finished first.

The engine holds no state between calls.
"""

import asyncio
import logging

from setcounter.analysis.aggregator import SetAggregator
from setcounter.analysis.exclusivity import ExclusivityClassifier
from setcounter.analysis.ranker import rank_sets
from setcounter.config import settings
from setcounter.models.card import PrintRecord
from setcounter.models.failure import (
    FailureDetail,
    FailureKind,
    KnownError,
    LookupFailedError,
)
from setcounter.models.outcome import (
    CardOutcome,
    Coverage,
    LookupStatus,
    SetCountReport,
)
from setcounter.parsers.decklist import ParsedDecklist, parse_decklist
from setcounter.services.print_resolver import PrintResolver

logger = logging.getLogger(__name__)


# (status, prints, failure) for one distinct card name
_Resolution = tuple[LookupStatus, list[PrintRecord], FailureDetail | None]


async def resolve_card(
    resolver: PrintResolver,
    card_name: str,
    semaphore: asyncio.Semaphore,
    lookup_timeout: float,
) -> _Resolution:
    """
    Resolve one card, converting failures into an outcome.

    Only known lookup failures and timeouts are absorbed; anything else
    is a bug and propagates.
    """
    async with semaphore:
        try:
            prints = await asyncio.wait_for(resolver.resolve(card_name), timeout=lookup_timeout)
        except asyncio.TimeoutError:
            error = LookupFailedError(
                card_name,
                detail=f"No answer within {lookup_timeout:g}s",
                kind=FailureKind.SERVICE_UNAVAILABLE,
            )
            logger.warning("Lookup timed out for %s", card_name)
            return LookupStatus.FAILED, [], error.to_detail()
        except KnownError as e:
            if e.kind is FailureKind.NOT_FOUND:
                logger.info("Card not found: %s", card_name)
                return LookupStatus.NOT_FOUND, [], e.to_detail()
            logger.warning("Lookup failed for %s: %s", card_name, e.detail or e.message)
            return LookupStatus.FAILED, [], e.to_detail()

    return LookupStatus.RESOLVED, prints, None


async def resolve_all(
    resolver: PrintResolver,
    card_names: list[str],
    max_concurrency: int,
    lookup_timeout: float,
) -> dict[str, _Resolution]:
    """
    Resolve distinct card names through a bounded pool.

    Returns:
        Dict mapping card name to its resolution, in the given name order
    """
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")

    semaphore = asyncio.Semaphore(max_concurrency)
    # An unexpected error cancels the remaining lookups before propagating
    try:
        async with asyncio.TaskGroup() as group:
            tasks = [
                group.create_task(resolve_card(resolver, name, semaphore, lookup_timeout))
                for name in card_names
            ]
    except ExceptionGroup as eg:
        raise eg.exceptions[0] from eg
    return {name: task.result() for name, task in zip(card_names, tasks, strict=True)}


def build_report(
    parsed: ParsedDecklist,
    resolutions: dict[str, _Resolution],
) -> SetCountReport:
    """
    Fold resolved printings into a report.

    Pure: the same inputs always give the same report.
    """
    aggregator = SetAggregator()
    classifier = ExclusivityClassifier()
    outcomes: list[CardOutcome] = []

    for entry in parsed.entries:
        status, prints, failure = resolutions[entry.card_name]
        outcomes.append(
            CardOutcome(
                line_number=entry.line_number,
                card_name=entry.card_name,
                status=status,
                prints=prints,
                failure=failure,
            )
        )
        if status is LookupStatus.RESOLVED:
            aggregator.add(entry.card_name, prints)
            classifier.observe(entry.card_name, prints)

    statuses = [status for status, _, _ in resolutions.values()]
    coverage = Coverage(
        looked_up=len(statuses),
        resolved=statuses.count(LookupStatus.RESOLVED),
        not_found=statuses.count(LookupStatus.NOT_FOUND),
        failed=statuses.count(LookupStatus.FAILED),
    )

    aggregates = aggregator.aggregates
    return SetCountReport(
        aggregates=aggregates,
        exclusives=classifier.groups(),
        ranked=rank_sets(aggregates),
        outcomes=outcomes,
        skipped=parsed.skipped,
        coverage=coverage,
    )


async def count_sets(
    decklist_text: str,
    resolver: PrintResolver,
    *,
    max_concurrency: int | None = None,
    lookup_timeout: float | None = None,
) -> SetCountReport:
    """
    Count, per set, how many decklist cards were ever printed there.

    Args:
        decklist_text: Raw "[quantity] name" lines
        resolver: Source of printing histories
        max_concurrency: Lookups in flight at once (default from settings)
        lookup_timeout: Seconds allowed per card (default from settings)

    Returns:
        SetCountReport with aggregates, exclusive groups, ranking,
        per-line outcomes and coverage
    """
    if max_concurrency is None:
        max_concurrency = settings.max_concurrent_lookups
    if lookup_timeout is None:
        lookup_timeout = settings.lookup_timeout_seconds

    parsed = parse_decklist(decklist_text)
    names = parsed.unique_names()

    logger.info(
        "Counting sets for %d cards (%d lines skipped)",
        len(names),
        len(parsed.skipped),
    )

    resolutions = await resolve_all(resolver, names, max_concurrency, lookup_timeout)
    report = build_report(parsed, resolutions)

    logger.info(
        "Set count complete: %s across %d sets, %d exclusive groups",
        report.coverage.summary(),
        len(report.aggregates),
        len(report.exclusives),
    )
    if report.coverage.all_failed:
        logger.warning("Every lookup failed; results are empty")

    return report
