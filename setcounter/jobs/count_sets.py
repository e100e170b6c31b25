"""
Count sets for a decklist file against Scryfall.

Usage:
    python -m setcounter.jobs.count_sets decklist.txt
    cat decklist.txt | python -m setcounter.jobs.count_sets -
"""

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from setcounter.analysis.ranker import top_sets
from setcounter.config import settings
from setcounter.models.outcome import SetCountReport
from setcounter.services.print_resolver import ScryfallPrintResolver
from setcounter.services.set_counter import count_sets


def read_decklist(source: str) -> str:
    """Read decklist text from a path, or stdin for '-'."""
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def format_report(report: SetCountReport, limit: int | None = None) -> str:
    """Render a report as plain text."""
    lines: list[str] = ["Exclusive Cards:"]
    if not report.exclusives:
        lines.append("  (none)")
    for code in sorted(report.exclusives):
        group = report.exclusives[code]
        lines.append(f"  {group.set_name} ({group.set_code})")
        lines.extend(f"    {name}" for name in group.card_names())

    lines.append("")
    lines.append("Set Counts:")
    ranked = top_sets(report.aggregates, limit) if limit else report.ranked
    for aggregate in ranked:
        lines.append(f"  {aggregate.set_name} ({aggregate.set_code}): {aggregate.count}")

    unresolved = [o for o in report.outcomes if not o.resolved]
    if unresolved:
        lines.append("")
        lines.append("Not counted:")
        for outcome in unresolved:
            lines.append(
                f"  line {outcome.line_number}: {outcome.card_name} ({outcome.status.value})"
            )

    lines.append("")
    lines.append(report.coverage.summary())
    return "\n".join(lines)


def positive_int(value: str) -> int:
    """argparse type for counts that must be at least 1."""
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid int value: {value!r}") from None
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be at least 1, got {number}")
    return number


async def run_count(
    source: str,
    concurrency: int,
    timeout: float,
    limit: int | None = None,
) -> str:
    """Run the engine for one decklist and return the rendered report."""
    text = read_decklist(source)

    async with ScryfallPrintResolver() as resolver:
        report = await count_sets(
            text,
            resolver,
            max_concurrency=concurrency,
            lookup_timeout=timeout,
        )

    return format_report(report, limit=limit)


def main() -> None:
    """CLI entry point."""
    parser = argparse.ArgumentParser(description="Count the sets a decklist was printed in")
    parser.add_argument("decklist", help="Decklist file, or '-' for stdin")
    parser.add_argument(
        "--concurrency",
        type=positive_int,
        default=settings.max_concurrent_lookups,
        help="Lookups in flight at once",
    )
    parser.add_argument(
        "--timeout",
        type=float,
        default=settings.lookup_timeout_seconds,
        help="Seconds allowed per card lookup",
    )
    parser.add_argument(
        "--top", type=positive_int, default=None, help="Only show the N largest sets"
    )
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    print(asyncio.run(run_count(args.decklist, args.concurrency, args.timeout, args.top)))


if __name__ == "__main__":
    main()
