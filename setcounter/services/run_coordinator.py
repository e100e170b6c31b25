"""
Run coordination for repeated submissions.

A user may submit a new decklist while the previous one is still being
looked up. Only the newest submission may publish results:

- every submit() takes a new generation number
- the previous in-flight run is cancelled
- a run that finishes after being superseded is discarded, never stored

The coordinator owns the "latest result" state; the engine itself stays
stateless.
"""

import asyncio
import logging
from collections import OrderedDict
from collections.abc import Awaitable, Callable

from setcounter.config import settings
from setcounter.models.failure import RunSupersededError
from setcounter.models.outcome import SetCountReport
from setcounter.services.print_resolver import PrintResolver
from setcounter.services.set_counter import count_sets

logger = logging.getLogger(__name__)

RunFunction = Callable[[str, PrintResolver], Awaitable[SetCountReport]]


class RunCoordinator:
    """
    Serializes decklist runs for one user session.

    Usage:
        coordinator = RunCoordinator(resolver)
        report = await coordinator.submit(text)
    """

    def __init__(self, resolver: PrintResolver, run: RunFunction = count_sets) -> None:
        self._resolver = resolver
        self._run = run
        self._generation = 0
        self._task: asyncio.Task[SetCountReport] | None = None
        self._latest: SetCountReport | None = None
        self._latest_generation = 0

    @property
    def generation(self) -> int:
        """Generation number of the most recent submission."""
        return self._generation

    @property
    def latest(self) -> SetCountReport | None:
        """Report of the newest submission, once it has completed."""
        if self._latest_generation != self._generation:
            return None
        return self._latest

    @property
    def in_flight(self) -> bool:
        return self._task is not None and not self._task.done()

    async def submit(self, decklist_text: str) -> SetCountReport:
        """
        Start a run, cancelling any earlier one still in flight.

        Raises:
            RunSupersededError: A newer submit() replaced this run
                before it finished
        """
        self._generation += 1
        generation = self._generation

        if self._task is not None and not self._task.done():
            logger.info("Cancelling run %d, superseded by run %d", generation - 1, generation)
            self._task.cancel()

        task = asyncio.create_task(self._run(decklist_text, self._resolver))
        self._task = task

        try:
            report = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                raise RunSupersededError(generation, self._generation) from None
            raise

        if generation != self._generation:
            logger.info("Discarding result of run %d (current is %d)", generation, self._generation)
            raise RunSupersededError(generation, self._generation)

        self._latest = report
        self._latest_generation = generation
        return report

    def cancel(self) -> None:
        """Cancel the in-flight run, if any, and invalidate its result."""
        if self._task is not None and not self._task.done():
            self._generation += 1
            self._task.cancel()


class SessionRegistry:
    """
    In-memory RunCoordinator per session id.

    Holds at most `max_sessions` coordinators. When a new session pushes
    past the cap, the least recently used idle coordinators are dropped;
    sessions with a run in flight are never evicted.
    """

    def __init__(
        self,
        resolver: PrintResolver,
        run: RunFunction = count_sets,
        max_sessions: int | None = None,
    ) -> None:
        self._resolver = resolver
        self._run = run
        self.max_sessions = max_sessions or settings.max_sessions
        self._coordinators: OrderedDict[str, RunCoordinator] = OrderedDict()

    def __len__(self) -> int:
        return len(self._coordinators)

    def get(self, session_id: str) -> RunCoordinator:
        """Coordinator for a session, created on first use."""
        coordinator = self._coordinators.get(session_id)
        if coordinator is None:
            coordinator = RunCoordinator(self._resolver, self._run)
            self._coordinators[session_id] = coordinator
            self._evict_idle()
        else:
            self._coordinators.move_to_end(session_id)
        return coordinator

    def find(self, session_id: str) -> RunCoordinator | None:
        return self._coordinators.get(session_id)

    def close(self) -> None:
        """Cancel every in-flight run."""
        for coordinator in self._coordinators.values():
            coordinator.cancel()
        self._coordinators.clear()

    def _evict_idle(self) -> None:
        excess = len(self._coordinators) - self.max_sessions
        if excess <= 0:
            return
        idle = [sid for sid, c in self._coordinators.items() if not c.in_flight]
        # Newest entry is the session being created
        for session_id in idle[:-1][:excess]:
            del self._coordinators[session_id]
            logger.debug("Evicted idle session %s", session_id)
