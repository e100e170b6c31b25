"""
Session API endpoints.

A session keeps the latest result of its newest submission in memory.
Submitting again while a run is in flight cancels that run; the
superseded request gets 409 instead of stale results.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from setcounter.api.counts import (
    CountRequest,
    CountResponse,
    raise_http,
    report_to_response,
    require_cards,
)
from setcounter.api.dependencies import get_registry
from setcounter.models.failure import KnownError
from setcounter.services.run_coordinator import SessionRegistry

router = APIRouter(prefix="/sessions", tags=["sessions"])


@router.post("/{session_id}/count", response_model=CountResponse)
async def count_session_decklist(
    session_id: str,
    request: CountRequest,
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> CountResponse:
    """
    Count sets for a decklist within a session.

    Returns 409 if a newer submission for the same session replaced this
    one before it finished.
    """
    try:
        require_cards(request.decklist)
        report = await registry.get(session_id).submit(request.decklist)
    except KnownError as e:
        raise_http(e)

    return report_to_response(report)


@router.get("/{session_id}/latest", response_model=CountResponse)
async def get_latest_result(
    session_id: str,
    registry: Annotated[SessionRegistry, Depends(get_registry)],
) -> CountResponse:
    """
    Latest completed result for a session.

    Returns 404 if the session has no completed run for its newest
    submission.
    """
    coordinator = registry.find(session_id)
    report = coordinator.latest if coordinator is not None else None

    if report is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"No completed result for session '{session_id}'",
        )

    return report_to_response(report)
