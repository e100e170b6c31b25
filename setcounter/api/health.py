"""
Service status endpoint.

Reports how full the in-memory session registry is. Scryfall
availability is reported per card in each run, not here.
"""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from setcounter.api.dependencies import get_registry
from setcounter.services.run_coordinator import SessionRegistry

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    status: str
    active_sessions: int
    max_sessions: int


@router.get("/health", response_model=HealthResponse)
async def health(registry: Annotated[SessionRegistry, Depends(get_registry)]) -> HealthResponse:
    """Healthy while the app is up; also returns session usage against its cap."""
    return HealthResponse(
        status="healthy",
        active_sessions=len(registry),
        max_sessions=registry.max_sessions,
    )
