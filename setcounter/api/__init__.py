from setcounter.api.counts import router as counts_router
from setcounter.api.health import router as health_router
from setcounter.api.sessions import router as sessions_router

__all__ = [
    "counts_router",
    "health_router",
    "sessions_router",
]
