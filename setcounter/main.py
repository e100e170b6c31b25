from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from importlib.metadata import version as pkg_version

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from setcounter.api import counts_router, health_router, sessions_router
from setcounter.config import settings
from setcounter.services.print_resolver import ScryfallPrintResolver
from setcounter.services.run_coordinator import SessionRegistry


@asynccontextmanager
async def lifespan(application: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler: one shared Scryfall client."""
    resolver = ScryfallPrintResolver()
    application.state.resolver = resolver
    application.state.registry = SessionRegistry(resolver)
    try:
        yield
    finally:
        application.state.registry.close()
        await resolver.aclose()


app = FastAPI(
    title=settings.app_name,
    version=pkg_version("setcounter"),
    lifespan=lifespan,
)

app.include_router(counts_router)
app.include_router(health_router)
app.include_router(sessions_router)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Tighten in production
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
