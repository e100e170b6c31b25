"""
Request dependencies.

The resolver and session registry are created once in the app lifespan
and stored on app.state; tests override these functions.
"""

from fastapi import Request

from setcounter.services.print_resolver import PrintResolver
from setcounter.services.run_coordinator import SessionRegistry


def get_resolver(request: Request) -> PrintResolver:
    """Shared print resolver."""
    resolver: PrintResolver = request.app.state.resolver
    return resolver


def get_registry(request: Request) -> SessionRegistry:
    """Shared per-session run coordinators."""
    registry: SessionRegistry = request.app.state.registry
    return registry
