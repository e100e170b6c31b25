"""
Scryfall print resolver.

Looks a card up by exact name, then walks its full printing history.

API docs:
- https://scryfall.com/docs/api/cards/named
- https://scryfall.com/docs/api/lists

The resolver does not retry or cache; each call hits Scryfall.
"""

import logging
from typing import Any, Protocol

import httpx

from setcounter.config import settings
from setcounter.models.card import PrintRecord
from setcounter.models.failure import (
    CardNotFoundError,
    FailureKind,
    LookupFailedError,
)

logger = logging.getLogger(__name__)

# Preferred image sizes, best first
IMAGE_PREFERENCE = ("normal", "large")


class PrintResolver(Protocol):
    """Anything that can turn a card name into its printing history."""

    async def resolve(self, card_name: str) -> list[PrintRecord]:
        """
        Fetch every printing of a card.

        Raises:
            CardNotFoundError: No card has this exact name
            LookupFailedError: The history could not be fetched
        """
        ...


def select_image_url(print_data: dict[str, Any]) -> str:
    """
    Pick the display image for a printing.

    Prefers "normal", then "large". Double-faced cards carry their
    images on the faces, so the front face is used when the printing
    itself has none.
    """
    sources = [print_data.get("image_uris")]
    faces = print_data.get("card_faces") or []
    if faces:
        sources.append(faces[0].get("image_uris"))

    for image_uris in sources:
        if not image_uris:
            continue
        for size in IMAGE_PREFERENCE:
            if image_uris.get(size):
                return str(image_uris[size])
    return ""


def parse_print(print_data: dict[str, Any]) -> PrintRecord:
    """Convert one Scryfall card object into a PrintRecord."""
    return PrintRecord(
        set_code=str(print_data["set"]),
        set_name=str(print_data["set_name"]),
        image_url=select_image_url(print_data),
    )


class ScryfallPrintResolver:
    """
    PrintResolver backed by the Scryfall REST API.

    Usage:
        async with ScryfallPrintResolver() as resolver:
            prints = await resolver.resolve("Brainstorm")
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        base_url: str | None = None,
    ) -> None:
        self.base_url = (base_url or settings.scryfall_base_url).rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            headers={
                "User-Agent": settings.user_agent,
                "Accept": "application/json",
            },
            follow_redirects=True,
            timeout=settings.http_timeout_seconds,
        )

    async def __aenter__(self) -> "ScryfallPrintResolver":
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close the HTTP client if this resolver created it."""
        if self._owns_client:
            await self._client.aclose()

    async def resolve(self, card_name: str) -> list[PrintRecord]:
        """
        Fetch every printing of a card, oldest pagination order preserved.

        Raises:
            CardNotFoundError: Scryfall returned 404 for the exact name
            LookupFailedError: Any other HTTP, transport or payload problem
        """
        card = await self._fetch_named(card_name)

        prints_uri = card.get("prints_search_uri")
        if not prints_uri:
            raise LookupFailedError(card_name, detail="Card has no prints_search_uri")

        records: list[PrintRecord] = []
        next_url: str | None = str(prints_uri)
        while next_url:
            page = await self._get_json(card_name, next_url)
            try:
                records.extend(parse_print(item) for item in page["data"])
            except (KeyError, TypeError) as e:
                raise LookupFailedError(card_name, detail=f"Malformed prints payload: {e}") from e
            next_url = page.get("next_page") if page.get("has_more") else None

        logger.debug("Resolved %s: %d printings", card_name, len(records))
        return records

    async def _fetch_named(self, card_name: str) -> dict[str, Any]:
        """Exact-name lookup."""
        response = await self._send(
            card_name, f"{self.base_url}/cards/named", params={"exact": card_name}
        )
        if response.status_code == 404:
            raise CardNotFoundError(card_name)
        return self._decode(card_name, response)

    async def _get_json(self, card_name: str, url: str) -> dict[str, Any]:
        return self._decode(card_name, await self._send(card_name, url))

    async def _send(
        self,
        card_name: str,
        url: str,
        params: dict[str, str] | None = None,
    ) -> httpx.Response:
        try:
            return await self._client.get(url, params=params)
        except httpx.TimeoutException as e:
            raise LookupFailedError(
                card_name, detail=f"Timed out: {e}", kind=FailureKind.SERVICE_UNAVAILABLE
            ) from e
        except httpx.HTTPError as e:
            raise LookupFailedError(
                card_name, detail=str(e), kind=FailureKind.SERVICE_UNAVAILABLE
            ) from e

    def _decode(self, card_name: str, response: httpx.Response) -> dict[str, Any]:
        try:
            response.raise_for_status()
            data = response.json()
        except httpx.HTTPStatusError as e:
            raise LookupFailedError(
                card_name, detail=f"HTTP {e.response.status_code} from {e.request.url}"
            ) from e
        except ValueError as e:
            raise LookupFailedError(card_name, detail=f"Invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise LookupFailedError(card_name, detail="Unexpected response shape")
        return data
