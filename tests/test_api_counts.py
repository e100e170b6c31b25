"""Tests for the set count and session endpoints."""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from setcounter.api.dependencies import get_registry, get_resolver
from setcounter.main import app
from setcounter.models.card import PrintRecord
from setcounter.services.run_coordinator import SessionRegistry


@pytest.fixture
def registry(resolver) -> SessionRegistry:
    return SessionRegistry(resolver)


@pytest.fixture
async def client(resolver, registry):
    """Provide an async test client with the fake resolver wired in."""
    app.dependency_overrides[get_resolver] = lambda: resolver
    app.dependency_overrides[get_registry] = lambda: registry

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


class TestCountEndpoint:
    async def test_scenario(self, client: AsyncClient, sample_decklist: str) -> None:
        """Brainstorm in two sets, Ponder exclusive to Coldsnap, Forest skipped."""
        response = await client.post("/sets/count", json={"decklist": sample_decklist})

        assert response.status_code == 200
        data = response.json()
        assert data["exclusive_cards"] == [
            {
                "set_code": "csp",
                "set_name": "Coldsnap",
                "cards": [{"name": "Ponder", "image_url": "https://img.example/csp/ponder.jpg"}],
            }
        ]
        assert [(s["set_code"], s["count"]) for s in data["set_counts"]] == [
            ("csp", 1),
            ("ema", 1),
            ("ice", 1),
        ]
        assert data["skipped"] == [{"line_number": 2, "content": "1 Forest", "reason": "basic_land"}]

    async def test_set_counts_include_members(self, client: AsyncClient) -> None:
        response = await client.post(
            "/sets/count", json={"decklist": "Brainstorm\nCounterspell"}
        )

        sets = {s["set_code"]: s for s in response.json()["set_counts"]}
        assert sets["ice"]["set_name"] == "Ice Age"
        assert [c["name"] for c in sets["ice"]["cards"]] == ["Brainstorm", "Counterspell"]
        assert sets["lea"]["cards"] == [{"name": "Counterspell", "image_url": ""}]

    async def test_reports_outcomes_per_line(self, client: AsyncClient) -> None:
        response = await client.post(
            "/sets/count",
            json={"decklist": "4 Brainstorm\n1 Force of Will\n1 Brainstrom"},
        )

        data = response.json()
        outcomes = data["outcomes"]
        assert [(o["line_number"], o["status"]) for o in outcomes] == [
            (1, "resolved"),
            (2, "failed"),
            (3, "not_found"),
        ]
        assert outcomes[0]["set_codes"] == ["ema", "ice"]
        assert outcomes[0]["failure"] is None
        assert outcomes[1]["failure"]["kind"] == "external_api_error"
        assert outcomes[2]["failure"]["kind"] == "not_found"
        assert data["coverage"] == {
            "looked_up": 3,
            "resolved": 1,
            "not_found": 1,
            "failed": 1,
            "summary": "1/3 cards resolved",
        }

    async def test_empty_decklist_rejected(self, client: AsyncClient) -> None:
        response = await client.post("/sets/count", json={"decklist": "   \n\n"})

        assert response.status_code == 400
        assert response.json()["detail"]["kind"] == "invalid_input"

    async def test_only_skipped_lines_returns_empty_report(
        self, client: AsyncClient, resolver
    ) -> None:
        """Basic lands and bare quantities are skipped, not rejected."""
        response = await client.post("/sets/count", json={"decklist": "4 Forest\n4 Island\n3"})

        assert response.status_code == 200
        data = response.json()
        assert data["set_counts"] == []
        assert data["exclusive_cards"] == []
        assert data["outcomes"] == []
        assert [(s["line_number"], s["reason"]) for s in data["skipped"]] == [
            (1, "basic_land"),
            (2, "basic_land"),
            (3, "quantity_only"),
        ]
        assert data["coverage"]["looked_up"] == 0
        assert resolver.calls == []

    async def test_missing_body_field(self, client: AsyncClient) -> None:
        response = await client.post("/sets/count", json={})

        assert response.status_code == 422


class TestSessionEndpoints:
    async def test_count_and_latest(self, client: AsyncClient) -> None:
        posted = await client.post("/sessions/abc/count", json={"decklist": "Ponder"})
        latest = await client.get("/sessions/abc/latest")

        assert posted.status_code == 200
        assert latest.status_code == 200
        assert latest.json() == posted.json()

    async def test_latest_unknown_session(self, client: AsyncClient) -> None:
        response = await client.get("/sessions/nobody/latest")

        assert response.status_code == 404

    async def test_empty_decklist_rejected(self, client: AsyncClient) -> None:
        response = await client.post("/sessions/abc/count", json={"decklist": ""})

        assert response.status_code == 400

    async def test_superseded_run_returns_conflict(
        self,
        client: AsyncClient,
        make_resolver,
    ) -> None:
        slow = make_resolver(
            {
                "Slow Card": [PrintRecord("old", "Old Set")],
                "Ponder": [PrintRecord("csp", "Coldsnap")],
            },
            delays={"Slow Card": 0.2},
        )
        registry = SessionRegistry(slow)
        app.dependency_overrides[get_registry] = lambda: registry

        stale = asyncio.create_task(
            client.post("/sessions/abc/count", json={"decklist": "Slow Card"})
        )
        await asyncio.sleep(0.05)
        fresh = await client.post("/sessions/abc/count", json={"decklist": "Ponder"})
        stale_response = await stale

        assert fresh.status_code == 200
        assert stale_response.status_code == 409
        assert stale_response.json()["detail"]["kind"] == "superseded"

        latest = await client.get("/sessions/abc/latest")
        assert [s["set_code"] for s in latest.json()["set_counts"]] == ["csp"]
