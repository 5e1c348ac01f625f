"""Shared fixtures: explicit settings and an in-memory Amadeus transport."""

from urllib.parse import parse_qs

import httpx
import pytest

from app.config import Settings


def make_settings(**overrides) -> Settings:
    values = {
        "amadeus_client_id": "client-id",
        "amadeus_client_secret": "client-secret",
        "amadeus_env": "live",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


def make_offer(
    price: str | None = "915.00",
    outbound: list[tuple[str, str, str]] | None = None,
    inbound: list[tuple[str, str, str]] | None = None,
    outbound_duration: str = "PT7H30M",
    inbound_duration: str = "PT8H",
) -> dict:
    """Build an Amadeus offer; legs are lists of (carrier, airport, departure time)."""
    if outbound is None:
        outbound = [("TS", "YUL", "2025-08-18T19:45:00")]
    if inbound is None:
        inbound = [("TS", "LYS", "2025-08-28T12:10:00")]

    def segments(leg):
        return [
            {"carrierCode": carrier, "departure": {"iataCode": airport, "at": at}}
            for carrier, airport, at in leg
        ]

    offer = {
        "type": "flight-offer",
        "price": {"currency": "CAD"},
        "itineraries": [
            {"duration": outbound_duration, "segments": segments(outbound)},
            {"duration": inbound_duration, "segments": segments(inbound)},
        ],
    }
    if price is not None:
        offer["price"]["grandTotal"] = price
    return offer


class FakeAmadeus:
    """Routes token and flight-offer requests to configurable callbacks."""

    def __init__(self, offers_for=None, token_status: int = 200, token_body: str | None = None):
        self.offers_for = offers_for or (lambda params: [])
        self.token_status = token_status
        self.token_body = token_body
        self.token_requests: list[httpx.Request] = []
        self.offer_requests: list[dict] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        if request.url.path == "/v1/security/oauth2/token":
            self.token_requests.append(request)
            if self.token_status != 200:
                return httpx.Response(self.token_status, text=self.token_body or "")
            return httpx.Response(200, json={"access_token": "test-token", "expires_in": 1799})

        if request.url.path == "/v2/shopping/flight-offers":
            params = dict(request.url.params)
            self.offer_requests.append(params)
            result = self.offers_for(params)
            if isinstance(result, httpx.Response):
                return result
            return httpx.Response(200, json={"data": result})

        return httpx.Response(404, text="not found")

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    def form(self, request: httpx.Request) -> dict:
        return {k: v[0] for k, v in parse_qs(request.content.decode()).items()}


@pytest.fixture()
def settings_factory():
    return make_settings


@pytest.fixture()
def fake_amadeus():
    return FakeAmadeus()
