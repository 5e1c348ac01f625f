"""Amadeus API client — OAuth2 token exchange and flight-offer queries."""

import logging
from dataclasses import dataclass, field
from datetime import date

import httpx

from app.config import Settings

logger = logging.getLogger(__name__)

# Cabin selector (UI codes) -> Amadeus travelClass
TRAVEL_CLASS_MAP = {
    "M": "ECONOMY",
    "W": "PREMIUM_ECONOMY",
    "C": "BUSINESS",
}


class TokenExchangeError(Exception):
    """OAuth credential exchange rejected by Amadeus."""

    def __init__(self, status_code: int, body: str):
        super().__init__(f"Amadeus token exchange failed with status {status_code}")
        self.status_code = status_code
        self.body = body


@dataclass
class QueryOutcome:
    """Result of one (destination, return date) query; skipped queries carry a reason."""

    destination: str
    return_date: date
    offers: list[dict] = field(default_factory=list)
    skipped: bool = False
    reason: str | None = None


class AmadeusClient:
    """Thin adapter over the Amadeus Self-Service API.

    One instance per search invocation; use as an async context manager so the
    underlying connection pool is closed afterwards.
    """

    def __init__(self, config: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._client = httpx.AsyncClient(
            base_url=config.amadeus_base_url,
            timeout=config.amadeus_timeout_seconds,
            transport=transport,
        )

    async def __aenter__(self) -> "AmadeusClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.close()

    async def get_access_token(self) -> str:
        """Exchange client credentials for a bearer token. No retry."""
        resp = await self._client.post(
            "/v1/security/oauth2/token",
            data={
                "grant_type": "client_credentials",
                "client_id": self._config.amadeus_client_id,
                "client_secret": self._config.amadeus_client_secret,
            },
            headers={"Content-Type": "application/x-www-form-urlencoded"},
        )
        if not resp.is_success:
            logger.error(f"Amadeus token exchange failed: {resp.status_code}")
            raise TokenExchangeError(resp.status_code, resp.text)
        token = resp.json()["access_token"]
        logger.info(f"Amadeus token obtained ({self._config.environment})")
        return token

    async def search_flight_offers(
        self,
        token: str,
        origin: str,
        destination: str,
        departure_date: date,
        return_date: date,
        currency: str,
        non_stop: bool,
        travel_class: str = "ECONOMY",
        excluded_carrier: str | None = None,
        max_results: int = 5,
    ) -> QueryOutcome:
        """Query round-trip offers for one destination and return date.

        Failures are reported as a skipped outcome, never raised.
        """
        params = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date.isoformat(),
            "returnDate": return_date.isoformat(),
            "adults": 1,
            "currencyCode": currency,
            "max": max_results,
            "nonStop": "true" if non_stop else "false",
            "travelClass": travel_class,
        }
        if excluded_carrier:
            params["excludeAirlineCodes"] = excluded_carrier

        try:
            resp = await self._client.get(
                "/v2/shopping/flight-offers",
                params=params,
                headers={"Authorization": f"Bearer {token}"},
            )
        except httpx.TimeoutException:
            return QueryOutcome(destination, return_date, skipped=True, reason="timeout")
        except httpx.RequestError as e:
            return QueryOutcome(destination, return_date, skipped=True, reason=f"request error: {e}")

        if not resp.is_success:
            return QueryOutcome(
                destination, return_date, skipped=True, reason=f"status {resp.status_code}"
            )

        try:
            data = resp.json()
        except ValueError:
            return QueryOutcome(destination, return_date, skipped=True, reason="invalid JSON")

        offers = data.get("data") if isinstance(data, dict) else None
        return QueryOutcome(destination, return_date, offers=list(offers or []))

    async def close(self):
        await self._client.aclose()
