"""Search orchestrator — primary pass, sandbox broadening, ranking."""

import copy
import logging

import httpx

from app.config import Settings
from app.data.airports import merge_destinations
from app.data.sample_offers import SAMPLE_RESULTS
from app.schemas.search import SearchParams
from app.services.amadeus_client import AmadeusClient
from app.services.batch_runner import BatchQueryRunner, BatchResult
from app.services.date_window import add_days

logger = logging.getLogger(__name__)

NOTE_SIMULATED = "No Amadeus creds; showing sample results."
NOTE_SANDBOX_EMPTY = (
    "Amadeus sandbox returned 0 results (very limited inventory). "
    "Try production or broaden parameters."
)
NOTE_SANDBOX = "Sandbox mode with broadened search."
NOTE_LIVE = "Live mode."


def rank_offers(offers: list[dict]) -> list[dict]:
    """Cheapest first; equal prices ordered by shorter total duration."""
    return sorted(offers, key=lambda o: (o["price"], o["durationTotal"]))


def _offer_key(record: dict, signature: tuple) -> tuple:
    return (
        record["flyTo"], record["price"], record["durationTotal"], record["stops"], signature
    )


def drop_refound_offers(primary: BatchResult, fallback: BatchResult) -> list[dict]:
    """Fallback offers minus exact repeats of itineraries the primary pass already found."""
    if not primary.offers:
        return list(fallback.offers)
    seen = {_offer_key(o, s) for o, s in zip(primary.offers, primary.signatures)}
    return [
        o for o, s in zip(fallback.offers, fallback.signatures)
        if _offer_key(o, s) not in seen
    ]


class SearchOrchestrator:
    """Coordinates token exchange, search passes, and ranking for one search.

    Holds only configuration; every call to `search` is independent.
    """

    def __init__(self, config: Settings, transport: httpx.AsyncBaseTransport | None = None):
        self._config = config
        self._transport = transport

    async def search(self, params: SearchParams) -> dict:
        """
        Execute a full destination search.

        Returns the response envelope: ok, simulated, env, results, note.
        Raises TokenExchangeError when Amadeus rejects the credentials.
        """
        env = self._config.environment

        if not self._config.has_credentials:
            logger.info("No Amadeus credentials configured, serving sample results")
            return {
                "ok": True,
                "simulated": True,
                "env": env,
                "results": copy.deepcopy(SAMPLE_RESULTS),
                "note": NOTE_SIMULATED,
            }

        async with AmadeusClient(self._config, transport=self._transport) as client:
            token = await client.get_access_token()
            runner = BatchQueryRunner(client, token, params, self._config)

            primary = await runner.run(
                params.destinations,
                params.departure_date,
                params.return_from,
                params.return_to,
                params.max_stopovers,
                tag="primary",
            )
            offers = list(primary.offers)

            if self.should_broaden(primary):
                fallback = await self._run_fallback(runner, params)
                offers += drop_refound_offers(primary, fallback)

        results = rank_offers(offers)
        return {
            "ok": True,
            "simulated": False,
            "env": env,
            "results": results,
            "note": self._note(results),
        }

    def should_broaden(self, primary: BatchResult) -> bool:
        return (
            self._config.is_sandbox
            and self._config.broadening_enabled
            and len(primary.offers) < self._config.broadening_threshold
        )

    async def _run_fallback(self, runner: BatchQueryRunner, params: SearchParams) -> BatchResult:
        destinations = merge_destinations(self._config.fallback_hub_list, params.destinations)
        max_stopovers = max(params.max_stopovers, self._config.broadening_min_stopovers)
        return_to = add_days(params.return_to, self._config.broadening_return_extension_days)
        logger.info(
            f"Sandbox primary pass too sparse, broadening to {len(destinations)} airports, "
            f"max {max_stopovers} stops, return by {return_to}"
        )
        return await runner.run(
            destinations,
            params.departure_date,
            params.return_from,
            return_to,
            max_stopovers,
            tag="fallback",
        )

    def _note(self, results: list[dict]) -> str:
        if not self._config.is_sandbox:
            return NOTE_LIVE
        return NOTE_SANDBOX if results else NOTE_SANDBOX_EMPTY
