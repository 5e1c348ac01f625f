"""Batch query runner — fans out one Amadeus query per destination x return date."""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import date

from app.config import Settings
from app.schemas.search import SearchParams
from app.services.amadeus_client import AmadeusClient, QueryOutcome
from app.services.date_window import enumerate_dates
from app.services.offer_normalizer import itinerary_signature, normalize_offer

logger = logging.getLogger(__name__)


@dataclass
class BatchResult:
    tag: str
    offers: list[dict] = field(default_factory=list)
    signatures: list[tuple] = field(default_factory=list)  # parallel to offers
    queries_issued: int = 0
    skipped: list[QueryOutcome] = field(default_factory=list)

    @property
    def queries_skipped(self) -> int:
        return len(self.skipped)


class BatchQueryRunner:
    """Runs one search pass against Amadeus for a fixed set of search params."""

    def __init__(
        self,
        client: AmadeusClient,
        token: str,
        params: SearchParams,
        config: Settings,
    ):
        self._client = client
        self._token = token
        self._params = params
        self._config = config
        self._semaphore = asyncio.Semaphore(max(1, config.amadeus_max_concurrency))

    async def run(
        self,
        destinations: list[str],
        departure_date: date,
        return_from: date,
        return_to: date,
        max_stopovers: int,
        tag: str,
    ) -> BatchResult:
        """Query every (destination, return date) pair and normalize the offers.

        Offers come back in matrix order (destination-major) and are unsorted.
        """
        return_dates = enumerate_dates(return_from, return_to)
        pairs = [(dest, rdate) for dest in destinations for rdate in return_dates]

        # gather preserves input order, so aggregation happens after fan-out
        outcomes = await asyncio.gather(
            *(self._query(dest, departure_date, rdate, max_stopovers) for dest, rdate in pairs)
        )

        result = BatchResult(tag=tag, queries_issued=len(pairs))
        cap = self._config.amadeus_max_results
        for outcome in outcomes:
            if outcome.skipped:
                logger.warning(
                    f"[{tag}] skipped {self._params.origin}->{outcome.destination} "
                    f"returning {outcome.return_date}: {outcome.reason}"
                )
                result.skipped.append(outcome)
                continue
            for offer in outcome.offers[:cap]:
                record = normalize_offer(
                    offer,
                    self._params.currency,
                    outcome.destination,
                    fallback_origin=self._params.origin,
                )
                record["_tag"] = tag
                result.offers.append(record)
                result.signatures.append(itinerary_signature(offer))

        logger.info(
            f"[{tag}] {result.queries_issued} queries, {result.queries_skipped} skipped, "
            f"{len(result.offers)} offers"
        )
        return result

    async def _query(
        self,
        destination: str,
        departure_date: date,
        return_date: date,
        max_stopovers: int,
    ) -> QueryOutcome:
        async with self._semaphore:
            return await self._client.search_flight_offers(
                self._token,
                origin=self._params.origin,
                destination=destination,
                departure_date=departure_date,
                return_date=return_date,
                currency=self._params.currency,
                non_stop=max_stopovers == 0,
                travel_class=self._params.travel_class,
                excluded_carrier=(
                    self._config.excluded_carrier if self._params.exclude_carrier else None
                ),
                max_results=self._config.amadeus_max_results,
            )
