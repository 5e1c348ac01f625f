"""Search router — flexible-window destination search."""

import logging

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from app.config import Settings, settings
from app.schemas.search import SearchParams, SearchResponse
from app.services.amadeus_client import TokenExchangeError
from app.services.search_orchestrator import SearchOrchestrator

logger = logging.getLogger(__name__)

router = APIRouter()


def get_settings() -> Settings:
    return settings


def get_search_orchestrator(config: Settings = Depends(get_settings)) -> SearchOrchestrator:
    return SearchOrchestrator(config)


@router.get(
    "",
    response_model=SearchResponse,
    response_model_by_alias=True,
    response_model_exclude_unset=True,
    summary="Search round-trip offers to the candidate destinations",
)
async def search_flights(
    fly_from: str | None = Query(None, description="Origin IATA code"),
    dateFrom: str | None = Query(None, description="Outbound date (YYYY-MM-DD)"),
    returnFrom: str | None = Query(None, description="Earliest return date (YYYY-MM-DD)"),
    returnTo: str | None = Query(None, description="Latest return date (YYYY-MM-DD)"),
    curr: str | None = Query(None, description="Currency code"),
    fly_to: str | None = Query(None, description="Comma-separated destination IATA codes"),
    max_stopovers: str | None = Query(None, description="0, 1 or 2"),
    excludeAC: str | None = Query(None, description="1 to exclude the configured carrier"),
    cabin: str | None = Query(None, description="M (economy), W (premium economy), C (business)"),
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator),
    config: Settings = Depends(get_settings),
):
    """Run the search and return offers sorted by price, then total duration."""
    params = SearchParams.from_query(
        {
            "fly_from": fly_from,
            "dateFrom": dateFrom,
            "returnFrom": returnFrom,
            "returnTo": returnTo,
            "curr": curr,
            "fly_to": fly_to,
            "max_stopovers": max_stopovers,
            "excludeAC": excludeAC,
            "cabin": cabin,
        },
        config,
    )

    try:
        envelope = await orchestrator.search(params)
    except TokenExchangeError as e:
        return PlainTextResponse(e.body, status_code=e.status_code)
    except Exception as e:
        logger.error(f"Search failed for {params.origin}: {e}", exc_info=True)
        return PlainTextResponse(str(e) or "Server error", status_code=500)

    return envelope
