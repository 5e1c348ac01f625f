"""Airport catalog router — candidate destinations and fallback hubs."""

from fastapi import APIRouter, Depends

from app.config import Settings
from app.data.airports import DESTINATION_AIRPORTS, airport_name
from app.routers.search import get_settings
from app.schemas.flight import DestinationAirport

router = APIRouter()


@router.get("/destinations", response_model=list[DestinationAirport])
async def list_destinations(config: Settings = Depends(get_settings)):
    """Curated destinations near Albertville with approximate ground transfer times."""
    defaults = set(config.primary_destination_list)
    return [
        DestinationAirport(
            code=code,
            name=name,
            transfer_hours=hours,
            is_default=code in defaults,
        )
        for code, (name, hours) in DESTINATION_AIRPORTS.items()
    ]


@router.get("/hubs", response_model=list[DestinationAirport])
async def list_hubs(config: Settings = Depends(get_settings)):
    """Hub airports searched when the sandbox primary pass comes back empty."""
    return [
        DestinationAirport(
            code=code,
            name=airport_name(code),
            transfer_hours=DESTINATION_AIRPORTS.get(code, (None, None))[1],
        )
        for code in config.fallback_hub_list
    ]
