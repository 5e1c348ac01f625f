from pydantic import BaseModel, Field


class FlightOfferResponse(BaseModel):
    price: float
    currency: str
    airlines: str
    cityFrom: str
    cityTo: str
    flyFrom: str
    flyTo: str
    durationTotal: int
    stops: int
    deepLink: str | None
    local_departure: str | None
    return_departure: str | None
    tag: str | None = Field(default=None, alias="_tag")

    model_config = {"populate_by_name": True}


class DestinationAirport(BaseModel):
    code: str
    name: str
    transfer_hours: float | None = None
    is_default: bool = False
