import re
from collections.abc import Mapping
from datetime import date

from pydantic import BaseModel

from app.config import Settings
from app.schemas.flight import FlightOfferResponse
from app.services.amadeus_client import TRAVEL_CLASS_MAP

_IATA_RE = re.compile(r"^[A-Z]{3}$")


class SearchParams(BaseModel):
    origin: str
    departure_date: date
    return_from: date
    return_to: date
    currency: str
    max_stopovers: int
    cabin: str
    exclude_carrier: bool
    destinations: list[str]

    @property
    def travel_class(self) -> str:
        return TRAVEL_CLASS_MAP.get(self.cabin, "ECONOMY")

    @classmethod
    def from_query(cls, raw: Mapping[str, str | None], config: Settings) -> "SearchParams":
        """Lenient parse of the inbound query; bad or missing values use defaults."""
        return cls(
            origin=_parse_code(raw.get("fly_from"), config.default_origin),
            departure_date=_parse_date(raw.get("dateFrom"), config.default_departure_date),
            return_from=_parse_date(raw.get("returnFrom"), config.default_return_from),
            return_to=_parse_date(raw.get("returnTo"), config.default_return_to),
            currency=_parse_code(raw.get("curr"), config.default_currency),
            max_stopovers=_parse_stopovers(raw.get("max_stopovers"), config.default_max_stopovers),
            cabin=_parse_cabin(raw.get("cabin"), config.default_cabin),
            exclude_carrier=_parse_flag(raw.get("excludeAC"), config.default_exclude_carrier),
            destinations=_parse_destinations(raw.get("fly_to"), config.primary_destination_list),
        )


class SearchResponse(BaseModel):
    ok: bool
    simulated: bool
    env: str
    results: list[FlightOfferResponse]
    note: str


def _parse_date(value: str | None, default: date) -> date:
    if not value:
        return default
    try:
        return date.fromisoformat(value.strip())
    except ValueError:
        return default


def _parse_code(value: str | None, default: str) -> str:
    code = (value or "").strip().upper()
    return code if _IATA_RE.match(code) else default


def _parse_stopovers(value: str | None, default: int) -> int:
    try:
        stops = int((value or "").strip())
    except ValueError:
        return default
    return stops if stops in (0, 1, 2) else default


def _parse_cabin(value: str | None, default: str) -> str:
    cabin = (value or "").strip().upper()
    return cabin if cabin in TRAVEL_CLASS_MAP else default


def _parse_flag(value: str | None, default: bool) -> bool:
    flag = (value or "").strip()
    if flag == "1":
        return True
    if flag == "0":
        return False
    return default


def _parse_destinations(value: str | None, default: list[str]) -> list[str]:
    codes = [c.strip().upper() for c in (value or "").split(",")]
    valid = list(dict.fromkeys(c for c in codes if _IATA_RE.match(c)))
    return valid or list(default)
