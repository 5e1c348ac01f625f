"""Offer normalizer — flattens Amadeus round-trip offers into the display schema."""

import math
import re

# Date part (Y/M/W/D) is accepted but only the time part is counted
_ISO_DURATION = re.compile(
    r"P(?:\d+Y)?(?:\d+M)?(?:\d+W)?(?:\d+D)?T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+)S)?"
)

DEEP_LINK_TEMPLATE = (
    "https://www.google.com/flights?hl=en#flt="
    "{origin}.{destination}.{outbound_date}*{destination}.{origin}.{inbound_date}"
    ";c:{currency};e:1;sd:1;t:e"
)


def parse_iso_duration(duration_str: str | None) -> int:
    """Parse ISO 8601 duration (PT2H30M) to seconds. Unparseable input gives 0."""
    if not isinstance(duration_str, str):
        return 0
    m = _ISO_DURATION.search(duration_str)
    if not m:
        return 0
    hours, minutes, seconds = (int(g or 0) for g in m.groups())
    return hours * 3600 + minutes * 60 + seconds


def build_deep_link(
    origin: str,
    destination: str,
    outbound_date: str,
    inbound_date: str,
    currency: str,
) -> str:
    return DEEP_LINK_TEMPLATE.format(
        origin=origin,
        destination=destination,
        outbound_date=outbound_date,
        inbound_date=inbound_date,
        currency=currency,
    )


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _as_text(value) -> str | None:
    return value if isinstance(value, str) and value else None


def _parse_price(price: dict) -> float:
    raw = price.get("grandTotal") or price.get("total") or 0
    try:
        value = float(raw)
    except (TypeError, ValueError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def _legs(offer: dict) -> tuple[dict, dict, list[dict], list[dict]]:
    """Outbound and inbound itineraries plus their segments; malformed parts become empty."""
    itineraries = _as_list(offer.get("itineraries"))
    outbound = _as_dict(itineraries[0]) if len(itineraries) > 0 else {}
    inbound = _as_dict(itineraries[1]) if len(itineraries) > 1 else {}
    out_segments = [s for s in _as_list(outbound.get("segments")) if isinstance(s, dict)]
    in_segments = [s for s in _as_list(inbound.get("segments")) if isinstance(s, dict)]
    return outbound, inbound, out_segments, in_segments


def itinerary_signature(offer: dict) -> tuple:
    """Identity of an offer's routing: carrier, flight number and departure of every segment."""
    _, _, out_segments, in_segments = _legs(_as_dict(offer))
    return tuple(
        tuple(
            (
                _as_text(s.get("carrierCode")),
                _as_text(s.get("number")),
                _as_text(_as_dict(s.get("departure")).get("iataCode")),
                _as_text(_as_dict(s.get("departure")).get("at")),
            )
            for s in segments
        )
        for segments in (out_segments, in_segments)
    )


def normalize_offer(
    offer: dict,
    currency: str,
    destination: str,
    fallback_origin: str = "YUL",
) -> dict:
    """Map one Amadeus flight offer into a flat display record.

    The destination is the code the query was issued for; the offer's own
    arrival airport is not trusted. A missing or malformed inbound itinerary
    counts as zero segments and zero duration.
    """
    offer = _as_dict(offer)
    price = _parse_price(_as_dict(offer.get("price")))

    outbound, inbound, out_segments, in_segments = _legs(offer)

    stops = max(0, len(out_segments) - 1)
    duration_total = (
        parse_iso_duration(outbound.get("duration"))
        + parse_iso_duration(inbound.get("duration"))
    )

    # dict keys keep first-seen order
    carriers = dict.fromkeys(
        s["carrierCode"] for s in [*out_segments, *in_segments]
        if isinstance(s.get("carrierCode"), str) and s["carrierCode"]
    )
    airlines = ", ".join(carriers)

    out_departure = _as_dict(out_segments[0].get("departure")) if out_segments else {}
    in_departure = _as_dict(in_segments[0].get("departure")) if in_segments else {}
    fly_from = _as_text(out_departure.get("iataCode")) or fallback_origin
    local_departure = _as_text(out_departure.get("at"))
    return_departure = _as_text(in_departure.get("at"))

    deep_link = build_deep_link(
        fly_from,
        destination,
        (local_departure or "")[:10],
        (return_departure or "")[:10],
        currency,
    )

    return {
        "price": price,
        "currency": currency,
        "airlines": airlines,
        "cityFrom": fly_from,
        "cityTo": destination,
        "flyFrom": fly_from,
        "flyTo": destination,
        "durationTotal": duration_total,
        "stops": stops,
        "deepLink": deep_link,
        "local_departure": local_departure,
        "return_departure": return_departure,
    }
