from datetime import date

import httpx
import pytest
from conftest import FakeAmadeus, make_offer, make_settings

from app.schemas.search import SearchParams
from app.services.amadeus_client import AmadeusClient
from app.services.batch_runner import BatchQueryRunner


def _params(config, **query):
    return SearchParams.from_query(query, config)


async def _run(fake, config, params, **kwargs):
    run_kwargs = {
        "destinations": ["LYS", "GVA"],
        "departure_date": date(2025, 8, 18),
        "return_from": date(2025, 8, 27),
        "return_to": date(2025, 8, 31),
        "max_stopovers": 1,
        "tag": "primary",
    }
    run_kwargs.update(kwargs)
    async with AmadeusClient(config, transport=fake.transport) as client:
        runner = BatchQueryRunner(client, "test-token", params, config)
        return await runner.run(**run_kwargs)


@pytest.mark.asyncio
async def test_one_query_per_destination_and_return_date():
    fake = FakeAmadeus()
    config = make_settings()

    result = await _run(fake, config, _params(config))

    assert result.queries_issued == 10
    assert len(fake.offer_requests) == 10
    pairs = {(p["destinationLocationCode"], p["returnDate"]) for p in fake.offer_requests}
    assert pairs == {
        (dest, f"2025-08-{day}") for dest in ("LYS", "GVA") for day in range(27, 32)
    }
    assert all(p["max"] == "5" and p["adults"] == "1" for p in fake.offer_requests)
    assert all(p["departureDate"] == "2025-08-18" for p in fake.offer_requests)


@pytest.mark.asyncio
async def test_offers_are_capped_normalized_and_tagged():
    fake = FakeAmadeus(offers_for=lambda params: [make_offer(price=str(100 + i)) for i in range(8)])
    config = make_settings()

    result = await _run(
        fake, config, _params(config, curr="EUR"),
        destinations=["GVA"], return_to=date(2025, 8, 27), tag="fallback",
    )

    assert len(result.offers) == 5
    assert [o["price"] for o in result.offers] == [100, 101, 102, 103, 104]
    assert all(o["_tag"] == "fallback" for o in result.offers)
    assert all(o["flyTo"] == "GVA" and o["currency"] == "EUR" for o in result.offers)


@pytest.mark.asyncio
async def test_failed_queries_are_skipped_not_raised():
    def offers_for(params):
        if params["destinationLocationCode"] == "GVA":
            return httpx.Response(400, json={"errors": [{"code": 477}]})
        return [make_offer()]

    fake = FakeAmadeus(offers_for=offers_for)
    config = make_settings()

    result = await _run(fake, config, _params(config))

    assert result.queries_issued == 10
    assert result.queries_skipped == 5
    assert {o.destination for o in result.skipped} == {"GVA"}
    assert len(result.offers) == 5
    assert all(o["flyTo"] == "LYS" for o in result.offers)


@pytest.mark.asyncio
async def test_offers_keep_matrix_order():
    fake = FakeAmadeus(
        offers_for=lambda params: [make_offer(price=params["returnDate"][-2:])]
    )
    config = make_settings(amadeus_max_concurrency=3)

    result = await _run(fake, config, _params(config))

    assert [(o["flyTo"], o["price"]) for o in result.offers] == [
        (dest, day) for dest in ("LYS", "GVA") for day in range(27, 32)
    ]


@pytest.mark.asyncio
@pytest.mark.parametrize("max_stopovers,expected", [(0, "true"), (1, "false"), (2, "false")])
async def test_nonstop_only_when_zero_stopovers(max_stopovers, expected):
    fake = FakeAmadeus()
    config = make_settings()

    await _run(fake, config, _params(config), destinations=["LYS"], return_to=date(2025, 8, 27),
               max_stopovers=max_stopovers)

    assert fake.offer_requests[0]["nonStop"] == expected


@pytest.mark.asyncio
async def test_cabin_and_carrier_exclusion():
    fake = FakeAmadeus()
    config = make_settings(excluded_carrier="TS")

    await _run(fake, config, _params(config, cabin="W"), destinations=["LYS"],
               return_to=date(2025, 8, 27))
    await _run(fake, config, _params(config, excludeAC="0"), destinations=["LYS"],
               return_to=date(2025, 8, 27))

    first, second = fake.offer_requests
    assert first["travelClass"] == "PREMIUM_ECONOMY"
    assert first["excludeAirlineCodes"] == "TS"
    assert "excludeAirlineCodes" not in second


@pytest.mark.asyncio
async def test_inverted_return_range_issues_nothing():
    fake = FakeAmadeus()
    config = make_settings()

    result = await _run(fake, config, _params(config), return_from=date(2025, 8, 31),
                        return_to=date(2025, 8, 27))

    assert result.queries_issued == 0
    assert result.offers == []
    assert fake.offer_requests == []
