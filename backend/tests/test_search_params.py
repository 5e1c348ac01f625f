from datetime import date

from conftest import make_settings

from app.schemas.search import SearchParams


def test_defaults_when_query_is_empty():
    config = make_settings()

    params = SearchParams.from_query({}, config)

    assert params.origin == "YUL"
    assert params.departure_date == date(2025, 8, 18)
    assert params.return_from == date(2025, 8, 27)
    assert params.return_to == date(2025, 8, 31)
    assert params.currency == "CAD"
    assert params.max_stopovers == 1
    assert params.cabin == "M"
    assert params.travel_class == "ECONOMY"
    assert params.exclude_carrier is True
    assert params.destinations == ["LYS", "GVA", "GNB", "CMF", "TRN", "MXP", "CDG", "ORY"]


def test_valid_values_are_used():
    params = SearchParams.from_query(
        {
            "fly_from": "yyz",
            "dateFrom": "2025-12-20",
            "returnFrom": "2026-01-02",
            "returnTo": "2026-01-04",
            "curr": "eur",
            "fly_to": "gva, lys ,GVA",
            "max_stopovers": "0",
            "excludeAC": "0",
            "cabin": "c",
        },
        make_settings(),
    )

    assert params.origin == "YYZ"
    assert params.departure_date == date(2025, 12, 20)
    assert params.return_from == date(2026, 1, 2)
    assert params.return_to == date(2026, 1, 4)
    assert params.currency == "EUR"
    assert params.destinations == ["GVA", "LYS"]
    assert params.max_stopovers == 0
    assert params.exclude_carrier is False
    assert params.travel_class == "BUSINESS"


def test_invalid_values_fall_back_to_defaults():
    params = SearchParams.from_query(
        {
            "fly_from": "Montreal",
            "dateFrom": "18/08/2025",
            "returnTo": "soon",
            "curr": "$",
            "fly_to": ",,12,",
            "max_stopovers": "5",
            "excludeAC": "yes",
            "cabin": "F",
        },
        make_settings(default_max_stopovers=2),
    )

    assert params.origin == "YUL"
    assert params.departure_date == date(2025, 8, 18)
    assert params.return_to == date(2025, 8, 31)
    assert params.currency == "CAD"
    assert params.destinations[0] == "LYS"
    assert params.max_stopovers == 2
    assert params.exclude_carrier is True
    assert params.cabin == "M"


def test_premium_economy_mapping():
    params = SearchParams.from_query({"cabin": "W"}, make_settings())
    assert params.travel_class == "PREMIUM_ECONOMY"


def test_configured_primary_destinations():
    params = SearchParams.from_query({}, make_settings(primary_destinations="gva, cmf"))
    assert params.destinations == ["GVA", "CMF"]
