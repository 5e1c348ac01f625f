"""Fixed sample results served when no Amadeus credentials are configured."""

SAMPLE_RESULTS: list[dict] = [
    {
        "price": 915, "currency": "CAD", "airlines": "TS",
        "cityFrom": "YUL", "cityTo": "LYS", "flyFrom": "YUL", "flyTo": "LYS",
        "durationTotal": 24840, "stops": 0, "deepLink": None,
        "local_departure": "2025-08-18T19:45:00-04:00",
        "return_departure": "2025-08-28T12:10:00+02:00",
    },
    {
        "price": 1045, "currency": "CAD", "airlines": "AF",
        "cityFrom": "YUL", "cityTo": "CDG", "flyFrom": "YUL", "flyTo": "CDG",
        "durationTotal": 24480, "stops": 0, "deepLink": None,
        "local_departure": "2025-08-18T21:15:00-04:00",
        "return_departure": "2025-08-27T13:20:00+02:00",
    },
    {
        "price": 745, "currency": "CAD", "airlines": "W4, U2",
        "cityFrom": "YUL", "cityTo": "GVA", "flyFrom": "YUL", "flyTo": "GVA",
        "durationTotal": 41040, "stops": 1, "deepLink": None,
        "local_departure": "2025-08-18T17:30:00-04:00",
        "return_departure": "2025-08-30T08:45:00+02:00",
    },
]
