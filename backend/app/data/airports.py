"""Static airport catalog for the Alps (Albertville) destination search.

Used for:
- default primary destination set (airports within ~4h by train/car)
- sandbox fallback hub list
- the destination picker served by the airports router
"""

# Primary targets: code -> (name, approx. ground transfer hours to Albertville)
DESTINATION_AIRPORTS: dict[str, tuple[str, float]] = {
    "LYS": ("Lyon", 1.5),
    "GVA": ("Geneva", 1.3),
    "GNB": ("Grenoble", 1.0),
    "CMF": ("Chambéry", 0.75),
    "TRN": ("Turin", 2.0),
    "MXP": ("Milan Malpensa", 3.5),
    "CDG": ("Paris CDG", 3.75),  # TGV
    "ORY": ("Paris Orly", 3.75),  # TGV
}

DEFAULT_PRIMARY_DESTINATIONS: list[str] = list(DESTINATION_AIRPORTS)

# Wider hubs, sandbox-friendly and still viable with TGV/drive.
# Must stay a superset of the default primary set.
DEFAULT_FALLBACK_HUBS: list[str] = [
    "CDG", "ORY", "LHR", "AMS", "FRA", "ZRH", "BCN", "MAD", "BRU",
    "FCO", "VCE", "MXP", "LIN", "LYS", "GVA", "TRN", "GNB", "CMF",
]

HUB_NAMES: dict[str, str] = {
    "LHR": "London Heathrow",
    "AMS": "Amsterdam Schiphol",
    "FRA": "Frankfurt",
    "ZRH": "Zurich",
    "BCN": "Barcelona",
    "MAD": "Madrid Barajas",
    "BRU": "Brussels",
    "FCO": "Rome Fiumicino",
    "VCE": "Venice Marco Polo",
    "LIN": "Milan Linate",
}


def airport_name(iata_code: str) -> str:
    """Display name for a catalog airport, falling back to the code itself."""
    code = iata_code.upper()
    if code in DESTINATION_AIRPORTS:
        return DESTINATION_AIRPORTS[code][0]
    return HUB_NAMES.get(code, code)


def merge_destinations(preferred: list[str], extra: list[str]) -> list[str]:
    """Ordered union: every code of `preferred`, then unseen codes of `extra`."""
    seen: set[str] = set()
    merged = []
    for code in [*preferred, *extra]:
        if code not in seen:
            seen.add(code)
            merged.append(code)
    return merged
