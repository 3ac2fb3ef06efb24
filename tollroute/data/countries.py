"""
Country catalog and directions-provider country identifiers.

ORS_COUNTRY_ID_MAP is versioned provider configuration: OpenRouteService
country ids can change between releases, so keep it separate from the rule
logic and covered by tests.
"""

ORS_COUNTRY_ID_MAP: dict[int, str] = {
    2: "AL",
    11: "AT",
    17: "BE",
    23: "BA",
    30: "BG",
    49: "HR",
    52: "CZ",
    53: "DK",
    70: "FR",
    74: "DE",
    78: "GR",
    88: "HU",
    94: "IE",
    97: "IT",
    106: "XK",
    118: "MK",
    132: "ME",
    159: "PL",
    160: "PT",
    162: "RO",
    175: "RS",
    179: "SK",
    180: "SI",
    187: "ES",
    192: "SE",
    193: "CH",
    200: "NL",
    206: "TR",
    213: "GB",
    # Legacy aliases seen in older ORS datasets
    186: "RO",
    204: "SK",
    205: "SI",
}

# ORS waycategory codes. 3 means highway and tollway at once.
HIGHWAY_CATEGORIES = frozenset({1, 3})
TOLLWAY_CATEGORIES = frozenset({2, 3})

COUNTRY_NAMES: dict[str, str] = {
    "DE": "Germany",
    "AT": "Austria",
    "CZ": "Czech Republic",
    "SK": "Slovakia",
    "HU": "Hungary",
    "SI": "Slovenia",
    "CH": "Switzerland",
    "RO": "Romania",
    "BG": "Bulgaria",
    "HR": "Croatia",
    "RS": "Serbia",
    "DK": "Denmark",
    "SE": "Sweden",
    "NL": "Netherlands",
    "BE": "Belgium",
    "FR": "France",
    "IT": "Italy",
    "BA": "Bosnia and Herzegovina",
    "ME": "Montenegro",
    "XK": "Kosovo",
    "MK": "North Macedonia",
    "AL": "Albania",
    "PL": "Poland",
    "ES": "Spain",
    "PT": "Portugal",
    "GB": "United Kingdom",
    "IE": "Ireland",
    "TR": "Turkey",
    "GR": "Greece",
}


def country_name(country_code: str) -> str:
    """Display name, falling back to the code itself."""
    return COUNTRY_NAMES.get(country_code, country_code)
