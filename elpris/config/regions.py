"""
Swedish electricity price areas.
"""

from typing import Dict, List

VALID_REGIONS: List[str] = ["SE1", "SE2", "SE3", "SE4"]

VALID_THEMES: List[str] = ["light", "dark"]

REGION_NAMES: Dict[str, str] = {
    "SE1": "Luleå",
    "SE2": "Sundsvall",
    "SE3": "Stockholm",
    "SE4": "Malmö",
}

REGION_DESCRIPTIONS: Dict[str, str] = {
    "SE1": (
        "Elområde 1 (SE1) omfattar Norrland och norra Sverige. Här finns mycket vattenkraft "
        "och vindkraft, vilket ofta resulterar i lägre elpriser. Området inkluderar städer "
        "som Luleå och Umeå."
    ),
    "SE2": (
        "Elområde 2 (SE2) täcker norra Mellansverige. Området har också god tillgång till "
        "vattenkraft och vindkraft. Större städer i området inkluderar Sundsvall."
    ),
    "SE3": (
        "Elområde 3 (SE3) är Sveriges största elområde och omfattar södra Mellansverige. "
        "Här finns storstäder som Stockholm och Göteborg, samt en blandning av kärnkraft "
        "och förnybar energi."
    ),
    "SE4": (
        "Elområde 4 (SE4) täcker södra Sverige med Malmö som största stad. Området har "
        "mindre egen elproduktion och är mer beroende av import, vilket kan leda till "
        "högre priser."
    ),
}


def is_valid_region(region) -> bool:
    return isinstance(region, str) and region in VALID_REGIONS


def is_valid_theme(theme) -> bool:
    return isinstance(theme, str) and theme in VALID_THEMES
