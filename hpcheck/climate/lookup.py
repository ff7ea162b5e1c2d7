"""
Climate lookup by German postal code.

Maps the first two digits of a postal code (PLZ) to heating degree days
(HGT 15/15), design outdoor temperature and annual mean temperature.
Based on DIN 4710 / DWD reference data, simplified by region.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping


@dataclass(frozen=True)
class ClimateProfile:
    """Static climate data for one postal region."""
    heating_degree_days: float  # Kd, HGT 15/15
    design_outdoor_temp_c: float  # Norm-Außentemperatur
    avg_outdoor_temp_c: float
    region: str


# Reference heating degree days for the demand tables (Kd)
REFERENCE_HDD = 3400.0


def _c(hdd: float, design: float, avg: float, region: str) -> ClimateProfile:
    return ClimateProfile(hdd, design, avg, region)


CLIMATE_BY_PREFIX: Mapping[str, ClimateProfile] = MappingProxyType({
    # Eastern Germany
    "01": _c(3350, -14, 8.6, "Dresden"),
    "02": _c(3450, -16, 8.2, "Görlitz"),
    "03": _c(3400, -14, 8.4, "Cottbus"),
    "04": _c(3300, -14, 8.8, "Leipzig"),
    "06": _c(3350, -14, 8.7, "Halle"),
    "07": _c(3400, -14, 8.3, "Jena"),
    "08": _c(3500, -16, 7.9, "Zwickau"),
    "09": _c(3500, -16, 7.8, "Chemnitz"),
    "10": _c(3200, -14, 9.1, "Berlin"),
    "12": _c(3200, -14, 9.1, "Berlin"),
    "13": _c(3200, -14, 9.1, "Berlin"),
    "14": _c(3250, -14, 9.0, "Potsdam"),
    "15": _c(3300, -14, 8.8, "Frankfurt (Oder)"),
    "16": _c(3300, -14, 8.8, "Eberswalde"),
    "17": _c(3250, -14, 8.5, "Greifswald"),
    "18": _c(3150, -12, 8.8, "Rostock"),
    "19": _c(3200, -12, 8.9, "Schwerin"),

    # Northern Germany (maritime, mild winters)
    "20": _c(3200, -12, 9.0, "Hamburg"),
    "21": _c(3250, -12, 8.8, "Hamburg Umland"),
    "22": _c(3200, -12, 9.0, "Hamburg"),
    "23": _c(3150, -12, 9.1, "Lübeck"),
    "24": _c(3100, -12, 8.7, "Kiel"),
    "25": _c(3050, -10, 8.9, "Nordfriesland"),
    "26": _c(3050, -10, 9.2, "Ostfriesland"),
    "27": _c(3100, -12, 9.1, "Bremen Nord"),
    "28": _c(3100, -12, 9.2, "Bremen"),
    "29": _c(3300, -14, 8.8, "Lüneburger Heide"),

    # Northwest
    "30": _c(3250, -12, 9.0, "Hannover"),
    "31": _c(3300, -12, 8.9, "Hildesheim"),
    "32": _c(3200, -12, 9.0, "Herford"),
    "33": _c(3250, -12, 8.9, "Bielefeld"),
    "34": _c(3350, -14, 8.5, "Kassel"),
    "35": _c(3300, -12, 8.8, "Gießen"),
    "36": _c(3400, -14, 8.3, "Fulda"),
    "37": _c(3400, -14, 8.4, "Göttingen"),
    "38": _c(3450, -14, 8.3, "Braunschweig"),
    "39": _c(3400, -14, 8.6, "Magdeburg"),

    # West (Ruhr / Rhineland)
    "40": _c(3000, -10, 10.0, "Düsseldorf"),
    "41": _c(3000, -10, 10.0, "Mönchengladbach"),
    "42": _c(3050, -10, 9.8, "Wuppertal"),
    "43": _c(3050, -10, 9.7, "Essen Nord"),
    "44": _c(3100, -12, 9.5, "Dortmund"),
    "45": _c(3050, -10, 9.7, "Essen"),
    "46": _c(3050, -10, 9.8, "Oberhausen"),
    "47": _c(3000, -10, 10.0, "Duisburg"),
    "48": _c(3150, -12, 9.3, "Münster"),
    "49": _c(3150, -12, 9.2, "Osnabrück"),

    # Rhineland / Southwest
    "50": _c(2950, -10, 10.2, "Köln"),
    "51": _c(2950, -10, 10.2, "Köln Umland"),
    "52": _c(3050, -10, 9.8, "Aachen"),
    "53": _c(3000, -10, 10.0, "Bonn"),
    "54": _c(3100, -12, 9.5, "Trier"),
    "55": _c(3000, -10, 10.1, "Mainz"),
    "56": _c(3100, -12, 9.5, "Koblenz"),
    "57": _c(3200, -12, 9.0, "Siegen"),
    "58": _c(3150, -12, 9.2, "Hagen"),
    "59": _c(3100, -12, 9.4, "Hamm"),

    # Hesse / Palatinate / Saarland
    "60": _c(2900, -10, 10.3, "Frankfurt"),
    "61": _c(3000, -10, 10.0, "Bad Homburg"),
    "63": _c(2950, -10, 10.1, "Offenbach"),
    "64": _c(2900, -10, 10.3, "Darmstadt"),
    "65": _c(2950, -10, 10.1, "Wiesbaden"),
    "66": _c(3000, -10, 10.0, "Saarbrücken"),
    "67": _c(2800, -10, 10.5, "Mannheim"),
    "68": _c(2800, -10, 10.5, "Mannheim"),
    "69": _c(2850, -10, 10.4, "Heidelberg"),

    # Baden-Württemberg
    "70": _c(3100, -12, 9.5, "Stuttgart"),
    "71": _c(3100, -12, 9.5, "Böblingen"),
    "72": _c(3300, -14, 8.8, "Tübingen"),
    "73": _c(3200, -12, 9.0, "Esslingen"),
    "74": _c(3100, -12, 9.4, "Heilbronn"),
    "75": _c(3200, -12, 9.1, "Pforzheim"),
    "76": _c(2850, -10, 10.3, "Karlsruhe"),
    "77": _c(2900, -10, 10.2, "Offenburg"),
    "78": _c(3300, -14, 8.5, "Villingen"),
    "79": _c(2900, -10, 10.5, "Freiburg"),

    # Southern Bavaria
    "80": _c(3400, -16, 8.3, "München"),
    "81": _c(3400, -16, 8.3, "München"),
    "82": _c(3500, -16, 8.0, "München Süd"),
    "83": _c(3500, -16, 7.8, "Rosenheim"),
    "84": _c(3400, -16, 8.2, "Landshut"),
    "85": _c(3450, -16, 8.1, "Freising"),
    "86": _c(3400, -16, 8.2, "Augsburg"),
    "87": _c(3600, -16, 7.5, "Kempten"),
    "88": _c(3400, -14, 8.5, "Ravensburg"),
    "89": _c(3350, -14, 8.5, "Ulm"),

    # Northern Bavaria / Thuringia
    "90": _c(3350, -14, 8.6, "Nürnberg"),
    "91": _c(3350, -14, 8.6, "Erlangen"),
    "92": _c(3400, -14, 8.4, "Amberg"),
    "93": _c(3350, -14, 8.5, "Regensburg"),
    "94": _c(3500, -16, 7.8, "Passau"),
    "95": _c(3500, -16, 7.8, "Bayreuth"),
    "96": _c(3450, -14, 8.2, "Bamberg"),
    "97": _c(3200, -12, 9.0, "Würzburg"),
    "98": _c(3600, -16, 7.5, "Suhl"),
    "99": _c(3500, -16, 7.8, "Erfurt"),
})

# Used for unmapped prefixes
DEFAULT_CLIMATE = ClimateProfile(
    heating_degree_days=3200,
    design_outdoor_temp_c=-12,
    avg_outdoor_temp_c=9.0,
    region="Germany (average)",
)


def lookup(postal_code: str) -> ClimateProfile:
    """
    Resolve the climate profile for a postal code.

    Unknown or malformed codes resolve to DEFAULT_CLIMATE.
    """
    prefix = (postal_code or "").strip()[:2]
    return CLIMATE_BY_PREFIX.get(prefix, DEFAULT_CLIMATE)


def climate_factor(climate: ClimateProfile) -> float:
    """Ratio of local heating degree days to the reference climate."""
    return climate.heating_degree_days / REFERENCE_HDD
