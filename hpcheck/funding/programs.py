"""
Static subsidy program catalogs (Germany, status early 2026, no guarantee).

Federal programs are matched by keyword buckets over recommendation text,
regional programs by federal state and selected intervention IDs.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


BAFA_RENOVATION_LINK = (
    "https://www.bafa.de/DE/Energie/Effiziente_Gebaeude/Sanierung_Wohngebaeude/"
    "sanierung_wohngebaeude_node.html"
)
BAFA_ADVICE_LINK = (
    "https://www.bafa.de/DE/Energie/Energieberatung/Energieberatung_Wohngebaeude/"
    "energieberatung_wohngebaeude_node.html"
)

ENVELOPE_IDS = (
    "facade_insulation", "roof_insulation", "window_replacement", "basement_ceiling_insulation",
)


@dataclass(frozen=True)
class FundingProgram:
    """A subsidy or loan program."""
    program: str
    measure: str
    subsidy_rate_percent: float
    cap_amount: Optional[float]
    has_bonus: bool  # +5 % with an individual renovation roadmap (iSFP)
    note: str
    link: str
    regional: bool = False
    state: Optional[str] = None


@dataclass(frozen=True)
class KeywordBucket:
    """Federal program triggered by any keyword in recommendation text."""
    bucket_id: str
    keywords: Tuple[str, ...]
    program: FundingProgram


@dataclass(frozen=True)
class RegionalProgram:
    state: str
    program: FundingProgram
    intervention_ids: Tuple[str, ...]


# =============================================================================
# FEDERAL
# =============================================================================

FEDERAL_BUCKETS: Tuple[KeywordBucket, ...] = (
    KeywordBucket(
        "hydraulic_balancing",
        ("hydraulic",),
        FundingProgram(
            program="BEG Einzelmaßnahmen",
            measure="Hydraulic balancing / heating optimization",
            subsidy_rate_percent=15,
            cap_amount=60000,
            has_bonus=False,
            note="Funded via BAFA. Apply before the work starts.",
            link=BAFA_RENOVATION_LINK,
        ),
    ),
    KeywordBucket(
        "radiators",
        ("radiator", "heating surface"),
        FundingProgram(
            program="BEG Einzelmaßnahmen",
            measure="Heating optimization / radiator replacement",
            subsidy_rate_percent=15,
            cap_amount=60000,
            has_bonus=False,
            note="Replacing radiators is eligible as heating optimization.",
            link=BAFA_RENOVATION_LINK,
        ),
    ),
    KeywordBucket(
        "building_envelope",
        ("facade", "roof", "window", "basement ceiling", "insulation"),
        FundingProgram(
            program="BEG Einzelmaßnahmen",
            measure="Building envelope (insulation, windows)",
            subsidy_rate_percent=15,
            cap_amount=60000,
            has_bonus=True,
            note="An individual renovation roadmap (iSFP) adds another 5 %.",
            link=BAFA_RENOVATION_LINK,
        ),
    ),
    KeywordBucket(
        "energy_audit",
        ("energy auditor", "energy advice", "specialist"),
        FundingProgram(
            program="BAFA Energieberatung Wohngebäude",
            measure="Energy advice / individual renovation roadmap",
            subsidy_rate_percent=80,
            cap_amount=1300,
            has_bonus=False,
            note="Up to 80 % subsidy (max. 1,300 € for single-family homes) via an approved energy auditor.",
            link=BAFA_ADVICE_LINK,
        ),
    ),
)


# =============================================================================
# REGIONAL
# =============================================================================


def _regional(state, program, measure, rate, cap, note, link, ids) -> RegionalProgram:
    return RegionalProgram(
        state=state,
        program=FundingProgram(
            program=program,
            measure=measure,
            subsidy_rate_percent=rate,
            cap_amount=cap,
            has_bonus=False,
            note=note,
            link=link,
            regional=True,
            state=state,
        ),
        intervention_ids=tuple(ids),
    )


REGIONAL_PROGRAMS: Tuple[RegionalProgram, ...] = (
    _regional(
        "Bayern", "BayernLabo – Bayerisches Wohnungsbauprogramm",
        "Energy-efficient renovation (envelope, heating)", 10, 20000,
        "Low-interest loans for renovating one- and two-family homes in Bavaria.",
        "https://bayernlabo.de/foerderprogramme/", ENVELOPE_IDS,
    ),
    _regional(
        "Nordrhein-Westfalen", "progres.nrw – Klimaschutztechnik",
        "PV system with battery storage", 0, 1500,
        "Grant for battery storage together with a new PV installation, depending on storage size.",
        "https://www.progres.nrw/", ("battery_storage", "pv_system"),
    ),
    _regional(
        "Baden-Württemberg", "L-Bank – Energieeffizienzfinanzierung",
        "Energy-efficient building renovation", 0, 100000,
        "Low-interest loans for renovation, combinable with BEG grants.",
        "https://www.l-bank.de/", ENVELOPE_IDS + ("heat_pump_radiators",),
    ),
    _regional(
        "Hessen", "WIBank – Hessisches Energiegesetz",
        "Energy advice and renovation", 0, 5000,
        "Additional state funding for energy advice and renovation.",
        "https://www.wibank.de/", ("energy_audit", "facade_insulation", "roof_insulation"),
    ),
    _regional(
        "Niedersachsen", "NBank – Energetische Sanierung",
        "Building envelope and building services", 0, 15000,
        "Low-interest loans for renovation in Lower Saxony.",
        "https://www.nbank.de/",
        ("facade_insulation", "roof_insulation", "window_replacement", "hydraulic_balancing"),
    ),
    _regional(
        "Sachsen", "SAB – Energetische Sanierung",
        "Building envelope and heat supply", 0, 10000,
        "Reduced-interest loans for residential renovation in Saxony.",
        "https://www.sab.sachsen.de/", ENVELOPE_IDS,
    ),
    _regional(
        "Berlin", "IBB – Berliner Programm für Nachhaltige Entwicklung",
        "Energy-efficient building renovation", 0, 15000,
        "Grants and loans for energy-efficient renovation in Berlin.",
        "https://www.ibb.de/", ENVELOPE_IDS,
    ),
    _regional(
        "Hamburg", "IFB Hamburg – Modernisierungsförderung",
        "Energy-efficient modernization", 0, 20000,
        "Grants for comprehensive energy-efficient modernization in Hamburg.",
        "https://www.ifbhh.de/", ENVELOPE_IDS + ("heat_pump_radiators",),
    ),
    _regional(
        "Schleswig-Holstein", "IB.SH – Energetische Sanierung",
        "Residential renovation", 0, 10000,
        "Supplementary loans for energy-efficient renovation.",
        "https://www.ib-sh.de/", ("facade_insulation", "roof_insulation", "window_replacement"),
    ),
    _regional(
        "Thüringen", "TAB – Thüringer Sanierungsbonus",
        "Building envelope and heating optimization", 10, 8000,
        "Additional state bonus for renovation measures.",
        "https://www.aufbaubank.de/",
        ("facade_insulation", "roof_insulation", "window_replacement", "hydraulic_balancing"),
    ),
)
