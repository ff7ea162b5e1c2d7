"""
Heat Pump Check - efficiency estimate and improvement plan for residential heat pumps.
"""

__version__ = "0.1.0"

from .engine import (
    CostAnalysis,
    ScenarioContext,
    SimulationResult,
    compute_scenario,
    match_funding,
    run,
    run_request,
)

__all__ = [
    "__version__",
    "CostAnalysis",
    "ScenarioContext",
    "SimulationResult",
    "compute_scenario",
    "match_funding",
    "run",
    "run_request",
]
