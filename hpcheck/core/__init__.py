"""Core models and configuration."""

from .config import Settings, settings
from .models import SimulationRequest, ScenarioRequest
from .profile import (
    AuxiliaryHeaterConfig,
    BuildingProfile,
    ConsumptionRecord,
    EngineProfile,
    HeatPumpConfig,
    PVConfig,
    Priority,
    RecommendationCategory,
)

__all__ = [
    "Settings",
    "settings",
    "SimulationRequest",
    "ScenarioRequest",
    "AuxiliaryHeaterConfig",
    "BuildingProfile",
    "ConsumptionRecord",
    "EngineProfile",
    "HeatPumpConfig",
    "PVConfig",
    "Priority",
    "RecommendationCategory",
]
