"""
Pytest configuration and fixtures for hpcheck tests.

Provides reusable test fixtures for:
- Questionnaire requests (underfloor new build, legacy radiators)
- Defaulted engine profiles
- Settings and a fixed reference date
"""

import pytest
from datetime import date
from pathlib import Path

# Add project root to path
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from hpcheck.core.config import Settings
from hpcheck.core.models import SimulationRequest
from hpcheck.utils.validation import normalize_request


# =============================================================================
# GENERAL FIXTURES
# =============================================================================

@pytest.fixture
def today() -> date:
    """Fixed reference date so billing periods are reproducible."""
    return date(2025, 6, 1)


@pytest.fixture
def settings() -> Settings:
    """Settings with built-in defaults (environment ignored)."""
    return Settings(_env_file=None)


# =============================================================================
# REQUEST FIXTURES
# =============================================================================

@pytest.fixture
def underfloor_request_data() -> dict:
    """Well-configured new build in Munich with underfloor heating."""
    return {
        "building": {
            "postal_code": "80331",
            "area_m2": 150,
            "building_type": "new",
            "construction_period": "from_2016",
            "occupants": 3,
        },
        "equipment": {
            "emitter_type": "underfloor",
            "hydraulic_balancing": "yes",
            "flow_temp_c": 35,
        },
    }


@pytest.fixture
def legacy_request_data() -> dict:
    """1980s house in Munich, legacy radiators, no hydraulic balancing."""
    return {
        "building": {
            "postal_code": "80331",
            "area_m2": 150,
            "building_type": "existing",
            "construction_period": "1979_1995",
            "occupants": 3,
        },
        "equipment": {
            "emitter_type": "radiator",
            "radiator_condition": "legacy",
            "heat_pump_radiators": "no",
            "hydraulic_balancing": "no",
        },
    }


@pytest.fixture
def make_profile(settings):
    """Factory: request dict -> defaulted EngineProfile."""
    def _make(data: dict):
        return normalize_request(SimulationRequest.model_validate(data), settings)
    return _make


@pytest.fixture
def underfloor_profile(make_profile, underfloor_request_data):
    return make_profile(underfloor_request_data)


@pytest.fixture
def legacy_profile(make_profile, legacy_request_data):
    return make_profile(legacy_request_data)
