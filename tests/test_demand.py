"""
Tests for space heating and hot water demand.
"""

import pytest

from hpcheck.climate import lookup
from hpcheck.core.profile import (
    BuildingProfile,
    BuildingType,
    ConstructionPeriod,
    Renovation,
    TriState,
)
from hpcheck.demand import (
    DEFAULT_ROOM_TEMP_C,
    MIN_DEMAND_EXISTING,
    HotWaterDemandEstimator,
    ThermalDemandEstimator,
    specific_heat_demand,
)


def _building(**kwargs) -> BuildingProfile:
    values = dict(
        area_m2=150,
        building_type=BuildingType.EXISTING,
        construction_period=ConstructionPeriod.BEFORE_1960,
    )
    values.update(kwargs)
    return BuildingProfile(**values)


class TestSpecificDemand:
    """Tests for envelope-only specific demand."""

    def test_new_build_from_2016(self):
        building = _building(building_type=BuildingType.NEW,
                             construction_period=ConstructionPeriod.FROM_2016)
        assert specific_heat_demand(building) == 35

    def test_old_existing_building(self):
        assert specific_heat_demand(_building()) == 180

    def test_renovations_reduce_demand(self):
        renovated = _building(renovations=frozenset(Renovation))
        demand = specific_heat_demand(renovated)
        assert demand < 180
        assert demand >= MIN_DEMAND_EXISTING

    def test_floor_for_existing_buildings(self):
        renovated = _building(
            construction_period=ConstructionPeriod.P1996_2002,
            renovations=frozenset(Renovation),
        )
        assert specific_heat_demand(renovated) == MIN_DEMAND_EXISTING

    def test_unknown_period(self):
        assert specific_heat_demand(
            _building(construction_period=ConstructionPeriod.UNKNOWN)
        ) == 130


class TestThermalDemandEstimator:
    """Tests for absolute demand with corrections."""

    def test_default_room_temperature(self):
        """Default 21 °C adds 6 % over the 20 °C reference."""
        demand = ThermalDemandEstimator(lookup("80331")).estimate(
            _building(building_type=BuildingType.NEW,
                      construction_period=ConstructionPeriod.FROM_2016)
        )
        assert DEFAULT_ROOM_TEMP_C == 21.0
        assert demand.room_temp_factor == pytest.approx(1.06)
        assert demand.absolute_demand == pytest.approx(35 * 150 * 1.06)

    def test_specific_demand_is_uncorrected(self):
        demand = ThermalDemandEstimator(lookup("79098")).estimate(
            _building(target_room_temp_c=23.0)
        )
        assert demand.specific_demand == 180
        assert demand.adjusted_specific_demand == pytest.approx(
            180 * demand.climate_factor * demand.room_temp_factor
        )
        assert demand.adjusted_specific_demand != demand.specific_demand

    def test_auto_controllers_save_five_percent(self):
        estimator = ThermalDemandEstimator(lookup("80331"))
        without = estimator.estimate(_building())
        with_controllers = estimator.estimate(_building(has_auto_controllers=TriState.YES))
        assert with_controllers.absolute_demand == pytest.approx(without.absolute_demand * 0.95)

    def test_colder_climate_needs_more(self):
        building = _building()
        kempten = ThermalDemandEstimator(lookup("87435")).estimate(building)
        cologne = ThermalDemandEstimator(lookup("50667")).estimate(building)
        assert kempten.absolute_demand > cologne.absolute_demand


class TestHotWaterDemand:
    """Tests for hot water demand."""

    def test_base_per_occupant(self):
        assert HotWaterDemandEstimator().estimate(3) == pytest.approx(1500)

    def test_many_showers_capped(self):
        # 3 occupants expect 2.1 showers; factor capped at 2.0
        assert HotWaterDemandEstimator().estimate(3, 10) == pytest.approx(3000)

    def test_few_showers_floored(self):
        assert HotWaterDemandEstimator().estimate(3, 0.5) == pytest.approx(900)

    def test_zero_showers_ignored(self):
        assert HotWaterDemandEstimator().estimate(2, 0) == pytest.approx(1000)
