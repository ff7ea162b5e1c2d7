"""
Tests for the intervention catalog and scenario calculator.
"""

import pytest

from hpcheck.core.profile import RecommendationCategory
from hpcheck.recommend import RULES
from hpcheck.roi import (
    DEFAULT_CATALOG,
    InterventionCatalog,
    ScenarioCalculator,
    combine_gains,
    size_scaling_factor,
)
from hpcheck.utils.validation import ValidationError


class TestSizeScalingFactor:
    """Tests for area scaling."""

    @pytest.mark.parametrize("area,factor", [
        (120, 1.0),
        (180, 1.5),
        (30, 0.5),
        (500, 2.0),
        (0, 1.0),
    ])
    def test_factors(self, area, factor):
        assert size_scaling_factor(area) == pytest.approx(factor)


class TestCombineGains:
    """Tests for diminishing-returns aggregation."""

    def test_two_gains(self):
        assert combine_gains([10, 10]) == pytest.approx(19.0)

    def test_empty(self):
        assert combine_gains([]) == 0.0

    def test_never_reaches_100(self):
        all_gains = [item.efficiency_gain_percent for item in DEFAULT_CATALOG.values()]
        assert combine_gains(all_gains) < 100

    def test_monotonic(self):
        gains = [25, 15, 12, 8, 5]
        totals = [combine_gains(gains[:n]) for n in range(len(gains) + 1)]
        assert totals == sorted(totals)


class TestInterventionCatalog:
    """Tests for InterventionCatalog."""

    def test_all_entries(self):
        catalog = InterventionCatalog()
        assert len(catalog.all()) == 17
        assert catalog.get("hydraulic_balancing").cost_mid == pytest.approx(950)

    def test_get_unknown(self):
        assert InterventionCatalog().get("nope") is None

    def test_by_category(self):
        envelope = InterventionCatalog().by_category(RecommendationCategory.BUILDING_ENVELOPE)
        assert {i.id for i in envelope} == {
            "facade_insulation", "roof_insulation", "window_replacement",
            "basement_ceiling_insulation",
        }

    def test_simulatable_excludes_free_no_effect(self):
        ids = {i.id for i in InterventionCatalog().simulatable()}
        assert "aux_heater_check" not in ids
        assert "lower_room_temperature" in ids

    def test_resolve_skips_unknown(self):
        resolved = InterventionCatalog().resolve(["maintenance", "nope", "pv_system"])
        assert [i.id for i in resolved] == ["maintenance", "pv_system"]

    def test_recommendations_reference_catalog(self):
        """Every intervention a rule can point at exists in the catalog."""
        from hpcheck.recommend.rules import ENVELOPE_MEASURES
        ids = {measure[3] for measure in ENVELOPE_MEASURES}
        ids |= {"hydraulic_balancing", "lower_flow_temperature", "heat_pump_radiators",
                "smart_thermostats", "maintenance", "energy_audit", "pv_system",
                "battery_storage", "aux_heater_optimization", "aux_heater_check",
                "hot_water_optimization", "buffer_tank_review", "lower_room_temperature"}
        assert ids <= set(DEFAULT_CATALOG)
        assert len(RULES) == 19


class TestCostOverrides:
    """Tests for per-user cost overrides."""

    def test_override_applied(self):
        base = InterventionCatalog()
        custom = base.with_overrides({"hydraulic_balancing": {"cost_max": 900}})
        assert custom.get("hydraulic_balancing").cost_max == 900
        assert custom.get("hydraulic_balancing").cost_min == 650
        # Default catalog untouched
        assert base.get("hydraulic_balancing").cost_max == 1250

    def test_unknown_id(self):
        with pytest.raises(ValidationError) as exc:
            InterventionCatalog().with_overrides({"nope": {"cost_max": 1}})
        assert exc.value.field == "overrides"
        assert exc.value.suggestions

    def test_merged_range_invalid(self):
        with pytest.raises(ValidationError):
            InterventionCatalog().with_overrides({"hydraulic_balancing": {"cost_max": 500}})

    @pytest.mark.parametrize("values", [
        {"cost_min": -1},
        {"efficiency_gain_percent": 100},
        {"cost_min": 900, "cost_max": 800},
        {"label": 1},
    ])
    def test_invalid_values(self, values):
        with pytest.raises(ValidationError):
            InterventionCatalog().with_overrides({"maintenance": values})


class TestRelations:
    """Tests for requires / supersedes relations."""

    def test_battery_requires_pv(self):
        reasons = InterventionCatalog().blocked_by("battery_storage", ["battery_storage"])
        assert len(reasons) == 1
        assert "pv_system" in reasons[0]

    def test_battery_with_pv_selected(self):
        assert InterventionCatalog().blocked_by("battery_storage", ["pv_system"]) == []

    def test_battery_with_existing_pv(self):
        assert InterventionCatalog().blocked_by("battery_storage", [], existing=["pv_system"]) == []

    def test_check_superseded_by_optimization(self):
        reasons = InterventionCatalog().blocked_by("aux_heater_check", ["aux_heater_optimization"])
        assert len(reasons) == 1

    def test_unrelated(self):
        assert InterventionCatalog().blocked_by("maintenance", []) == []


class TestScenarioCalculator:
    """Tests for ScenarioCalculator."""

    def _compute(self, ids, area=120, factor=3.0):
        return ScenarioCalculator().compute(
            selection=InterventionCatalog().resolve(ids),
            price_per_kwh=0.30,
            baseline_consumption=5000,
            current_factor=factor,
            area_m2=area,
        )

    def test_two_interventions(self):
        result = self._compute(["hydraulic_balancing", "smart_thermostats"])
        assert result.cost_min == 950
        assert result.cost_max == 2050
        assert result.cost_mid == 1500
        assert result.total_kwh_savings == 700
        assert result.total_eur_savings == 210
        assert result.efficiency_gain_percent == pytest.approx(16.4)
        assert result.projected_factor == pytest.approx(3.49)
        assert result.payback_years == pytest.approx(7.1)
        assert [b.intervention_id for b in result.breakdown] == [
            "hydraulic_balancing", "smart_thermostats"
        ]

    def test_savings_scale_with_area(self):
        small = self._compute(["maintenance"], area=60)
        large = self._compute(["maintenance"], area=240)
        assert small.total_kwh_savings == 75
        assert large.total_kwh_savings == 300

    def test_empty_selection(self):
        result = self._compute([])
        assert result.cost_mid == 0
        assert result.payback_years == 0.0
        assert result.projected_factor == pytest.approx(3.0)

    def test_free_intervention_pays_back_immediately(self):
        result = self._compute(["lower_room_temperature"])
        assert result.cost_mid == 0
        assert result.payback_years == 0.0

    def test_gain_monotonic_and_below_100(self):
        ids = list(DEFAULT_CATALOG)
        gains = [self._compute(ids[:n]).efficiency_gain_percent for n in range(1, len(ids) + 1)]
        assert gains == sorted(gains)
        assert gains[-1] < 100

    def test_excess_savings_logged(self, caplog):
        with caplog.at_level("WARNING", logger="hpcheck.roi.scenario"):
            ScenarioCalculator().compute(
                selection=InterventionCatalog().resolve(["pv_system", "facade_insulation"]),
                price_per_kwh=0.30,
                baseline_consumption=1000,
                current_factor=3.0,
                area_m2=120,
            )
        assert "exceed current consumption" in caplog.text
