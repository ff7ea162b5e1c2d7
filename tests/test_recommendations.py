"""
Tests for recommendation rules and the recommendation engine.
"""

from dataclasses import replace

import pytest

from hpcheck.core.profile import Priority, RecommendationCategory, Renovation
from hpcheck.hvac import AuxiliaryHeaterAnalysis, AuxHeaterRating
from hpcheck.recommend import (
    RULES,
    Recommendation,
    RecommendationEngine,
    RuleContext,
    rule_ids,
    sort_by_priority,
)


def _ctx(profile, **kwargs) -> RuleContext:
    values = dict(
        profile=profile,
        flow_temp_c=35.0,
        heating_factor=4.0,
        specific_demand=35.0,
        simulated_kwh=2500.0,
        deviation_percent=0.0,
    )
    values.update(kwargs)
    return RuleContext(**values)


def _fired(ctx):
    return [rec.rule_id for rec in RecommendationEngine().evaluate(ctx)]


def _aux(rating: AuxHeaterRating, share: float) -> AuxiliaryHeaterAnalysis:
    return AuxiliaryHeaterAnalysis(
        rated_power_kw=6.0,
        operating_hours=500,
        hours_estimated=False,
        electricity_kwh=3000,
        heat_kwh=2940,
        share_percent=share,
        factor_with_aux=2.5,
        factor_without_aux=3.1,
        rating=rating,
        extra_cost_eur=600,
    )


class TestRuleSet:
    """Tests for rule set structure."""

    def test_rule_ids_unique(self):
        ids = rule_ids()
        assert len(ids) == len(set(ids)) == len(RULES)

    def test_maintenance_always_fires(self, underfloor_profile):
        assert "maintenance" in _fired(_ctx(underfloor_profile))

    def test_well_configured_home_only_maintenance(self, underfloor_profile):
        assert _fired(_ctx(underfloor_profile)) == ["maintenance"]


class TestFlowTemperatureRules:
    """Tests for flow temperature and emitter rules."""

    def test_underfloor_high_flow(self, underfloor_profile):
        recs = RecommendationEngine().evaluate(_ctx(underfloor_profile, flow_temp_c=50.0))
        flow = [r for r in recs if "flow temperature" in r.title]
        assert len(flow) == 1
        assert flow[0].title == "Lower the flow temperature from 50 °C to 35 °C"
        assert flow[0].priority == Priority.HIGH
        assert "38 %" in flow[0].impact

    def test_underfloor_moderate_flow(self, underfloor_profile):
        ids = _fired(_ctx(underfloor_profile, flow_temp_c=40.0))
        assert "flow_temp_underfloor_moderate" in ids
        assert "flow_temp_underfloor_high" not in ids

    def test_legacy_radiators_staged_and_upgrade(self, legacy_profile):
        recs = RecommendationEngine().evaluate(_ctx(legacy_profile, flow_temp_c=55.0))
        by_id = {r.rule_id: r for r in recs}
        assert by_id["flow_temp_legacy_staged"].title == (
            "Test lowering the flow temperature step by step from 55 °C to 50 °C"
        )
        assert by_id["emitter_upgrade"].priority == Priority.HIGH
        assert "flow_temp_radiator_high" not in by_id
        assert "radiator_retrofit" not in by_id

    def test_legacy_radiators_low_flow_retrofit(self, legacy_profile):
        ids = _fired(_ctx(legacy_profile, flow_temp_c=45.0))
        assert "radiator_retrofit" in ids
        assert "emitter_upgrade" not in ids

    def test_renovated_radiators_target(self, make_profile, legacy_request_data):
        legacy_request_data["equipment"]["radiator_condition"] = "renovated"
        profile = make_profile(legacy_request_data)
        recs = RecommendationEngine().evaluate(_ctx(profile, flow_temp_c=50.0))
        titles = [r.title for r in recs]
        assert "Lower the flow temperature from 50 °C to 45 °C" in titles

    def test_heat_pump_radiators_target(self, make_profile, legacy_request_data):
        legacy_request_data["equipment"]["heat_pump_radiators"] = "yes"
        profile = make_profile(legacy_request_data)
        ids = _fired(_ctx(profile, flow_temp_c=50.0))
        assert "flow_temp_radiator_high" in ids
        # Heat pump radiators are not treated as legacy
        assert "emitter_upgrade" not in ids


class TestOtherRules:
    """Tests for hydraulics, usage, envelope and specialist rules."""

    def test_hydraulic_balancing(self, legacy_profile):
        recs = RecommendationEngine().evaluate(_ctx(legacy_profile, flow_temp_c=55.0))
        hydraulic = [r for r in recs if "hydraulic" in r.title.lower()]
        assert len(hydraulic) == 1
        assert hydraulic[0].intervention_id == "hydraulic_balancing"
        assert len(hydraulic[0].prerequisites) == 2

    def test_hydraulic_balancing_valves_with_heat_pump_radiators(self, make_profile, legacy_request_data):
        legacy_request_data["equipment"]["heat_pump_radiators"] = "yes"
        profile = make_profile(legacy_request_data)
        recs = RecommendationEngine().evaluate(_ctx(profile, flow_temp_c=45.0))
        hydraulic = [r for r in recs if r.rule_id == "hydraulic_balancing"]
        assert len(hydraulic) == 1
        assert len(hydraulic[0].prerequisites) == 2

    def test_hydraulic_balancing_underfloor_single_step(self, make_profile, underfloor_request_data):
        underfloor_request_data["equipment"]["hydraulic_balancing"] = "no"
        profile = make_profile(underfloor_request_data)
        hydraulic = [r for r in RecommendationEngine().evaluate(_ctx(profile))
                     if r.rule_id == "hydraulic_balancing"]
        assert len(hydraulic[0].prerequisites) == 1

    def test_major_envelope(self, make_profile, legacy_request_data):
        legacy_request_data["building"]["construction_period"] = "before_1960"
        legacy_request_data["building"]["renovations"] = ["roof"]
        profile = make_profile(legacy_request_data)
        recs = RecommendationEngine().evaluate(_ctx(profile, specific_demand=160.0))
        envelope = [r for r in recs if r.category == RecommendationCategory.BUILDING_ENVELOPE]
        assert len(envelope) == 1
        assert envelope[0].title == (
            "Energy-efficient renovation: Facade insulation, Window replacement, "
            "Basement ceiling insulation"
        )
        assert envelope[0].intervention_id == "facade_insulation"

    def test_targeted_envelope(self, legacy_profile):
        recs = RecommendationEngine().evaluate(_ctx(legacy_profile, specific_demand=85.0))
        envelope = [r for r in recs if r.rule_id == "envelope_targeted"]
        assert envelope[0].title == (
            "Targeted insulation: Basement ceiling insulation, Roof / top floor ceiling insulation"
        )

    def test_no_envelope_when_complete(self, make_profile, legacy_request_data):
        legacy_request_data["building"]["renovations"] = [r.value for r in Renovation]
        profile = make_profile(legacy_request_data)
        ids = _fired(_ctx(profile, specific_demand=120.0))
        assert "envelope_major" not in ids

    def test_room_temperature(self, make_profile, underfloor_request_data):
        underfloor_request_data["equipment"]["target_room_temp_c"] = 23
        recs = RecommendationEngine().evaluate(_ctx(make_profile(underfloor_request_data)))
        room = [r for r in recs if r.rule_id == "room_temperature"]
        assert room[0].title == "Lower the room temperature from 23 °C to 21 °C"
        assert "12 %" in room[0].impact

    def test_room_controllers(self, make_profile, underfloor_request_data):
        underfloor_request_data["equipment"]["auto_controllers"] = "no"
        assert "room_controllers" in _fired(_ctx(make_profile(underfloor_request_data)))

    def test_hot_water(self, make_profile, underfloor_request_data):
        underfloor_request_data["equipment"]["showers_per_day"] = 5
        assert "hot_water_usage" in _fired(_ctx(make_profile(underfloor_request_data)))

    def test_buffer_tank_with_underfloor(self, make_profile, underfloor_request_data):
        underfloor_request_data["equipment"]["buffer_tank"] = "yes"
        assert "buffer_tank_review" in _fired(_ctx(make_profile(underfloor_request_data)))

    @pytest.mark.parametrize("deviation", [35.0, -40.0])
    def test_energy_auditor(self, underfloor_profile, deviation):
        ids = _fired(_ctx(underfloor_profile, deviation_percent=deviation))
        assert ids[0] == "energy_auditor"

    def test_energy_auditor_threshold(self, underfloor_profile):
        assert "energy_auditor" not in _fired(_ctx(underfloor_profile, deviation_percent=30.0))


class TestAuxiliaryAndPVRules:
    """Tests for backup heater and PV rules."""

    def test_critical_share_high_priority(self, underfloor_profile):
        recs = RecommendationEngine().evaluate(
            _ctx(underfloor_profile, auxiliary=_aux(AuxHeaterRating.CRITICAL, 20.0))
        )
        assert recs[0].rule_id == "auxiliary_heater_share"
        assert recs[0].priority == Priority.HIGH

    def test_noticeable_share_medium_priority(self, underfloor_profile):
        recs = RecommendationEngine().evaluate(
            _ctx(underfloor_profile, auxiliary=_aux(AuxHeaterRating.NOTICEABLE, 10.0))
        )
        share = [r for r in recs if r.rule_id == "auxiliary_heater_share"]
        assert share[0].priority == Priority.MEDIUM

    def test_good_share_silent(self, underfloor_profile):
        ids = _fired(_ctx(underfloor_profile, auxiliary=_aux(AuxHeaterRating.GOOD, 2.0)))
        assert "auxiliary_heater_share" not in ids

    def test_unknown_backup_heater(self, make_profile, underfloor_request_data):
        underfloor_request_data["auxiliary_heater"] = {"present": "unknown"}
        assert "auxiliary_heater_unknown" in _fired(_ctx(make_profile(underfloor_request_data)))

    def test_pv_missing_above_threshold(self, make_profile, underfloor_request_data):
        underfloor_request_data["pv"] = {"present": "no"}
        profile = make_profile(underfloor_request_data)
        assert "pv_missing" in _fired(_ctx(profile, simulated_kwh=4000.0))
        assert "pv_missing" not in _fired(_ctx(profile, simulated_kwh=2000.0))

    def test_pv_without_battery(self, make_profile, underfloor_request_data):
        underfloor_request_data["pv"] = {"present": "yes", "capacity_kwp": 8}
        assert "pv_battery_missing" in _fired(_ctx(make_profile(underfloor_request_data)))


class TestPrioritySort:
    """Tests for ordering."""

    def test_stable_within_tier(self):
        def rec(rule_id, priority):
            return Recommendation(rule_id, RecommendationCategory.SETTINGS, rule_id, "", priority)

        recs = [
            rec("a", Priority.LOW),
            rec("b", Priority.HIGH),
            rec("c", Priority.MEDIUM),
            rec("d", Priority.HIGH),
        ]
        assert [r.rule_id for r in sort_by_priority(recs)] == ["b", "d", "c", "a"]

    def test_engine_order(self, legacy_profile):
        ids = _fired(_ctx(legacy_profile, flow_temp_c=55.0, specific_demand=120.0))
        assert ids == [
            "emitter_upgrade",
            "hydraulic_balancing",
            "envelope_major",
            "flow_temp_legacy_staged",
            "maintenance",
        ]

    def test_custom_rule_subset(self, legacy_profile):
        engine = RecommendationEngine(rules=[r for r in RULES if r.rule_id == "maintenance"])
        assert [r.rule_id for r in engine.evaluate(_ctx(legacy_profile))] == ["maintenance"]

    def test_text_includes_prerequisites(self, legacy_profile):
        recs = RecommendationEngine().evaluate(_ctx(legacy_profile, flow_temp_c=55.0))
        hydraulic = next(r for r in recs if r.rule_id == "hydraulic_balancing")
        assert "thermostatic valves" in hydraulic.text
        assert replace(hydraulic, prerequisites=()).text.count("thermostatic") == 0
