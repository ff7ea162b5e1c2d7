"""
Tests for PV self-consumption estimation.
"""

import pytest

from hpcheck.core.profile import PVConfig, PVOrientation, PVPresence
from hpcheck.pv import (
    MONTHLY_YIELD_KWH_PER_KWP,
    PVOverlapEstimator,
    overlap_fraction,
    regional_yield_factor,
)


def _estimate(pv, postal_code="50667", consumption=4000, price=0.30):
    return PVOverlapEstimator(feed_in_eur_per_kwh=0.082).estimate(
        pv=pv,
        postal_code=postal_code,
        annual_consumption_kwh=consumption,
        price_eur_per_kwh=price,
    )


class TestRegionalYieldFactor:
    """Tests for regional yield correction."""

    @pytest.mark.parametrize("postal_code,factor", [
        ("20095", 0.92),
        ("80331", 1.05),
        ("10115", 1.05),
        ("50667", 1.0),
        ("", 1.0),
        ("abc", 1.0),
    ])
    def test_factors(self, postal_code, factor):
        assert regional_yield_factor(postal_code) == pytest.approx(factor)


class TestOverlapFraction:
    """Tests for direct overlap with and without storage."""

    def test_without_battery(self):
        assert overlap_fraction(False) == pytest.approx(0.35)

    def test_reference_battery(self):
        assert overlap_fraction(True) == pytest.approx(0.55)

    def test_large_battery_capped(self):
        assert overlap_fraction(True, 50) == pytest.approx(0.65)


class TestPVOverlapEstimator:
    """Tests for PVOverlapEstimator."""

    @pytest.mark.parametrize("pv", [
        None,
        PVConfig(present=PVPresence.NO, capacity_kwp=10),
        PVConfig(present=PVPresence.YES, capacity_kwp=None),
    ])
    def test_not_applicable(self, pv):
        assert _estimate(pv) is None

    def test_annual_yield(self):
        analysis = _estimate(PVConfig(present=PVPresence.YES, capacity_kwp=10))
        assert analysis.annual_yield_kwh == pytest.approx(sum(MONTHLY_YIELD_KWH_PER_KWP) * 10, abs=12)
        assert len(analysis.monthly) == 12

    def test_self_consumption_bounded(self):
        analysis = _estimate(PVConfig(present=PVPresence.YES, capacity_kwp=10))
        assert 0 < analysis.self_consumption_kwh < 4000
        assert 0 < analysis.self_consumption_share_percent < 100
        for month in analysis.monthly:
            assert month.self_consumption_kwh <= month.heat_pump_kwh

    def test_battery_raises_self_consumption(self):
        without = _estimate(PVConfig(present=PVPresence.YES, capacity_kwp=10))
        with_battery = _estimate(PVConfig(present=PVPresence.YES, capacity_kwp=10, has_battery=True))
        assert with_battery.self_consumption_kwh > without.self_consumption_kwh

    def test_east_yields_less_than_south(self):
        south = _estimate(PVConfig(present=PVPresence.YES, capacity_kwp=8))
        east = _estimate(PVConfig(present=PVPresence.YES, capacity_kwp=8, orientation=PVOrientation.EAST))
        assert east.annual_yield_kwh < south.annual_yield_kwh

    def test_planned_system_included(self):
        assert _estimate(PVConfig(present=PVPresence.PLANNED, capacity_kwp=6)) is not None

    def test_savings_use_price_minus_feed_in(self):
        analysis = _estimate(PVConfig(present=PVPresence.YES, capacity_kwp=10))
        assert analysis.savings_eur == round(analysis.self_consumption_kwh * (0.30 - 0.082))
