"""
Tests for partial-year consumption annualization.
"""

from datetime import date

import pytest

from hpcheck.consumption import ConsumptionAnnualizer, monthly_share


class TestMonthlyShare:
    """Tests for the monthly consumption profile."""

    def test_shares_sum_to_one(self):
        assert sum(monthly_share(i) for i in range(12)) == pytest.approx(1.0, abs=0.01)

    def test_winter_above_summer(self):
        assert monthly_share(0) > monthly_share(6)


class TestConsumptionAnnualizer:
    """Tests for ConsumptionAnnualizer."""

    def test_full_year_not_scaled(self):
        result = ConsumptionAnnualizer().annualize(4000, date(2025, 1, 1), date(2025, 12, 31))
        assert not result.is_partial
        assert result.annualized_kwh == 4000

    def test_winter_half_year_partial(self):
        result = ConsumptionAnnualizer().annualize(4000, date(2024, 10, 1), date(2025, 3, 31))
        assert result.is_partial
        assert result.annualized_kwh != 4000
        assert result.days == 181

    def test_winter_half_year_covers_most_consumption(self):
        """A heating season holds far more than half the annual consumption."""
        result = ConsumptionAnnualizer().annualize(4000, date(2024, 10, 1), date(2025, 3, 31))
        assert result.covered_fraction > 0.7
        assert 4000 < result.annualized_kwh < 6000

    def test_summer_period_extrapolates_strongly(self):
        result = ConsumptionAnnualizer().annualize(300, date(2025, 5, 1), date(2025, 9, 1))
        assert result.annualized_kwh > 300 * 3

    def test_missing_dates_not_scaled(self):
        result = ConsumptionAnnualizer().annualize(4000)
        assert not result.is_partial
        assert result.annualized_kwh == 4000

    def test_reversed_period_not_scaled(self):
        result = ConsumptionAnnualizer().annualize(4000, date(2025, 3, 1), date(2025, 1, 1))
        assert not result.is_partial
        assert result.annualized_kwh == 4000

    def test_threshold_is_configurable(self):
        start, end = date(2025, 1, 1), date(2025, 12, 1)
        assert not ConsumptionAnnualizer(330).annualize(4000, start, end).is_partial
        assert ConsumptionAnnualizer(350).annualize(4000, start, end).is_partial
