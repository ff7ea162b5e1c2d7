"""
Tests for federal and regional funding matching.
"""

from hpcheck.core.profile import Priority, RecommendationCategory
from hpcheck.funding import FEDERAL_BUCKETS, FundingMatcher
from hpcheck.recommend import Recommendation


def _rec(title, impact="", context=None, prerequisites=()):
    return Recommendation(
        rule_id="test",
        category=RecommendationCategory.MEASURE,
        title=title,
        impact=impact,
        priority=Priority.MEDIUM,
        prerequisites=prerequisites,
        context=context,
    )


def _measures(programs):
    return [p.measure for p in programs]


class TestFederalMatching:
    """Tests for keyword bucket matching."""

    def test_no_recommendations(self):
        assert FundingMatcher().match([]) == []

    def test_no_keywords(self):
        assert FundingMatcher().match([_rec("Regular maintenance and filter check")]) == []

    def test_hydraulic(self):
        programs = FundingMatcher().match([_rec("Have hydraulic balancing carried out")])
        assert _measures(programs) == ["Hydraulic balancing / heating optimization"]

    def test_case_insensitive(self):
        programs = FundingMatcher().match([_rec("HYDRAULIC balancing")])
        assert len(programs) == 1

    def test_keyword_in_prerequisites(self):
        programs = FundingMatcher().match([
            _rec("Plan the next steps", prerequisites=("Book an energy advice appointment",))
        ])
        assert programs[0].subsidy_rate_percent == 80
        assert programs[0].cap_amount == 1300

    def test_envelope_has_bonus(self):
        programs = FundingMatcher().match([_rec("Roof insulation")])
        assert programs[0].has_bonus

    def test_one_entry_per_bucket_in_bucket_order(self):
        recs = [
            _rec("Energy auditor visit"),
            _rec("Facade insulation"),
            _rec("Window replacement"),
            _rec("Have hydraulic balancing carried out"),
        ]
        programs = FundingMatcher().match(recs)
        assert len(programs) == 3
        assert programs == [FEDERAL_BUCKETS[0].program, FEDERAL_BUCKETS[2].program,
                            FEDERAL_BUCKETS[3].program]

    def test_radiators_bucket(self):
        programs = FundingMatcher().match([_rec("Enlarge heating surfaces")])
        assert _measures(programs) == ["Heating optimization / radiator replacement"]


class TestRegionalMatching:
    """Tests for regional programs."""

    def test_bavaria_envelope(self):
        programs = FundingMatcher().match_regional("80331", ["facade_insulation"])
        assert len(programs) == 1
        assert programs[0].regional
        assert programs[0].state == "Bayern"

    def test_no_matching_intervention(self):
        assert FundingMatcher().match_regional("80331", ["maintenance"]) == []

    def test_nrw_battery(self):
        programs = FundingMatcher().match_regional("50667", ["battery_storage"])
        assert programs[0].program.startswith("progres.nrw")

    def test_unknown_state(self):
        assert FundingMatcher().match_regional("", ["facade_insulation"]) == []

    def test_state_without_program(self):
        assert FundingMatcher().match_regional("66111", ["facade_insulation"]) == []

    def test_match_all(self):
        result = FundingMatcher().match_all(
            [_rec("Have hydraulic balancing carried out")], "30159", ["hydraulic_balancing"]
        )
        assert len(result.federal) == 1
        assert result.regional[0].state == "Niedersachsen"
