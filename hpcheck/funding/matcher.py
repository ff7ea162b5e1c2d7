"""
Funding matcher.

Maps triggered recommendations to federal programs (keyword buckets over
the recommendation text, at most one entry per bucket) and selected
interventions to regional programs of the home's federal state.
"""

import logging
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

from ..climate.regions import federal_state
from ..recommend.rules import Recommendation
from .programs import FEDERAL_BUCKETS, REGIONAL_PROGRAMS, FundingProgram

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FundingMatch:
    federal: List[FundingProgram] = field(default_factory=list)
    regional: List[FundingProgram] = field(default_factory=list)


class FundingMatcher:
    """
    Find subsidy programs.

    Usage:
        matcher = FundingMatcher()
        programs = matcher.match(recommendations)
        both = matcher.match_all(recommendations, "80331", ["facade_insulation"])
    """

    def match(self, recommendations: Sequence[Recommendation]) -> List[FundingProgram]:
        """Federal programs for the recommendations' text, in bucket order."""
        text = " ".join(rec.text for rec in recommendations).lower()
        matched = []
        for bucket in FEDERAL_BUCKETS:
            if any(keyword in text for keyword in bucket.keywords):
                matched.append(bucket.program)
        logger.debug(f"Matched {len(matched)} federal funding programs")
        return matched

    def match_regional(self, postal_code: str, selected_ids: Iterable[str]) -> List[FundingProgram]:
        """Regional programs covering any of the selected interventions."""
        state = federal_state(postal_code)
        if not state:
            return []
        selected = set(selected_ids)
        return [
            regional.program
            for regional in REGIONAL_PROGRAMS
            if regional.state == state and selected.intersection(regional.intervention_ids)
        ]

    def match_all(
        self,
        recommendations: Sequence[Recommendation],
        postal_code: str,
        selected_ids: Iterable[str],
    ) -> FundingMatch:
        return FundingMatch(
            federal=self.match(recommendations),
            regional=self.match_regional(postal_code, selected_ids),
        )
