"""
Recommendation engine.

Evaluates the ordered rule set against one run's derived metrics.
"""

import logging
from typing import List, Optional, Sequence

from .rules import RULES, Recommendation, Rule, RuleContext

logger = logging.getLogger(__name__)


def sort_by_priority(recommendations: Sequence[Recommendation]) -> List[Recommendation]:
    """Stable sort high -> medium -> low."""
    return sorted(recommendations, key=lambda rec: rec.priority.rank)


class RecommendationEngine:
    """
    Produce prioritized recommendations.

    Usage:
        engine = RecommendationEngine()
        recommendations = engine.evaluate(context)
    """

    def __init__(self, rules: Optional[Sequence[Rule]] = None):
        self.rules = tuple(rules) if rules is not None else RULES

    def evaluate(self, ctx: RuleContext) -> List[Recommendation]:
        fired = []
        for rule in self.rules:
            rec = rule.evaluate(ctx)
            if rec is None:
                continue
            logger.debug(f"Rule fired: {rec.title}", extra={"rule_id": rule.rule_id})
            fired.append(rec)
        return sort_by_priority(fired)
