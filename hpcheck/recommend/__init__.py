"""
Recommend Module - Rule-based improvement recommendations.
"""

from .rules import Recommendation, Rule, RuleContext, RULES, rule_ids
from .engine import RecommendationEngine, sort_by_priority

__all__ = [
    'Recommendation', 'Rule', 'RuleContext', 'RULES', 'rule_ids',
    'RecommendationEngine', 'sort_by_priority',
]
