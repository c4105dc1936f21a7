"""
Recommendations Module - regras, estratégias e priorização.
"""

from .engine import (
    Recommendation,
    RecommendationEngine,
    priority_for,
    prioritize,
    score_recommendation,
)
from .strategies import STRATEGY_RULES, Rule, RuleContext, Strategy, rules_for

__all__ = [
    'Recommendation',
    'RecommendationEngine',
    'priority_for',
    'prioritize',
    'score_recommendation',
    'STRATEGY_RULES',
    'Rule',
    'RuleContext',
    'Strategy',
    'rules_for',
]
