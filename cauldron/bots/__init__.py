"""
Bots module - Decision-making for the brewing puzzle.

Provides:
- HeuristicEvaluator: Scores search states
- SearchEngine: Time-boxed state-space search
- BotPolicy: Interface for per-turn decisions
- Personality: Named scoring weight presets
"""

from .evaluator import HeuristicEvaluator, RupeeEvaluator, ScoringWeights, StateEvaluator
from .search import SearchEngine, SearchResult, Scoreboard, ScoreEntry, search
from .policy import BotPolicy, BotDecision, SearchPolicy, RandomPolicy, FirstLegalPolicy
from .personality import Personality, PERSONALITIES, get_personality

__all__ = [
    "HeuristicEvaluator",
    "RupeeEvaluator",
    "ScoringWeights",
    "StateEvaluator",
    "SearchEngine",
    "SearchResult",
    "Scoreboard",
    "ScoreEntry",
    "search",
    "BotPolicy",
    "BotDecision",
    "SearchPolicy",
    "RandomPolicy",
    "FirstLegalPolicy",
    "Personality",
    "PERSONALITIES",
    "get_personality",
]
