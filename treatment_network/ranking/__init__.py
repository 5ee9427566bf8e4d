"""
Monte-Carlo treatment ranking
"""
from .rank_simulator import RankSimulator, rank_probabilities, validate_effects
from .models import RankSimulationResult, TreatmentRanking
from .statistics import (
    cumulative_probabilities,
    mean_rank,
    median_rank,
    p_score,
    sucra,
)

__all__ = [
    "RankSimulator",
    "rank_probabilities",
    "validate_effects",
    "RankSimulationResult",
    "TreatmentRanking",
    "cumulative_probabilities",
    "mean_rank",
    "median_rank",
    "p_score",
    "sucra",
]
