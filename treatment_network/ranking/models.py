"""
Ranking Domain Models
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List

import numpy as np

from . import statistics as rank_stats


@dataclass
class TreatmentRanking:
    """Rank summary for one treatment."""
    treatment: str
    sucra: float
    p_score: float
    prob_best: float
    mean_rank: float
    median_rank: int
    rank_probabilities: List[float]
    cumulative_probabilities: List[float] = field(default_factory=list)
    is_reference: bool = False

    @property
    def sucra_p_score_gap(self) -> float:
        return abs(self.sucra / 100.0 - self.p_score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "treatment": self.treatment,
            "sucra": self.sucra,
            "p_score": self.p_score,
            "prob_best": self.prob_best,
            "mean_rank": self.mean_rank,
            "median_rank": self.median_rank,
            "rank_probabilities": list(self.rank_probabilities),
            "cumulative_probabilities": list(self.cumulative_probabilities),
            "is_reference": self.is_reference,
        }


@dataclass
class RankSimulationResult:
    """
    Raw Monte-Carlo output.

    ``rank_probabilities[t, r]`` is the probability that treatment ``t``
    (in input order) finishes at rank ``r + 1``.
    """
    treatments: List[str]
    rank_probabilities: np.ndarray
    n_simulations: int
    higher_is_better: bool
    reference_flags: List[bool] = field(default_factory=list)

    @property
    def n_treatments(self) -> int:
        return len(self.treatments)

    def probabilities_for(self, treatment: str) -> List[float]:
        return self.rank_probabilities[self.treatments.index(treatment)].tolist()

    def rankings(self) -> List[TreatmentRanking]:
        """Per-treatment statistics, in input order."""
        flags = self.reference_flags or [False] * self.n_treatments
        out: List[TreatmentRanking] = []
        for idx, treatment in enumerate(self.treatments):
            probs = self.rank_probabilities[idx]
            ranking = TreatmentRanking(
                treatment=treatment,
                sucra=rank_stats.sucra(probs),
                p_score=rank_stats.p_score(probs),
                prob_best=float(probs[0]),
                mean_rank=rank_stats.mean_rank(probs),
                median_rank=rank_stats.median_rank(probs),
                rank_probabilities=probs.tolist(),
                cumulative_probabilities=rank_stats.cumulative_probabilities(probs).tolist(),
                is_reference=flags[idx],
            )
            _check_finite(ranking)
            out.append(ranking)
        return out


def _check_finite(ranking: TreatmentRanking) -> None:
    values = [ranking.sucra, ranking.p_score, ranking.prob_best, ranking.mean_rank]
    if not np.all(np.isfinite(values)) or not np.all(np.isfinite(ranking.rank_probabilities)):
        raise RuntimeError(f"Non-finite ranking statistic computed for '{ranking.treatment}'")
