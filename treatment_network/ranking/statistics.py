"""
Ranking Statistics

Summaries of one treatment's rank-probability vector, where index i holds
the probability of finishing at rank i + 1 (rank 1 = best).

    mean_rank   = sum_i p_i * (i + 1)
    median_rank = first 1-based rank whose cumulative probability >= 0.5
    prob_best   = p_0
    SUCRA       = 100 * sum_{r=0}^{n-2} cum_r / (n - 1)
    P-score     = clamp((n - mean_rank) / (n - 1), 0, 1)

SUCRA excludes the final cumulative point, which is 1 by definition, so a
treatment that is certainly best scores 100 and certainly worst scores 0.
The P-score here is the fast mean-rank analogue of SUCRA; for well-behaved
inputs the two track closely.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np

# Cumulative sums of simulated frequencies can land a hair below 0.5.
_MEDIAN_TOLERANCE = 1e-12


def _as_vector(rank_probabilities: Sequence[float]) -> np.ndarray:
    probs = np.asarray(rank_probabilities, dtype=float)
    if probs.ndim != 1 or probs.size < 2:
        raise ValueError("rank probabilities must be a vector of length >= 2")
    return probs


def cumulative_probabilities(rank_probabilities: Sequence[float]) -> np.ndarray:
    return np.cumsum(_as_vector(rank_probabilities))


def mean_rank(rank_probabilities: Sequence[float]) -> float:
    probs = _as_vector(rank_probabilities)
    return float(np.dot(probs, np.arange(1, probs.size + 1)))


def median_rank(rank_probabilities: Sequence[float]) -> int:
    cum = cumulative_probabilities(rank_probabilities)
    reached = np.nonzero(cum >= 0.5 - _MEDIAN_TOLERANCE)[0]
    if reached.size == 0:
        return int(cum.size)
    return int(reached[0]) + 1


def sucra(rank_probabilities: Sequence[float]) -> float:
    cum = cumulative_probabilities(rank_probabilities)
    n = cum.size
    return float(100.0 * cum[:-1].sum() / (n - 1))


def p_score(rank_probabilities: Sequence[float]) -> float:
    n = len(rank_probabilities)
    score = (n - mean_rank(rank_probabilities)) / (n - 1)
    return float(min(1.0, max(0.0, score)))
