"""
Rank Simulation Engine

Monte-Carlo estimation of rank probabilities from per-treatment effect
estimates and standard errors against a common reference.

Per draw:
    1. perturbed_t = effect_t + z_t * se_t,  z_t ~ N(0, 1)
    2. sort treatments by perturbed effect, best first
    3. count each treatment at the rank position it landed on

When lower effects are better, effects are negated before simulating so
"better" always sorts first. Ties (e.g. identical effects with zero
standard error) keep input order.

Draws are processed in chunks. Each chunk accumulates into its own count
matrix and the matrices are summed at the end, so no counter is shared
between chunks.

Usage:
    simulator = RankSimulator()
    result = simulator.simulate(effects, n_simulations=10000, seed=42)
    rankings = result.rankings()
"""

from __future__ import annotations

import logging
from functools import reduce
from typing import Iterable, List, Optional, Sequence

import numpy as np

from treatment_network.core.config import RankingConfig
from treatment_network.core.exceptions import InvalidInput
from treatment_network.core.models import TreatmentEffect
from .models import RankSimulationResult


def validate_effects(effects: Iterable[TreatmentEffect]) -> List[TreatmentEffect]:
    effects = list(effects)
    if not effects:
        raise InvalidInput("No treatment effects provided for ranking")
    if len(effects) < 2:
        raise InvalidInput("At least 2 treatments required for ranking")

    seen = set()
    for effect in effects:
        if not isinstance(effect, TreatmentEffect):
            raise InvalidInput(f"Expected TreatmentEffect, got {type(effect).__name__}")
        if effect.standard_error < 0:
            raise InvalidInput(
                f"standard_error for '{effect.treatment}' must be >= 0, got {effect.standard_error}"
            )
        if effect.treatment in seen:
            raise InvalidInput(f"Duplicate treatment '{effect.treatment}' in effects")
        seen.add(effect.treatment)
    return effects


class RankSimulator:

    def __init__(self, config: Optional[RankingConfig] = None) -> None:
        self.config = config or RankingConfig()
        self._logger = logging.getLogger(__name__)

    def simulate(
        self,
        effects: Iterable[TreatmentEffect],
        n_simulations: Optional[int] = None,
        higher_is_better: Optional[bool] = None,
        seed: Optional[int] = None,
    ) -> RankSimulationResult:
        effects = validate_effects(effects)
        n_sims = self.config.n_simulations if n_simulations is None else n_simulations
        if isinstance(n_sims, bool) or not isinstance(n_sims, int) or n_sims < 1:
            raise InvalidInput(f"n_simulations must be a positive integer, got {n_sims!r}")
        if higher_is_better is None:
            higher_is_better = self.config.higher_is_better
        if seed is None:
            seed = self.config.seed

        means = np.array([e.effect_size for e in effects], dtype=float)
        ses = np.array([e.standard_error for e in effects], dtype=float)
        if not higher_is_better:
            means = -means

        self._logger.debug(
            "Simulating ranks: %d treatments x %d draws (seed=%s)",
            len(effects), n_sims, seed,
        )

        rng = np.random.default_rng(seed)
        partial_counts = [
            self._count_chunk(rng, means, ses, size)
            for size in self._chunk_sizes(n_sims)
        ]
        counts = reduce(np.add, partial_counts)

        return RankSimulationResult(
            treatments=[e.treatment for e in effects],
            rank_probabilities=counts / n_sims,
            n_simulations=n_sims,
            higher_is_better=higher_is_better,
            reference_flags=[e.is_reference for e in effects],
        )

    def _chunk_sizes(self, n_simulations: int) -> List[int]:
        chunk = self.config.chunk_size
        sizes = [chunk] * (n_simulations // chunk)
        if n_simulations % chunk:
            sizes.append(n_simulations % chunk)
        return sizes

    @staticmethod
    def _count_chunk(
        rng: np.random.Generator,
        means: np.ndarray,
        ses: np.ndarray,
        size: int,
    ) -> np.ndarray:
        """Rank counts for ``size`` draws: counts[t, r] = times t finished at rank r + 1."""
        n = means.size
        draws = means + rng.standard_normal((size, n)) * ses
        # order[s, r] is the treatment index holding rank r in draw s
        order = np.argsort(-draws, axis=1, kind="stable")
        counts = np.empty((n, n), dtype=np.int64)
        for rank in range(n):
            counts[:, rank] = np.bincount(order[:, rank], minlength=n)
        return counts


def rank_probabilities(
    effects: Sequence[TreatmentEffect],
    n_simulations: int = 10000,
    higher_is_better: bool = True,
    seed: Optional[int] = None,
) -> dict:
    """Treatment name -> rank-probability list."""
    result = RankSimulator().simulate(effects, n_simulations, higher_is_better, seed)
    return {t: result.probabilities_for(t) for t in result.treatments}
