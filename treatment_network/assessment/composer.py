"""
Assessment Composer

Packages analyzer and simulator output into the public assessment
records. No algorithmic content: formatting and threshold-based messaging
only.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from treatment_network.core.config import RankingConfig
from treatment_network.core.models import MultiArmTrial, TreatmentEffect
from treatment_network.analysis.models import ComparisonGraph, ConnectivityResult, TopologyResult
from treatment_network.ranking.models import RankSimulationResult, TreatmentRanking
from .models import (
    NetworkGeometryAssessment,
    RankedTreatmentSummary,
    TreatmentRankingAssessment,
)

logger = logging.getLogger(__name__)


def divergent_rankings(rankings: Sequence[TreatmentRanking], tolerance: float) -> List[TreatmentRanking]:
    """Treatments whose SUCRA (rescaled to 0-1) and P-score differ by more than ``tolerance``."""
    return [r for r in rankings if r.sucra_p_score_gap > tolerance]


class AssessmentComposer:

    def __init__(self, ranking_config: Optional[RankingConfig] = None) -> None:
        self.ranking_config = ranking_config or RankingConfig()

    # ------------------------------------------------------------------
    # Geometry
    # ------------------------------------------------------------------

    def compose_geometry(
        self,
        network: ComparisonGraph,
        connectivity: ConnectivityResult,
        multi_arm_trials: List[MultiArmTrial],
        topology: TopologyResult,
    ) -> NetworkGeometryAssessment:
        return NetworkGeometryAssessment(
            n_treatments=network.n_treatments,
            n_studies=network.n_studies,
            n_comparisons=network.n_comparisons,
            nodes=list(network.nodes.values()),
            edges=list(network.edges.values()),
            multi_arm_trials=list(multi_arm_trials),
            connectivity=connectivity,
            characteristics=topology.characteristics,
            issues=topology.issues,
            detected_issues=list(topology.detected_issues),
            recommendations=list(topology.recommendations),
            confidence=topology.confidence,
            warnings=list(topology.warnings),
        )

    # ------------------------------------------------------------------
    # Ranking
    # ------------------------------------------------------------------

    def compose_ranking(
        self,
        simulation: RankSimulationResult,
        effects: Sequence[TreatmentEffect],
    ) -> TreatmentRankingAssessment:
        cfg = self.ranking_config
        n = simulation.n_treatments

        rankings = sorted(simulation.rankings(), key=lambda r: r.sucra, reverse=True)
        best, worst = rankings[0], rankings[-1]

        warnings: List[str] = []
        recommendations: List[str] = []

        if best.prob_best < cfg.likely_best_threshold:
            warnings.append("No clear best treatment - rankings are uncertain")
            recommendations.append("Consider additional studies to reduce uncertainty")

        if best.sucra - worst.sucra < cfg.small_spread_sucra:
            warnings.append("Small difference between best and worst treatments")
            recommendations.append(
                "Treatments may have similar effectiveness; consider other factors "
                "(cost, safety, preferences)"
            )

        uncertain = [r for r in rankings if 1 < r.mean_rank < n]
        if len(uncertain) > n / 2:
            warnings.append("Many treatments have uncertain rankings")
            recommendations.append("Interpret middle-ranked treatments with caution")

        if n < 3:
            warnings.append("Only 2 treatments - ranking is trivial")

        avg_se = sum(e.standard_error for e in effects) / len(effects)
        if avg_se > cfg.high_uncertainty_se:
            warnings.append("High uncertainty in effect estimates")

        divergent = divergent_rankings(rankings, cfg.divergence_tolerance)
        if divergent:
            details = ", ".join(
                f"{r.treatment} (SUCRA {r.sucra:.1f}% vs P-score {r.p_score:.2f})"
                for r in divergent
            )
            warnings.append(f"SUCRA and P-score diverge for: {details}")
            recommendations.append(
                "Inspect the rank-probability distributions of diverging treatments "
                "before relying on either summary"
            )

        confidence = self._ranking_confidence(best, n, avg_se)

        return TreatmentRankingAssessment(
            n_treatments=n,
            n_simulations=simulation.n_simulations,
            higher_is_better=simulation.higher_is_better,
            rankings=rankings,
            best_treatment=RankedTreatmentSummary(best.treatment, best.sucra, best.prob_best),
            worst_treatment=RankedTreatmentSummary(worst.treatment, worst.sucra, worst.prob_best),
            interpretation=self.interpret(best, simulation.n_simulations),
            recommendations=recommendations,
            confidence=confidence,
            warnings=warnings,
        )

    def interpret(self, best: TreatmentRanking, n_simulations: int) -> str:
        cfg = self.ranking_config
        text = (
            f"Based on {n_simulations:,} simulations, {best.treatment} ranks highest "
            f"(SUCRA = {best.sucra:.1f}%, {best.prob_best * 100:.1f}% probability of being best). "
        )
        if best.prob_best > cfg.strong_evidence_threshold:
            text += f"There is strong evidence that {best.treatment} is the best treatment."
        elif best.prob_best > cfg.likely_best_threshold:
            text += f"{best.treatment} is likely the best treatment, but uncertainty remains."
        else:
            text += "Ranking is uncertain; multiple treatments have similar performance."
        return text

    def _ranking_confidence(self, best: TreatmentRanking, n_treatments: int, avg_se: float) -> float:
        cfg = self.ranking_config
        confidence = cfg.base_confidence

        if best.prob_best > cfg.strong_evidence_threshold:
            confidence += 0.1
        elif best.prob_best < cfg.likely_best_threshold:
            confidence -= 0.2
        if n_treatments < 3:
            confidence -= 0.2
        if avg_se > cfg.high_uncertainty_se:
            confidence -= 0.1

        return round(max(cfg.min_confidence, min(cfg.max_confidence, confidence)), 10)
