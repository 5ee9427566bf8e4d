"""
Network Meta-Analysis Service

Request/response boundary of the engine. Orchestrates the geometry path
(ComparisonGraphBuilder -> ConnectivityAnalyzer + multi-arm detection ->
TopologyClassifier -> AssessmentComposer) and the ranking path
(RankSimulator -> AssessmentComposer). The two paths share no state.

Both operations are synchronous, in-memory and bounded: O(V + E) for
geometry and O(n_simulations x n_treatments) for ranking. Callers wanting
a time limit should cap ``n_simulations``.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from treatment_network.core.config import EngineConfig
from treatment_network.core.exceptions import InvalidInput
from treatment_network.core.models import TreatmentComparison, TreatmentEffect
from treatment_network.analysis.graph_builder import ComparisonGraphBuilder
from treatment_network.analysis.connectivity import ConnectivityAnalyzer
from treatment_network.analysis.multi_arm import detect_multi_arm_trials
from treatment_network.analysis.topology_classifier import TopologyClassifier
from treatment_network.ranking.rank_simulator import RankSimulator, validate_effects
from treatment_network.assessment.composer import AssessmentComposer
from treatment_network.assessment.models import (
    NetworkGeometryAssessment,
    TreatmentRankingAssessment,
)

logger = logging.getLogger(__name__)

ComparisonLike = Union[TreatmentComparison, Mapping[str, Any]]
EffectLike = Union[TreatmentEffect, Mapping[str, Any]]


def _coerce(items: Optional[Iterable[Any]], record_cls, label: str) -> List[Any]:
    if items is None:
        raise InvalidInput(f"No {label} provided")
    if isinstance(items, (str, bytes, Mapping)):
        raise InvalidInput(f"{label} must be a list of records")
    out = []
    for item in items:
        if isinstance(item, record_cls):
            out.append(item)
        elif isinstance(item, Mapping):
            out.append(record_cls.from_dict(item))
        else:
            raise InvalidInput(f"Unsupported {label} entry: {item!r}")
    return out


class NetworkService:
    """
    Runs geometry and ranking assessments with a fixed configuration.

    Example:
        >>> service = NetworkService()
        >>> geometry = service.assess_geometry(comparisons)
        >>> ranking = service.rank(effects, n_simulations=5000, seed=7)
    """

    def __init__(self, config: Optional[EngineConfig] = None) -> None:
        self.config = config or EngineConfig()

    def assess_geometry(self, comparisons: Iterable[ComparisonLike]) -> NetworkGeometryAssessment:
        comparisons = _coerce(comparisons, TreatmentComparison, "comparisons")
        logger.info("Assessing network geometry: %d comparisons", len(comparisons))

        network = ComparisonGraphBuilder().build(comparisons)
        connectivity = ConnectivityAnalyzer().analyze(network)
        multi_arm = detect_multi_arm_trials(comparisons)
        topology = TopologyClassifier(self.config.geometry).classify(network, connectivity, multi_arm)

        result = AssessmentComposer(self.config.ranking).compose_geometry(
            network, connectivity, multi_arm, topology,
        )
        logger.info(
            "Network geometry assessment complete: %d treatments, %d studies, "
            "connected=%s, confidence=%.2f",
            result.n_treatments, result.n_studies,
            result.connectivity.is_connected, result.confidence,
        )
        return result

    def rank(
        self,
        effects: Iterable[EffectLike],
        n_simulations: Optional[int] = None,
        higher_is_better: Optional[bool] = None,
        seed: Optional[int] = None,
    ) -> TreatmentRankingAssessment:
        effects = validate_effects(_coerce(effects, TreatmentEffect, "treatment effects"))
        logger.info(
            "Ranking treatments: %d treatments, %s simulations",
            len(effects), n_simulations or self.config.ranking.n_simulations,
        )

        simulation = RankSimulator(self.config.ranking).simulate(
            effects,
            n_simulations=n_simulations,
            higher_is_better=higher_is_better,
            seed=seed,
        )
        result = AssessmentComposer(self.config.ranking).compose_ranking(simulation, effects)

        logger.info(
            "Treatment ranking complete: best=%s (SUCRA %.1f), confidence=%.2f",
            result.best_treatment.treatment, result.best_treatment.sucra, result.confidence,
        )
        return result


def assess_network_geometry(
    comparisons: Iterable[ComparisonLike],
    config: Optional[EngineConfig] = None,
) -> NetworkGeometryAssessment:
    """Assess the structure of the treatment network implied by ``comparisons``."""
    return NetworkService(config).assess_geometry(comparisons)


def rank_treatments(
    effects: Iterable[EffectLike],
    n_simulations: Optional[int] = None,
    higher_is_better: Optional[bool] = None,
    seed: Optional[int] = None,
    config: Optional[EngineConfig] = None,
) -> TreatmentRankingAssessment:
    """Rank treatments by Monte-Carlo simulation of their effect estimates."""
    return NetworkService(config).rank(
        effects,
        n_simulations=n_simulations,
        higher_is_better=higher_is_better,
        seed=seed,
    )
