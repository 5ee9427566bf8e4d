"""
Assessment Models

The two independently consumable records returned by the engine. Both
serialize to plain JSON-compatible dicts via ``to_dict()`` so they can be
embedded verbatim into larger reports or returned as response bodies.
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List

from treatment_network.core.models import TreatmentNode, NetworkEdge, MultiArmTrial
from treatment_network.analysis.models import (
    ConnectivityResult,
    NetworkCharacteristics,
    NetworkIssue,
    NetworkIssues,
)
from treatment_network.ranking.models import TreatmentRanking


@dataclass
class NetworkGeometryAssessment:
    """
    Structure and connectivity of a treatment network.

    ``confidence`` is a coarse additive heuristic in [0.1, 0.9], not a
    statistical confidence interval.
    """
    n_treatments: int
    n_studies: int
    nodes: List[TreatmentNode]
    edges: List[NetworkEdge]
    multi_arm_trials: List[MultiArmTrial]
    connectivity: ConnectivityResult
    characteristics: NetworkCharacteristics
    issues: NetworkIssues
    recommendations: List[str]
    confidence: float
    warnings: List[str]
    n_comparisons: int = 0
    detected_issues: List[NetworkIssue] = field(default_factory=list)

    def get_node(self, treatment: str) -> TreatmentNode:
        for node in self.nodes:
            if node.treatment == treatment:
                return node
        raise KeyError(treatment)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_treatments": self.n_treatments,
            "n_studies": self.n_studies,
            "n_comparisons": self.n_comparisons,
            "nodes": [n.to_dict() for n in self.nodes],
            "edges": [e.to_dict() for e in self.edges],
            "multi_arm_trials": [t.to_dict() for t in self.multi_arm_trials],
            "n_multi_arm_trials": len(self.multi_arm_trials),
            "connectivity": self.connectivity.to_dict(),
            "characteristics": self.characteristics.to_dict(),
            "issues": self.issues.to_dict(),
            "detected_issues": [p.to_dict() for p in self.detected_issues],
            "recommendations": list(self.recommendations),
            "confidence": self.confidence,
            "warnings": list(self.warnings),
        }


@dataclass
class RankedTreatmentSummary:
    treatment: str
    sucra: float
    prob_best: float

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class TreatmentRankingAssessment:
    """Probabilistic ranking of treatments, sorted by descending SUCRA."""
    n_treatments: int
    n_simulations: int
    higher_is_better: bool
    rankings: List[TreatmentRanking]
    best_treatment: RankedTreatmentSummary
    worst_treatment: RankedTreatmentSummary
    interpretation: str
    recommendations: List[str]
    confidence: float
    warnings: List[str]

    def get_ranking(self, treatment: str) -> TreatmentRanking:
        for ranking in self.rankings:
            if ranking.treatment == treatment:
                return ranking
        raise KeyError(treatment)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "n_treatments": self.n_treatments,
            "n_simulations": self.n_simulations,
            "higher_is_better": self.higher_is_better,
            "rankings": [r.to_dict() for r in self.rankings],
            "best_treatment": self.best_treatment.to_dict(),
            "worst_treatment": self.worst_treatment.to_dict(),
            "interpretation": self.interpretation,
            "recommendations": list(self.recommendations),
            "confidence": self.confidence,
            "warnings": list(self.warnings),
        }
