"""
Topology Classifier

Characterizes the shape of a treatment network and flags structural risks
for network meta-analysis.

Checks:
    Star shape      : one hub compared with every other treatment, and every
                      other treatment compared only with the hub
    Sparse edges    : a direct comparison backed by fewer studies than
                      ``min_studies_per_comparison``
    Isolated nodes  : treatments with a single direct comparison
    Disconnection   : more than one connected component
    Few treatments  : fewer than three treatments in the network

Confidence:
    Starts at ``base_confidence`` and subtracts a fixed penalty for each of
    disconnection, few treatments, sparse comparisons and star shape, then
    clamps to [min_confidence, max_confidence]. This is a coarse additive
    heuristic, NOT a statistical confidence interval.
"""

from __future__ import annotations

import logging
from typing import List, Optional

import networkx as nx

from treatment_network.core.config import GeometryConfig
from treatment_network.core.models import MultiArmTrial
from .connectivity import ConnectivityAnalyzer
from .models import (
    ComparisonGraph,
    ConnectivityResult,
    IssueSeverity,
    NetworkCharacteristics,
    NetworkIssue,
    NetworkIssues,
    TopologyResult,
)


def find_star_center(network: ComparisonGraph) -> Optional[str]:
    """
    Return the hub if the network is a literal hub-and-spoke graph.

    Networks with fewer than three treatments are never star-shaped.
    """
    G = network.graph
    n = G.number_of_nodes()
    if n < 3:
        return None

    hub, max_degree = None, 0
    for node in G.nodes:
        degree = network.degree(node)
        if degree > max_degree:
            hub, max_degree = node, degree

    if max_degree != n - 1:
        return None

    for node in G.nodes:
        if node == hub:
            continue
        if network.degree(node) != 1 or hub not in G.adj[node]:
            return None
    return hub


class TopologyClassifier:

    def __init__(self, config: Optional[GeometryConfig] = None) -> None:
        self.config = config or GeometryConfig()
        self._connectivity = ConnectivityAnalyzer()
        self._logger = logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def classify(
        self,
        network: ComparisonGraph,
        connectivity: ConnectivityResult,
        multi_arm_trials: List[MultiArmTrial],
    ) -> TopologyResult:
        characteristics = self._characteristics(network)
        issues = NetworkIssues(
            disconnected=not connectivity.is_connected,
            sparse_comparisons=bool(self._sparse_edges(network)),
            star_shaped=characteristics.is_star_shaped,
            isolated_treatments=[
                t for t in network.treatments if network.degree(t) == 1
            ],
        )

        detected = self._detect(network, connectivity, characteristics, issues, multi_arm_trials)
        warnings = [p.description for p in detected if p.code != "MULTI_ARM_TRIALS"]
        recommendations = [p.recommendation for p in detected if p.recommendation]
        detected.sort(key=lambda p: -p.priority)

        confidence = self._confidence(network.n_treatments, issues)

        self._logger.debug(
            "Topology: star=%s sparse=%s isolated=%d confidence=%.2f",
            issues.star_shaped, issues.sparse_comparisons,
            len(issues.isolated_treatments), confidence,
        )

        return TopologyResult(
            characteristics=characteristics,
            issues=issues,
            detected_issues=detected,
            warnings=warnings,
            recommendations=recommendations,
            confidence=confidence,
        )

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _characteristics(self, network: ComparisonGraph) -> NetworkCharacteristics:
        G = network.graph
        n = G.number_of_nodes()
        center = find_star_center(network)
        max_possible = n * (n - 1) / 2

        return NetworkCharacteristics(
            is_star_shaped=center is not None,
            central_treatment=center,
            avg_connections=sum(d for _, d in G.degree) / n,
            completeness=len(network.edges) / max_possible,
            density=nx.density(G),
            articulation_treatments=self._connectivity.articulation_treatments(network),
            bridge_comparisons=self._connectivity.bridge_comparisons(network),
        )

    def _sparse_edges(self, network: ComparisonGraph):
        threshold = self.config.min_studies_per_comparison
        return [key for key, edge in network.edges.items() if edge.n_studies < threshold]

    def _detect(
        self,
        network: ComparisonGraph,
        connectivity: ConnectivityResult,
        characteristics: NetworkCharacteristics,
        issues: NetworkIssues,
        multi_arm_trials: List[MultiArmTrial],
    ) -> List[NetworkIssue]:
        out: List[NetworkIssue] = []

        if issues.disconnected:
            out.append(NetworkIssue(
                code="DISCONNECTED",
                severity=IssueSeverity.CRITICAL.value,
                description=(
                    "Network is disconnected - cannot perform network meta-analysis "
                    "on all treatments"
                ),
                recommendation=(
                    "Consider analyzing connected components separately or adding "
                    "bridging studies"
                ),
                evidence={"n_components": connectivity.n_components,
                          "components": [list(c) for c in connectivity.components]},
            ))

        if issues.sparse_comparisons:
            sparse = self._sparse_edges(network)
            threshold = self.config.min_studies_per_comparison
            out.append(NetworkIssue(
                code="SPARSE_COMPARISONS",
                severity=IssueSeverity.MEDIUM.value,
                description=(
                    f"Some comparisons have fewer than {threshold} studies - "
                    f"results may be unreliable"
                ),
                recommendation="Interpret results for sparse comparisons with caution",
                evidence={"comparisons": [list(key) for key in sparse],
                          "min_studies_per_comparison": threshold},
            ))

        if issues.star_shaped:
            out.append(NetworkIssue(
                code="STAR_SHAPED",
                severity=IssueSeverity.HIGH.value,
                description="Network is star-shaped - high risk of inconsistency",
                recommendation=(
                    "Carefully assess consistency/coherence; consider sensitivity analyses"
                ),
                evidence={"central_treatment": characteristics.central_treatment},
            ))

        if issues.isolated_treatments:
            isolated = issues.isolated_treatments
            out.append(NetworkIssue(
                code="ISOLATED_TREATMENTS",
                severity=IssueSeverity.MEDIUM.value,
                description=f"{len(isolated)} treatment(s) have only one connection",
                recommendation=(
                    "Results for isolated treatments rely heavily on indirect evidence; "
                    f"downweight confidence in the rankings of {', '.join(isolated)}"
                ),
                evidence={"treatments": list(isolated)},
            ))

        if multi_arm_trials:
            out.append(NetworkIssue(
                code="MULTI_ARM_TRIALS",
                severity=IssueSeverity.LOW.value,
                description=f"{len(multi_arm_trials)} multi-arm trial(s) present",
                recommendation=(
                    f"{len(multi_arm_trials)} multi-arm trial(s) detected - ensure proper "
                    f"handling of correlation"
                ),
                evidence={"studies": [t.study_id for t in multi_arm_trials]},
            ))

        if network.n_treatments < 3:
            out.append(NetworkIssue(
                code="FEW_TREATMENTS",
                severity=IssueSeverity.HIGH.value,
                description=(
                    "Only 2 treatments - standard pairwise meta-analysis is more appropriate"
                ),
                recommendation="",
                evidence={"n_treatments": network.n_treatments},
            ))

        return out

    def _confidence(self, n_treatments: int, issues: NetworkIssues) -> float:
        cfg = self.config
        confidence = cfg.base_confidence

        if issues.disconnected:
            confidence -= cfg.disconnected_penalty
        if n_treatments < 3:
            confidence -= cfg.few_treatments_penalty
        if issues.sparse_comparisons:
            confidence -= cfg.sparse_penalty
        if issues.star_shaped:
            confidence -= cfg.star_penalty

        return round(max(cfg.min_confidence, min(cfg.max_confidence, confidence)), 10)
