"""
Comparison Graph Builder

Turns a flat list of pairwise treatment comparisons into an undirected
NetworkX graph plus per-treatment and per-edge aggregates, in a single
pass over the input.

Treatment names are case-sensitive, exact-match identifiers. No fuzzy
matching or normalization is performed, so "Placebo" and "placebo" become
two distinct nodes.

Usage:
    builder = ComparisonGraphBuilder()
    network = builder.build(comparisons)
"""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Set, Tuple

import networkx as nx

from treatment_network.core.exceptions import InvalidInput
from treatment_network.core.models import (
    TreatmentComparison,
    TreatmentNode,
    NetworkEdge,
)
from .models import ComparisonGraph


class ComparisonGraphBuilder:
    """Builds a ComparisonGraph from TreatmentComparison records."""

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def build(self, comparisons: Iterable[TreatmentComparison]) -> ComparisonGraph:
        comparisons = list(comparisons)
        if not comparisons:
            raise InvalidInput("No comparisons provided for network geometry assessment")
        for comp in comparisons:
            if not isinstance(comp, TreatmentComparison):
                raise InvalidInput(
                    f"Expected TreatmentComparison, got {type(comp).__name__}"
                )

        G = nx.Graph()
        nodes: Dict[str, TreatmentNode] = {}
        edges: Dict[Tuple[str, str], NetworkEdge] = {}
        node_studies: Dict[str, Set[str]] = defaultdict(set)
        edge_studies: Dict[Tuple[str, str], Set[str]] = defaultdict(set)
        study_ids: Set[str] = set()

        for comp in comparisons:
            study_ids.add(comp.study_id)

            for treatment, n in ((comp.treatment_a, comp.n_a), (comp.treatment_b, comp.n_b)):
                node = nodes.get(treatment)
                if node is None:
                    node = nodes[treatment] = TreatmentNode(treatment=treatment)
                    G.add_node(treatment)
                node_studies[treatment].add(comp.study_id)
                if n:
                    node.total_participants += n

            key = comp.pair
            edge = edges.get(key)
            if edge is None:
                edge = edges[key] = NetworkEdge(treatment_a=key[0], treatment_b=key[1])
            edge_studies[key].add(comp.study_id)
            edge.total_participants += (comp.n_a or 0) + (comp.n_b or 0)

            G.add_edge(comp.treatment_a, comp.treatment_b)

        for treatment, node in nodes.items():
            node.n_studies = len(node_studies[treatment])
            node.connected_to = list(G.adj[treatment])

        for key, edge in edges.items():
            edge.n_studies = len(edge_studies[key])
            G.edges[key]["n_studies"] = edge.n_studies
            G.edges[key]["total_participants"] = edge.total_participants

        self._logger.debug(
            "Built comparison graph: %d treatments, %d edges from %d comparisons (%d studies)",
            G.number_of_nodes(), G.number_of_edges(), len(comparisons), len(study_ids),
        )

        return ComparisonGraph(
            graph=G,
            nodes=nodes,
            edges=edges,
            n_studies=len(study_ids),
            n_comparisons=len(comparisons),
        )


def build_adjacency(comparisons: Iterable[TreatmentComparison]) -> Dict[str, List[str]]:
    """Adjacency mapping (treatment -> neighbors) in first-appearance order."""
    return ComparisonGraphBuilder().build(comparisons).adjacency()
