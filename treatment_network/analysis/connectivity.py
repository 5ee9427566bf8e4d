"""
Connectivity Analyzer

Computes connected components of the treatment network by depth-first
traversal, started from each not-yet-visited treatment in first-appearance
order. Each traversal yields one component listed in DFS preorder, so the
output is reproducible for the same input. O(V + E).

Also locates the structural weak points of the network: cut treatments
(articulation points) and bridge comparisons.
"""

from __future__ import annotations

import logging
from typing import List, Set, Tuple

import networkx as nx

from treatment_network.core.models import canonical_pair
from .models import ComparisonGraph, ConnectivityResult


class ConnectivityAnalyzer:

    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def analyze(self, network: ComparisonGraph) -> ConnectivityResult:
        G = network.graph
        visited: Set[str] = set()
        components: List[List[str]] = []

        for node in G.nodes:
            if node in visited:
                continue
            component = list(nx.dfs_preorder_nodes(G, source=node))
            visited.update(component)
            components.append(component)

        self._logger.debug("Found %d connected component(s)", len(components))
        return ConnectivityResult(components=components)

    def articulation_treatments(self, network: ComparisonGraph) -> List[str]:
        """Treatments whose removal splits their component."""
        cut = set(nx.articulation_points(network.graph))
        return [node for node in network.graph.nodes if node in cut]

    def bridge_comparisons(self, network: ComparisonGraph) -> List[Tuple[str, str]]:
        """Direct comparisons whose removal splits their component."""
        bridges = {canonical_pair(u, v) for u, v in nx.bridges(network.graph)}
        return [edge.key for edge in network.edges.values() if edge.key in bridges]
