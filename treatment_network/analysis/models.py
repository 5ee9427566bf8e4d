"""
Analysis Domain Models

Intermediate results of the geometry path: the built comparison graph,
its connectivity, and the topology classification (characteristics,
issues, recommendations, confidence).
"""

from __future__ import annotations
from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

import networkx as nx

from treatment_network.core.models import TreatmentNode, NetworkEdge


# ---------------------------------------------------------------------------
# Comparison Graph
# ---------------------------------------------------------------------------

@dataclass
class ComparisonGraph:
    """
    Treatment network built from a list of comparisons.

    ``graph`` is an undirected NetworkX graph whose node and neighbor
    iteration order follows first appearance in the input, so every
    traversal over it is reproducible for the same input.
    """
    graph: nx.Graph
    nodes: Dict[str, TreatmentNode]
    edges: Dict[Tuple[str, str], NetworkEdge]
    n_studies: int
    n_comparisons: int

    @property
    def treatments(self) -> List[str]:
        return list(self.graph.nodes)

    @property
    def n_treatments(self) -> int:
        return self.graph.number_of_nodes()

    def adjacency(self) -> Dict[str, List[str]]:
        return {node: list(self.graph.adj[node]) for node in self.graph.nodes}

    def degree(self, treatment: str) -> int:
        return self.graph.degree[treatment]


@dataclass
class ConnectivityResult:
    """Connected components of the treatment network."""
    components: List[List[str]]

    @property
    def n_components(self) -> int:
        return len(self.components)

    @property
    def is_connected(self) -> bool:
        return self.n_components == 1

    def component_of(self, treatment: str) -> Optional[List[str]]:
        for component in self.components:
            if treatment in component:
                return component
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_connected": self.is_connected,
            "n_components": self.n_components,
            "components": [list(c) for c in self.components],
        }


# ---------------------------------------------------------------------------
# Topology Classification
# ---------------------------------------------------------------------------

class IssueSeverity(Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"

    @property
    def priority(self) -> int:
        return {"CRITICAL": 4, "HIGH": 3, "MEDIUM": 2, "LOW": 1}[self.value]


@dataclass
class NetworkIssue:
    """A detected structural risk in the treatment network."""
    code: str
    severity: str              # IssueSeverity value
    description: str
    recommendation: str
    evidence: Dict[str, Any] = field(default_factory=dict)

    @property
    def priority(self) -> int:
        return IssueSeverity(self.severity).priority

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class NetworkCharacteristics:
    is_star_shaped: bool
    avg_connections: float
    completeness: float
    central_treatment: Optional[str] = None
    density: float = 0.0
    articulation_treatments: List[str] = field(default_factory=list)
    bridge_comparisons: List[Tuple[str, str]] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "is_star_shaped": self.is_star_shaped,
            "central_treatment": self.central_treatment,
            "avg_connections": self.avg_connections,
            "completeness": self.completeness,
            "density": self.density,
            "articulation_treatments": list(self.articulation_treatments),
            "bridge_comparisons": [list(pair) for pair in self.bridge_comparisons],
        }


@dataclass
class NetworkIssues:
    disconnected: bool
    sparse_comparisons: bool
    star_shaped: bool
    isolated_treatments: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "disconnected": self.disconnected,
            "sparse_comparisons": self.sparse_comparisons,
            "star_shaped": self.star_shaped,
            "isolated_treatments": list(self.isolated_treatments),
        }


@dataclass
class TopologyResult:
    """Output of the topology classifier."""
    characteristics: NetworkCharacteristics
    issues: NetworkIssues
    detected_issues: List[NetworkIssue]
    warnings: List[str]
    recommendations: List[str]
    confidence: float
