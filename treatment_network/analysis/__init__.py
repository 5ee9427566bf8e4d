"""
Geometry analysis of treatment networks
"""
from .graph_builder import ComparisonGraphBuilder, build_adjacency
from .connectivity import ConnectivityAnalyzer
from .multi_arm import detect_multi_arm_trials
from .topology_classifier import TopologyClassifier, find_star_center
from .models import (
    ComparisonGraph,
    ConnectivityResult,
    IssueSeverity,
    NetworkCharacteristics,
    NetworkIssue,
    NetworkIssues,
    TopologyResult,
)

__all__ = [
    "ComparisonGraphBuilder",
    "build_adjacency",
    "ConnectivityAnalyzer",
    "detect_multi_arm_trials",
    "TopologyClassifier",
    "find_star_center",
    "ComparisonGraph",
    "ConnectivityResult",
    "IssueSeverity",
    "NetworkCharacteristics",
    "NetworkIssue",
    "NetworkIssues",
    "TopologyResult",
]
