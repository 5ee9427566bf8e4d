"""
Treatment Network

Network meta-analysis topology and ranking engine:
    - comparison-graph reconstruction and connectivity
    - multi-arm trial detection
    - topology risk classification (star shape, sparse and isolated nodes)
    - Monte-Carlo treatment ranking (SUCRA, P-score, probability of best)
"""
from treatment_network.core import (
    InvalidInput,
    EngineConfig,
    GeometryConfig,
    RankingConfig,
    TreatmentComparison,
    TreatmentEffect,
)
from treatment_network.assessment import (
    NetworkGeometryAssessment,
    TreatmentRankingAssessment,
)
from treatment_network.application import (
    NetworkService,
    assess_network_geometry,
    rank_treatments,
)

__version__ = "1.0.0"

__all__ = [
    "InvalidInput",
    "EngineConfig",
    "GeometryConfig",
    "RankingConfig",
    "TreatmentComparison",
    "TreatmentEffect",
    "NetworkGeometryAssessment",
    "TreatmentRankingAssessment",
    "NetworkService",
    "assess_network_geometry",
    "rank_treatments",
]
