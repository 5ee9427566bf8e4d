"""
Core records, configuration and errors
"""
from .exceptions import InvalidInput
from .config import EngineConfig, GeometryConfig, RankingConfig
from .models import (
    TreatmentComparison,
    TreatmentEffect,
    TreatmentNode,
    NetworkEdge,
    MultiArmTrial,
    canonical_pair,
)

__all__ = [
    "InvalidInput",
    "EngineConfig",
    "GeometryConfig",
    "RankingConfig",
    "TreatmentComparison",
    "TreatmentEffect",
    "TreatmentNode",
    "NetworkEdge",
    "MultiArmTrial",
    "canonical_pair",
]
