"""
Engine Configuration

Tunable thresholds for the geometry and ranking paths.

The sparse-comparison threshold and the confidence penalties are
provisional defaults, not methodologically validated cutoffs, so they are
exposed here rather than hard-coded in the analyzers.

Usage:
    config = EngineConfig.from_yaml("nma.yaml")
    config = EngineConfig.from_dict({"ranking": {"n_simulations": 5000}})
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field, fields, asdict
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .exceptions import InvalidInput

logger = logging.getLogger(__name__)


def _require_int(value: Any, label: str, minimum: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value < minimum:
        raise InvalidInput(f"{label} must be an integer >= {minimum}, got {value!r}")


def _require_float(value: Any, label: str) -> None:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise InvalidInput(f"{label} must be a finite number, got {value!r}")


def _require_bounds(min_confidence: float, max_confidence: float) -> None:
    if not 0.0 <= min_confidence <= max_confidence <= 1.0:
        raise InvalidInput("confidence bounds must satisfy 0 <= min <= max <= 1")


@dataclass
class GeometryConfig:
    """Thresholds used by the topology classifier."""
    min_studies_per_comparison: int = 2
    base_confidence: float = 0.7
    disconnected_penalty: float = 0.2
    few_treatments_penalty: float = 0.2
    sparse_penalty: float = 0.1
    star_penalty: float = 0.1
    min_confidence: float = 0.1
    max_confidence: float = 0.9

    def __post_init__(self) -> None:
        _require_int(self.min_studies_per_comparison, "min_studies_per_comparison", 1)
        for f in fields(self)[1:]:
            _require_float(getattr(self, f.name), f.name)
        _require_bounds(self.min_confidence, self.max_confidence)


@dataclass
class RankingConfig:
    """Simulation size and messaging thresholds for treatment ranking."""
    n_simulations: int = 10000
    higher_is_better: bool = True
    seed: Optional[int] = None
    chunk_size: int = 2000
    divergence_tolerance: float = 0.05
    strong_evidence_threshold: float = 0.8
    likely_best_threshold: float = 0.5
    high_uncertainty_se: float = 0.5
    small_spread_sucra: float = 20.0
    base_confidence: float = 0.7
    min_confidence: float = 0.1
    max_confidence: float = 0.9

    def __post_init__(self) -> None:
        _require_int(self.n_simulations, "n_simulations", 1)
        if not isinstance(self.higher_is_better, bool):
            raise InvalidInput(f"higher_is_better must be true or false, got {self.higher_is_better!r}")
        if self.seed is not None:
            _require_int(self.seed, "seed", 0)
        _require_int(self.chunk_size, "chunk_size", 1)
        # fields after chunk_size are all numeric thresholds
        for f in fields(self)[4:]:
            _require_float(getattr(self, f.name), f.name)
        _require_bounds(self.min_confidence, self.max_confidence)


@dataclass
class EngineConfig:
    """Bundles the geometry and ranking configuration."""
    geometry: GeometryConfig = field(default_factory=GeometryConfig)
    ranking: RankingConfig = field(default_factory=RankingConfig)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "EngineConfig":
        data = data or {}
        unknown = set(data) - {"geometry", "ranking"}
        if unknown:
            raise InvalidInput(f"Unknown config sections: {sorted(unknown)}")
        return cls(
            geometry=_build_section(GeometryConfig, data.get("geometry")),
            ranking=_build_section(RankingConfig, data.get("ranking")),
        )

    @classmethod
    def from_yaml(cls, filepath: str) -> "EngineConfig":
        """Load configuration from a YAML file."""
        path = Path(filepath)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {filepath}")

        logger.info("Loading engine config from %s", filepath)
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)

        if data is not None and not isinstance(data, dict):
            raise InvalidInput(f"Config file {filepath} must contain a mapping")
        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _build_section(section_cls, values: Optional[Dict[str, Any]]):
    if values is None:
        return section_cls()
    if not isinstance(values, dict):
        raise InvalidInput(f"Config section for {section_cls.__name__} must be a mapping")
    known = {f.name for f in fields(section_cls)}
    unknown = set(values) - known
    if unknown:
        raise InvalidInput(f"Unknown {section_cls.__name__} keys: {sorted(unknown)}")
    return section_cls(**values)
