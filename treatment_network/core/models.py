"""
Core Value Objects and Entities

Input records supplied by callers (TreatmentComparison, TreatmentEffect)
and the per-treatment / per-edge aggregates derived from them
(TreatmentNode, NetworkEdge, MultiArmTrial).
"""
from __future__ import annotations

import math
from dataclasses import dataclass, field, asdict
from typing import Any, Dict, List, Mapping, Optional, Tuple

from .exceptions import InvalidInput


def _require_name(value: Any, label: str) -> None:
    if not isinstance(value, str) or not value:
        raise InvalidInput(f"{label} must be a non-empty string, got {value!r}")


def _require_number(value: Any, label: str, allow_none: bool = False) -> None:
    if value is None and allow_none:
        return
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidInput(f"{label} must be a number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidInput(f"{label} must be finite, got {value!r}")


def canonical_pair(treatment_a: str, treatment_b: str) -> Tuple[str, str]:
    """Order-independent edge key: the pair sorted lexicographically."""
    return (treatment_a, treatment_b) if treatment_a <= treatment_b else (treatment_b, treatment_a)


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TreatmentComparison:
    """One direct comparison between two treatment arms of a study."""
    study_id: str
    treatment_a: str
    treatment_b: str
    n_a: Optional[int] = None
    n_b: Optional[int] = None
    effect_size: Optional[float] = None
    standard_error: Optional[float] = None

    def __post_init__(self) -> None:
        _require_name(self.study_id, "study_id")
        _require_name(self.treatment_a, "treatment_a")
        _require_name(self.treatment_b, "treatment_b")
        if self.treatment_a == self.treatment_b:
            raise InvalidInput(
                f"Study '{self.study_id}' compares '{self.treatment_a}' with itself"
            )
        for label in ("n_a", "n_b"):
            value = getattr(self, label)
            if value is None:
                continue
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidInput(f"{label} must be a whole number of participants, got {value!r}")
            if value < 0:
                raise InvalidInput(f"{label} must be >= 0, got {value}")
        _require_number(self.effect_size, "effect_size", allow_none=True)
        _require_number(self.standard_error, "standard_error", allow_none=True)
        if self.standard_error is not None and self.standard_error < 0:
            raise InvalidInput(f"standard_error must be >= 0, got {self.standard_error}")

    @property
    def pair(self) -> Tuple[str, str]:
        return canonical_pair(self.treatment_a, self.treatment_b)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TreatmentComparison":
        try:
            return cls(
                study_id=data["study_id"],
                treatment_a=data["treatment_a"],
                treatment_b=data["treatment_b"],
                n_a=data.get("n_a"),
                n_b=data.get("n_b"),
                effect_size=data.get("effect_size"),
                standard_error=data.get("standard_error"),
            )
        except KeyError as exc:
            raise InvalidInput(f"Comparison is missing required field {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class TreatmentEffect:
    """Effect estimate of one treatment against the common reference."""
    treatment: str
    effect_size: float
    standard_error: float
    is_reference: bool = False

    def __post_init__(self) -> None:
        _require_name(self.treatment, "treatment")
        _require_number(self.effect_size, "effect_size")
        _require_number(self.standard_error, "standard_error")
        if not isinstance(self.is_reference, bool):
            raise InvalidInput(
                f"is_reference for '{self.treatment}' must be true or false, got {self.is_reference!r}"
            )
        if self.standard_error < 0:
            raise InvalidInput(
                f"standard_error for '{self.treatment}' must be >= 0, got {self.standard_error}"
            )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TreatmentEffect":
        is_reference = data.get("is_reference")
        try:
            return cls(
                treatment=data["treatment"],
                effect_size=data["effect_size"],
                standard_error=data["standard_error"],
                is_reference=False if is_reference is None else is_reference,
            )
        except KeyError as exc:
            raise InvalidInput(f"Treatment effect is missing required field {exc}") from exc

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


# ---------------------------------------------------------------------------
# Derived aggregates
# ---------------------------------------------------------------------------

@dataclass
class TreatmentNode:
    """Aggregate view of one treatment across all comparisons."""
    treatment: str
    n_studies: int = 0
    total_participants: int = 0
    connected_to: List[str] = field(default_factory=list)

    @property
    def n_comparisons(self) -> int:
        """Degree: number of distinct treatments directly compared."""
        return len(self.connected_to)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "treatment": self.treatment,
            "n_studies": self.n_studies,
            "total_participants": self.total_participants,
            "n_comparisons": self.n_comparisons,
            "connected_to": list(self.connected_to),
        }


@dataclass
class NetworkEdge:
    """One unordered treatment pair with direct evidence."""
    treatment_a: str
    treatment_b: str
    n_studies: int = 0
    total_participants: int = 0
    has_direct_evidence: bool = True

    @property
    def key(self) -> Tuple[str, str]:
        return (self.treatment_a, self.treatment_b)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass
class MultiArmTrial:
    """A study contributing three or more treatment arms."""
    study_id: str
    treatments: List[str]

    @property
    def n_arms(self) -> int:
        return len(self.treatments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "study_id": self.study_id,
            "treatments": list(self.treatments),
            "n_arms": self.n_arms,
        }
