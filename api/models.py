"""
Pydantic models for API requests and responses.
"""

from pydantic import BaseModel, Field
from typing import Any, Dict, List, Optional


class ComparisonModel(BaseModel):
    study_id: str = Field(..., description="Study identifier")
    treatment_a: str = Field(..., description="First treatment arm")
    treatment_b: str = Field(..., description="Second treatment arm")
    n_a: Optional[int] = Field(default=None, description="Participants in treatment A")
    n_b: Optional[int] = Field(default=None, description="Participants in treatment B")
    effect_size: Optional[float] = Field(default=None, description="Effect size, if available")
    standard_error: Optional[float] = Field(default=None, description="Standard error, if available")


class EffectModel(BaseModel):
    treatment: str = Field(..., description="Treatment name")
    effect_size: float = Field(..., description="Effect estimate vs. the common reference")
    standard_error: float = Field(..., description="Standard error of the estimate")
    is_reference: bool = Field(default=False, description="Whether this is the reference treatment")


class GeometryRequest(BaseModel):
    comparisons: List[ComparisonModel] = Field(..., description="Pairwise treatment comparisons")


class RankingRequest(BaseModel):
    effects: List[EffectModel] = Field(..., description="Treatment effect estimates")
    n_simulations: Optional[int] = Field(default=None, description="Monte-Carlo draws (default 10000)")
    higher_is_better: Optional[bool] = Field(default=None, description="Direction of benefit (default true)")
    seed: Optional[int] = Field(default=None, description="Random seed for reproducibility")


class AssessmentResponse(BaseModel):
    success: bool
    result: Dict[str, Any]


class HealthResponse(BaseModel):
    status: str
    timestamp: str
    version: str
