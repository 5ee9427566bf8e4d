"""
Assessment records and composer
"""
from .composer import AssessmentComposer, divergent_rankings
from .models import (
    NetworkGeometryAssessment,
    RankedTreatmentSummary,
    TreatmentRankingAssessment,
)

__all__ = [
    "AssessmentComposer",
    "divergent_rankings",
    "NetworkGeometryAssessment",
    "RankedTreatmentSummary",
    "TreatmentRankingAssessment",
]
