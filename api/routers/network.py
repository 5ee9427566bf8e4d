"""
Network meta-analysis endpoints: geometry assessment and treatment ranking.
"""

from fastapi import APIRouter, HTTPException
import logging

from api.models import AssessmentResponse, GeometryRequest, RankingRequest
from treatment_network.core.exceptions import InvalidInput
from treatment_network.application.network_service import NetworkService

router = APIRouter(prefix="/api/v1/network", tags=["network"])
logger = logging.getLogger(__name__)


@router.post("/geometry", response_model=AssessmentResponse)
def assess_geometry(request: GeometryRequest):
    """
    Assess the structure of a treatment network:
    - Connectivity and components
    - Star shape, sparse comparisons, isolated treatments
    - Multi-arm trials
    """
    try:
        service = NetworkService()
        result = service.assess_geometry([c.model_dump() for c in request.comparisons])
        return {"success": True, "result": result.to_dict()}
    except InvalidInput as e:
        logger.warning(f"Invalid geometry request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Geometry assessment failed: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Geometry assessment failed: {str(e)}")


@router.post("/ranking", response_model=AssessmentResponse)
def rank_treatments(request: RankingRequest):
    """
    Rank treatments by Monte-Carlo simulation (SUCRA, P-score,
    probability of being best, mean and median rank).
    """
    try:
        service = NetworkService()
        result = service.rank(
            [e.model_dump() for e in request.effects],
            n_simulations=request.n_simulations,
            higher_is_better=request.higher_is_better,
            seed=request.seed,
        )
        return {"success": True, "result": result.to_dict()}
    except InvalidInput as e:
        logger.warning(f"Invalid ranking request: {e}")
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.error(f"Treatment ranking failed: {str(e)}")
        raise HTTPException(status_code=500, detail=f"Treatment ranking failed: {str(e)}")
