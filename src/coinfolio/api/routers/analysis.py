from fastapi import APIRouter, Depends

from coinfolio.api.deps import get_analysis_service
from coinfolio.api.schemas.analysis import AllocationResponse
from coinfolio.services import AnalysisService

router = APIRouter(prefix="/analysis", tags=["analysis"])


@router.get("/allocation", response_model=AllocationResponse)
def get_allocation(analysis: AnalysisService = Depends(get_analysis_service)):
    """Share of total portfolio value per holding."""
    return AllocationResponse.from_domain(analysis.allocation())
