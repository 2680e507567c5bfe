from fastapi import APIRouter, Depends

from votebooth.dependencies import get_aggregator, require_admin
from votebooth.models.results_model import AdminStats
from votebooth.models.voter_model import Voter
from votebooth.results import ResultsAggregator

router = APIRouter(prefix="/api/admin", tags=["Admin"])


@router.get("/stats", response_model=AdminStats)
def dashboard_stats(
    admin: Voter = Depends(require_admin),
    aggregator: ResultsAggregator = Depends(get_aggregator),
):
    return aggregator.admin_stats()
