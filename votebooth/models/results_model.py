from pydantic import BaseModel
from typing import List, Optional

from votebooth.models.candidate_model import CandidateResult


class ElectionResults(BaseModel):
    candidates: List[CandidateResult]
    totalVotes: int
    turnoutPercentage: float
    winningCandidate: Optional[str] = None
    winningParty: Optional[str] = None
    # set when the store was unreachable and a stale or empty view is served
    degraded: bool = False


class AdminStats(BaseModel):
    registeredVoters: int
    votesCast: int
    pendingVoters: int
    turnoutPercentage: float
