from fastapi import APIRouter, Depends

from votebooth.dependencies import get_aggregator, get_voting_service
from votebooth.models.candidate_model import CandidateWithVotes
from votebooth.models.results_model import ElectionResults
from votebooth.models.vote_model import VoteRequest, VotingStatus
from votebooth.results import ResultsAggregator
from votebooth.voting import VotingService

vote_router = APIRouter(prefix="/api", tags=["Vote"])


@vote_router.post("/votes", response_model=CandidateWithVotes)
def cast_vote(vote: VoteRequest, service: VotingService = Depends(get_voting_service)):
    """
    Casts a vote and returns the candidate with its recounted vote total.
    On an error the caller must not assume the vote was recorded;
    /votes/status reports what the ledger holds.
    """
    return service.cast_vote(vote.userId, vote.candidateId)


@vote_router.get("/votes/status/{user_id}", response_model=VotingStatus)
def check_vote(user_id: str, service: VotingService = Depends(get_voting_service)):
    return service.voting_status(user_id)


@vote_router.get("/results", response_model=ElectionResults)
def get_results(aggregator: ResultsAggregator = Depends(get_aggregator)):
    return aggregator.results_or_fallback()
