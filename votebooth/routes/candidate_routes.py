from fastapi import APIRouter, Depends
from typing import List

from votebooth.dependencies import get_aggregator, get_registry, get_voting_service, require_admin
from votebooth.candidate_registry import CandidateRegistry
from votebooth.models.candidate_model import CandidateUpdate, CandidateWithVotes
from votebooth.models.vote_model import VoterRef
from votebooth.models.voter_model import Voter
from votebooth.results import ResultsAggregator
from votebooth.voting import VotingService

router = APIRouter(prefix="/api/candidates", tags=["Candidates"])


@router.get("", response_model=List[CandidateWithVotes])
def list_candidates(aggregator: ResultsAggregator = Depends(get_aggregator)):
    """All candidates in configuration order with their live vote counts."""
    return aggregator.candidates_with_votes()


@router.get("/{candidate_id}", response_model=CandidateWithVotes)
def get_candidate(candidate_id: str, aggregator: ResultsAggregator = Depends(get_aggregator)):
    return aggregator.candidate_with_votes(candidate_id)


@router.patch("/{candidate_id}", response_model=CandidateWithVotes)
def update_candidate(
    candidate_id: str,
    changes: CandidateUpdate,
    admin: Voter = Depends(require_admin),
    registry: CandidateRegistry = Depends(get_registry),
    aggregator: ResultsAggregator = Depends(get_aggregator),
):
    registry.update(candidate_id, changes)
    return aggregator.candidate_with_votes(candidate_id)


@router.post("/{candidate_id}/vote", response_model=CandidateWithVotes)
def vote_for_candidate(
    candidate_id: str,
    body: VoterRef,
    service: VotingService = Depends(get_voting_service),
):
    return service.cast_vote(body.userId, candidate_id)
