from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError
from typing import Optional

from votebooth.candidate_registry import CandidateRegistry
from votebooth.config import Settings
from votebooth.errors import InvalidCredentials, NotAuthorized
from votebooth.models.voter_model import Voter
from votebooth.results import ResultsAggregator
from votebooth.security import decode_access_token
from votebooth.storage_mongo import VoterStore
from votebooth.voting import VotingService

bearer_scheme = HTTPBearer(auto_error=False)


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_voter_store(request: Request) -> VoterStore:
    return request.app.state.voter_store


def get_registry(request: Request) -> CandidateRegistry:
    return request.app.state.registry


def get_aggregator(request: Request) -> ResultsAggregator:
    return request.app.state.aggregator


def get_voting_service(request: Request) -> VotingService:
    return request.app.state.voting_service


def require_admin(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
    voters: VoterStore = Depends(get_voter_store),
) -> Voter:
    if credentials is None:
        raise InvalidCredentials("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials, settings.secret_key, settings.jwt_algorithm)
    except JWTError:
        raise InvalidCredentials("Could not validate credentials")

    voter = voters.get(payload.get("sub", ""))
    if voter is None:
        raise InvalidCredentials("Could not validate credentials")
    if not voter.isAdmin:
        raise NotAuthorized()
    return voter
