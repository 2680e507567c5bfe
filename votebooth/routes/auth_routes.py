from fastapi import APIRouter, Depends

from votebooth.config import Settings
from votebooth.crud import login_voter, register_voter
from votebooth.dependencies import get_settings, get_voter_store
from votebooth.errors import InvalidCredentials
from votebooth.schemas import LoginRequest, LoginResponse, RegisterRequest, VoterOut
from votebooth.security import create_access_token
from votebooth.storage_mongo import VoterStore

router = APIRouter(prefix="/api/auth", tags=["Auth"])


@router.post("/register", response_model=VoterOut, status_code=201)
def register(data: RegisterRequest, voters: VoterStore = Depends(get_voter_store)):
    voter = register_voter(voters, data)
    return VoterOut.from_voter(voter)


@router.post("/login", response_model=LoginResponse)
def login(
    data: LoginRequest,
    voters: VoterStore = Depends(get_voter_store),
    settings: Settings = Depends(get_settings),
):
    voter, error = login_voter(voters, data.email, data.password)
    if error:
        raise InvalidCredentials(error)
    token = create_access_token(
        {"sub": voter.id, "email": voter.email},
        settings.secret_key,
        algorithm=settings.jwt_algorithm,
        expires_minutes=settings.access_token_expire_minutes,
    )
    return LoginResponse(**VoterOut.from_voter(voter).model_dump(), access_token=token)
