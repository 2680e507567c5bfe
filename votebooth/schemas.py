from pydantic import BaseModel, EmailStr, Field

from votebooth.models.voter_model import Voter


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=50)
    email: EmailStr
    voterId: str = Field(..., min_length=1)
    password: str = Field(..., min_length=6)


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class VoterOut(BaseModel):
    id: str
    name: str
    email: EmailStr
    voterId: str
    isAdmin: bool
    hasVoted: bool

    @classmethod
    def from_voter(cls, voter: Voter) -> "VoterOut":
        return cls(**voter.model_dump(exclude={"createdAt"}))


class LoginResponse(VoterOut):
    access_token: str
    token_type: str = "bearer"
