from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional


class Candidate(BaseModel):
    id: str = Field(..., min_length=1, examples=["1"])
    name: str = Field(..., max_length=50)
    party: str
    position: str
    bio: str
    imageUrl: str
    age: Optional[int] = None
    education: Optional[str] = None
    experience: Optional[str] = None
    manifesto: Optional[str] = None
    color: Optional[str] = None

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Candidate":
        data = {k: v for k, v in doc.items() if k not in ("_id", "order")}
        return cls(id=str(doc["_id"]), **data)


class CandidateUpdate(BaseModel):
    """Administrative edit. Only descriptive fields; votes are always derived."""

    model_config = ConfigDict(extra="forbid")

    name: Optional[str] = Field(None, max_length=50)
    party: Optional[str] = None
    position: Optional[str] = None
    bio: Optional[str] = None
    imageUrl: Optional[str] = None
    age: Optional[int] = Field(None, ge=0)
    education: Optional[str] = None
    experience: Optional[str] = None
    manifesto: Optional[str] = None
    color: Optional[str] = None


class CandidateWithVotes(Candidate):
    votes: int = 0


class CandidateResult(CandidateWithVotes):
    percentage: float = 0.0
    winner: bool = False
