from datetime import datetime
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional


class VoteRequest(BaseModel):
    candidateId: str = Field(..., min_length=1)
    userId: str = Field(..., min_length=1)


class VoterRef(BaseModel):
    userId: str = Field(..., min_length=1)


class VoteRecord(BaseModel):
    id: str
    candidateId: str
    userId: str
    timestamp: datetime

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "VoteRecord":
        return cls(
            id=str(doc["_id"]),
            candidateId=doc["candidateId"],
            userId=str(doc["userId"]),
            timestamp=doc["timestamp"],
        )


class VotingStatus(BaseModel):
    userId: str
    hasVoted: bool
    candidateId: Optional[str] = None
    timestamp: Optional[datetime] = None
