from datetime import datetime
from pydantic import BaseModel, EmailStr
from typing import Any, Dict


class Voter(BaseModel):
    id: str
    name: str
    email: EmailStr
    voterId: str
    isAdmin: bool = False
    hasVoted: bool = False
    createdAt: datetime

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "Voter":
        # the stored password hash is dropped here and never leaves the store
        data = {k: v for k, v in doc.items() if k not in ("_id", "password")}
        return cls(id=str(doc["_id"]), **data)
