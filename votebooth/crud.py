import logging
from typing import Optional, Tuple

from votebooth.models.voter_model import Voter
from votebooth.schemas import RegisterRequest
from votebooth.security import hash_password, looks_hashed, verify_password
from votebooth.storage_mongo import VoterStore

logger = logging.getLogger(__name__)


# Register a new voter with hashed password
def register_voter(voters: VoterStore, data: RegisterRequest) -> Voter:
    return voters.create(
        name=data.name,
        email=data.email,
        voter_id=data.voterId,
        password_hash=hash_password(data.password),
    )


# Create an admin account, or promote an existing one with the same email
def create_admin(voters: VoterStore, name: str, email: str, voter_id: str, password: str) -> Tuple[Voter, bool]:
    existing = voters.find_by_email(email)
    if existing:
        voters.set_admin(email)
        return Voter.from_document({**existing, "isAdmin": True}), False
    return voters.create(name, email, voter_id, hash_password(password), is_admin=True), True


# Login voter
def login_voter(voters: VoterStore, email: str, password: str) -> Tuple[Optional[Voter], Optional[str]]:
    doc = voters.find_by_email(email)
    if not doc:
        return None, "Invalid credentials"

    if not verify_password(password, doc.get("password", "")):
        logger.info(f"Failed login for voter {doc['_id']}")
        return None, "Invalid credentials"

    return Voter.from_document(doc), None


# Hash any passwords still stored in plaintext
def rehash_plaintext_passwords(voters: VoterStore) -> int:
    count = 0
    for doc in voters.iter_documents():
        password = doc.get("password")
        if password and not looks_hashed(password):
            voters.update_password(doc["_id"], hash_password(password))
            logger.info(f"Hashed password for voter {doc.get('email')}")
            count += 1
    return count
