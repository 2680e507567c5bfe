# storage_mongo.py
# Voter Store and Vote Ledger on top of the shared MongoDB connection
import logging
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, Optional

from bson import ObjectId
from bson.errors import InvalidId
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from votebooth.database.connection import MongoConnector
from votebooth.errors import AlreadyVoted, EmailInUse, PersistenceUnavailable, VoterIdInUse
from votebooth.models.vote_model import VoteRecord
from votebooth.models.voter_model import Voter

logger = logging.getLogger(__name__)


@contextmanager
def unavailable_on_failure(operation: str):
    """Turn pymongo connectivity errors into PersistenceUnavailable."""
    try:
        yield
    except ConnectionFailure as e:
        logger.error(f"MongoDB unavailable during {operation}: {e}")
        raise PersistenceUnavailable() from e


def to_object_id(value: str) -> Optional[ObjectId]:
    try:
        return ObjectId(value)
    except (InvalidId, TypeError):
        return None


class VoterStore:
    def __init__(self, connector: MongoConnector):
        self.connector = connector

    @property
    def collection(self):
        return self.connector.users

    def create(self, name: str, email: str, voter_id: str, password_hash: str, is_admin: bool = False) -> Voter:
        """
        Save a new voter record

        Args:
            name: Display name
            email: Unique email address
            voter_id: Unique voter-registration id
            password_hash: Already hashed credential, never plaintext
            is_admin: Admin accounts are excluded from turnout

        Returns:
            The created Voter

        Raises:
            EmailInUse / VoterIdInUse when either unique field is taken
        """
        voter_data = {
            "_id": ObjectId(),
            "name": name,
            "email": email,
            "voterId": voter_id,
            "password": password_hash,
            "isAdmin": is_admin,
            "hasVoted": False,
            "createdAt": datetime.now(timezone.utc),
        }
        with unavailable_on_failure("voter registration"):
            existing = self.collection.find_one({"$or": [{"email": email}, {"voterId": voter_id}]})
            if existing:
                if existing.get("email") == email:
                    raise EmailInUse()
                raise VoterIdInUse()
            try:
                self.collection.insert_one(voter_data)
            except DuplicateKeyError:
                # lost a race with a concurrent registration
                logger.warning(f"Duplicate registration rejected by index for {voter_id}")
                if self.collection.find_one({"email": email}):
                    raise EmailInUse()
                raise VoterIdInUse()
        logger.info(f"Voter {voter_data['_id']} registered")
        return Voter.from_document(voter_data)

    def get(self, voter_id: str) -> Optional[Voter]:
        oid = to_object_id(voter_id)
        if oid is None:
            return None
        with unavailable_on_failure("voter lookup"):
            doc = self.collection.find_one({"_id": oid})
        return Voter.from_document(doc) if doc else None

    def find_by_email(self, email: str) -> Optional[Dict[str, Any]]:
        """Raw document including the password hash. Login only."""
        with unavailable_on_failure("voter lookup by email"):
            return self.collection.find_one({"email": email})

    def mark_voted(self, voter_id: str) -> int:
        """
        Flip hasVoted false -> true.

        Returns:
            Number of documents modified; anything but 1 means the flag was not set
        """
        oid = to_object_id(voter_id)
        if oid is None:
            return 0
        with unavailable_on_failure("marking voter as voted"):
            result = self.collection.update_one(
                {"_id": oid, "hasVoted": False},
                {"$set": {"hasVoted": True}},
            )
        return result.modified_count

    def set_admin(self, email: str) -> bool:
        with unavailable_on_failure("admin promotion"):
            result = self.collection.update_one({"email": email}, {"$set": {"isAdmin": True}})
        return result.matched_count > 0

    def iter_documents(self) -> Iterator[Dict[str, Any]]:
        with unavailable_on_failure("listing voters"):
            yield from self.collection.find({})

    def update_password(self, voter_id: ObjectId, password_hash: str) -> bool:
        with unavailable_on_failure("password update"):
            result = self.collection.update_one({"_id": voter_id}, {"$set": {"password": password_hash}})
        return result.modified_count > 0

    def count_eligible(self) -> int:
        with unavailable_on_failure("counting voters"):
            return self.collection.count_documents({"isAdmin": {"$ne": True}})

    def count_voted(self) -> int:
        with unavailable_on_failure("counting voters"):
            return self.collection.count_documents({"isAdmin": {"$ne": True}, "hasVoted": True})


class VoteLedger:
    """Append-only collection of cast votes, unique on the voter reference."""

    def __init__(self, connector: MongoConnector):
        self.connector = connector

    @property
    def collection(self):
        return self.connector.votes

    def find_by_voter(self, voter_id: str) -> Optional[VoteRecord]:
        oid = to_object_id(voter_id)
        if oid is None:
            return None
        with unavailable_on_failure("vote lookup"):
            doc = self.collection.find_one({"userId": oid})
        return VoteRecord.from_document(doc) if doc else None

    def record(self, voter_id: str, candidate_id: str, timestamp: Optional[datetime] = None) -> str:
        """
        Insert a vote record

        Returns:
            The inserted vote id

        Raises:
            AlreadyVoted when the unique index already holds a vote for this voter
        """
        vote_data = {
            "candidateId": candidate_id,
            "userId": ObjectId(voter_id),
            "timestamp": timestamp or datetime.now(timezone.utc),
        }
        with unavailable_on_failure("recording vote"):
            try:
                result = self.collection.insert_one(vote_data)
            except DuplicateKeyError as e:
                logger.warning(f"Duplicate vote for voter {voter_id} rejected by unique index")
                raise AlreadyVoted() from e
        return str(result.inserted_id)

    def delete(self, vote_id: str) -> int:
        oid = to_object_id(vote_id)
        if oid is None:
            return 0
        with unavailable_on_failure("deleting vote"):
            result = self.collection.delete_one({"_id": oid})
        return result.deleted_count

    def count_for_candidate(self, candidate_id: str) -> int:
        with unavailable_on_failure("counting votes"):
            return self.collection.count_documents({"candidateId": candidate_id})

    def count_all(self) -> int:
        with unavailable_on_failure("counting votes"):
            return self.collection.count_documents({})

    def counts_by_candidate(self) -> Dict[str, int]:
        pipeline = [{"$group": {"_id": "$candidateId", "count": {"$sum": 1}}}]
        with unavailable_on_failure("aggregating votes"):
            return {row["_id"]: row["count"] for row in self.collection.aggregate(pipeline)}
