import logging
from typing import List

from pymongo import ReturnDocument

from votebooth.database.connection import MongoConnector
from votebooth.errors import CandidateNotFound
from votebooth.models.candidate_model import Candidate, CandidateUpdate
from votebooth.storage_mongo import unavailable_on_failure

logger = logging.getLogger(__name__)


class CandidateRegistry:
    """
    The fixed set of candidates for the current election.

    Seeded from configuration at startup. Admins may edit descriptive fields;
    vote counts are never stored here, they are always counted from the ledger.
    """

    def __init__(self, connector: MongoConnector):
        self.connector = connector

    @property
    def collection(self):
        return self.connector.candidates

    def seed(self, candidates: List[Candidate]) -> None:
        # $setOnInsert keeps admin edits across restarts; order follows the config
        with unavailable_on_failure("seeding candidates"):
            for order, candidate in enumerate(candidates):
                fields = candidate.model_dump(exclude={"id"})
                self.collection.update_one(
                    {"_id": candidate.id},
                    {"$set": {"order": order}, "$setOnInsert": fields},
                    upsert=True,
                )
        logger.info(f"Candidate registry seeded with {len(candidates)} candidates")

    def list(self) -> List[Candidate]:
        with unavailable_on_failure("listing candidates"):
            docs = list(self.collection.find({}).sort("order", 1))
        return [Candidate.from_document(doc) for doc in docs]

    def get(self, candidate_id: str) -> Candidate:
        with unavailable_on_failure("candidate lookup"):
            doc = self.collection.find_one({"_id": candidate_id})
        if not doc:
            raise CandidateNotFound()
        return Candidate.from_document(doc)

    def update(self, candidate_id: str, changes: CandidateUpdate) -> Candidate:
        fields = changes.model_dump(exclude_none=True)
        if not fields:
            return self.get(candidate_id)
        with unavailable_on_failure("candidate update"):
            doc = self.collection.find_one_and_update(
                {"_id": candidate_id},
                {"$set": fields},
                return_document=ReturnDocument.AFTER,
            )
        if not doc:
            raise CandidateNotFound()
        logger.info(f"Candidate {candidate_id} updated: {sorted(fields)}")
        return Candidate.from_document(doc)
