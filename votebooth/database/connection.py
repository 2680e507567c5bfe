import logging
import threading
from typing import Optional

from pymongo import ASCENDING, MongoClient
from pymongo.errors import ConnectionFailure

from votebooth.config import Settings
from votebooth.errors import PersistenceUnavailable

logger = logging.getLogger(__name__)

USERS_COLLECTION_NAME = "users"
VOTES_COLLECTION_NAME = "votes"
CANDIDATES_COLLECTION_NAME = "candidates"


class MongoConnector:
    """
    Shared handle to the MongoDB client for the whole process.

    The client is opened on first use and closed by ``close()`` on shutdown.
    Tests pass a ready-made client (e.g. ``mongomock.MongoClient()``).
    """

    def __init__(self, settings: Settings, client: Optional[MongoClient] = None):
        self.settings = settings
        self._client = client
        self._lock = threading.Lock()

    @property
    def client(self) -> MongoClient:
        if self._client is None:
            with self._lock:
                if self._client is None:
                    self._client = MongoClient(
                        self.settings.mongo_uri,
                        serverSelectionTimeoutMS=self.settings.mongo_timeout_ms,
                    )
                    logger.info(f"MongoDB client created for database: {self.settings.mongo_db}")
        return self._client

    @property
    def db(self):
        return self.client[self.settings.mongo_db]

    @property
    def users(self):
        return self.db[USERS_COLLECTION_NAME]

    @property
    def votes(self):
        return self.db[VOTES_COLLECTION_NAME]

    @property
    def candidates(self):
        return self.db[CANDIDATES_COLLECTION_NAME]

    def ensure_indexes(self) -> None:
        # votes.userId unique is what rejects a second concurrent vote by one voter
        try:
            self.users.create_index([("email", ASCENDING)], unique=True)
            self.users.create_index([("voterId", ASCENDING)], unique=True)
            self.votes.create_index([("userId", ASCENDING)], unique=True)
            self.votes.create_index([("candidateId", ASCENDING)])
            self.candidates.create_index([("order", ASCENDING)])
        except ConnectionFailure as e:
            logger.error(f"Failed to create indexes on MongoDB: {e}")
            raise PersistenceUnavailable() from e
        logger.info(f"Indexes ensured on database: {self.settings.mongo_db}")

    def ping(self) -> bool:
        try:
            self.client.admin.command("ping")
            return True
        except ConnectionFailure as e:
            logger.error(f"MongoDB ping failed: {e}")
            return False

    def close(self) -> None:
        with self._lock:
            if self._client is not None:
                self._client.close()
                self._client = None
                logger.info("MongoDB connection closed")
