import itertools

import mongomock
import pytest
from fastapi.testclient import TestClient

from votebooth.candidate_registry import CandidateRegistry
from votebooth.config import Settings, load_seed_candidates
from votebooth.database.connection import MongoConnector
from votebooth.main import create_app
from votebooth.results import ResultsAggregator
from votebooth.storage_mongo import VoteLedger, VoterStore
from votebooth.voting import VotingService


@pytest.fixture
def settings() -> Settings:
    return Settings(mongo_db="votebooth-test", secret_key="test-secret-key")


@pytest.fixture
def connector(settings):
    connector = MongoConnector(settings, client=mongomock.MongoClient())
    connector.ensure_indexes()
    yield connector
    connector.close()


@pytest.fixture
def seed_candidates(settings):
    return load_seed_candidates(settings)


@pytest.fixture
def registry(connector, seed_candidates):
    registry = CandidateRegistry(connector)
    registry.seed(seed_candidates)
    return registry


@pytest.fixture
def voter_store(connector):
    return VoterStore(connector)


@pytest.fixture
def ledger(connector):
    return VoteLedger(connector)


@pytest.fixture
def aggregator(registry, voter_store, ledger, seed_candidates):
    return ResultsAggregator(registry, voter_store, ledger, fallback_candidates=seed_candidates)


@pytest.fixture
def service(voter_store, registry, ledger, aggregator):
    return VotingService(voter_store, registry, ledger, aggregator)


@pytest.fixture
def make_voter(voter_store):
    counter = itertools.count(1)

    def _make(is_admin: bool = False, password_hash: str = "stored-hash"):
        n = next(counter)
        return voter_store.create(
            name=f"Voter {n}",
            email=f"voter{n}@mail.org",
            voter_id=f"VID{n:04d}",
            password_hash=password_hash,
            is_admin=is_admin,
        )

    return _make


@pytest.fixture
def app(settings):
    return create_app(settings, client=mongomock.MongoClient())


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
