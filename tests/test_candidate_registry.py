import pytest
from pydantic import ValidationError

from votebooth.errors import CandidateNotFound
from votebooth.models.candidate_model import CandidateUpdate


def test_list_keeps_configuration_order(registry, seed_candidates):
    assert [c.id for c in registry.list()] == [c.id for c in seed_candidates]


def test_get_unknown_candidate(registry):
    with pytest.raises(CandidateNotFound):
        registry.get("does-not-exist")


def test_update_descriptive_fields(registry):
    updated = registry.update("2", CandidateUpdate(bio="New bio", color="#000000"))

    assert updated.bio == "New bio"
    assert updated.color == "#000000"
    assert updated.name == "Bhagavat Dhawale"
    assert registry.get("2").bio == "New bio"


def test_update_unknown_candidate(registry):
    with pytest.raises(CandidateNotFound):
        registry.update("99", CandidateUpdate(name="Nobody"))


def test_empty_update_is_a_no_op(registry):
    assert registry.update("1", CandidateUpdate()) == registry.get("1")


def test_votes_cannot_be_edited():
    with pytest.raises(ValidationError):
        CandidateUpdate(votes=100)
    with pytest.raises(ValidationError):
        CandidateUpdate(id="7")


def test_votes_are_never_stored_on_candidates(registry, service, make_voter):
    service.cast_vote(make_voter().id, "1")

    doc = registry.collection.find_one({"_id": "1"})

    assert "votes" not in doc


def test_reseeding_keeps_admin_edits(registry, seed_candidates):
    registry.update("3", CandidateUpdate(name="Rajesh K."))

    registry.seed(seed_candidates)

    assert registry.get("3").name == "Rajesh K."
    assert len(registry.list()) == len(seed_candidates)
