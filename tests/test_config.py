import json

import pytest

from votebooth.config import DEFAULT_CANDIDATES, Settings, get_settings, load_seed_candidates
from votebooth.errors import ConfigError


def test_default_seed_has_four_candidates():
    candidates = load_seed_candidates(Settings())

    assert [c.id for c in candidates] == ["1", "2", "3", "4"]


def test_default_seed_is_a_copy():
    candidates = load_seed_candidates(Settings())
    candidates[0].name = "Changed"

    assert DEFAULT_CANDIDATES[0]["name"] == "Aditya Chavan"
    assert load_seed_candidates(Settings())[0].name == "Aditya Chavan"


def test_seed_from_file_ignores_votes(tmp_path):
    path = tmp_path / "candidates.json"
    path.write_text(json.dumps([
        {"id": "a", "name": "A", "party": "P", "position": "Mayor", "bio": "b", "imageUrl": "/a.png", "votes": 12},
    ]))

    candidates = load_seed_candidates(Settings(candidates_file=str(path)))

    assert len(candidates) == 1
    assert "votes" not in candidates[0].model_dump()


def test_duplicate_ids_rejected(tmp_path):
    entry = {"id": "a", "name": "A", "party": "P", "position": "Mayor", "bio": "b", "imageUrl": "/a.png"}
    path = tmp_path / "candidates.json"
    path.write_text(json.dumps([entry, entry]))

    with pytest.raises(ConfigError, match="Duplicate"):
        load_seed_candidates(Settings(candidates_file=str(path)))


@pytest.mark.parametrize("content", ["not json", "{}", "[]", '[{"id": "a"}]'])
def test_bad_candidate_files(tmp_path, content):
    path = tmp_path / "candidates.json"
    path.write_text(content)

    with pytest.raises(ConfigError):
        load_seed_candidates(Settings(candidates_file=str(path)))


def test_missing_candidate_file(tmp_path):
    with pytest.raises(ConfigError):
        load_seed_candidates(Settings(candidates_file=str(tmp_path / "missing.json")))


def test_settings_from_environment(monkeypatch):
    monkeypatch.setenv("MONGO_URI", "mongodb://db:27017")
    monkeypatch.setenv("MONGO_DB", "election")
    monkeypatch.setenv("MONGO_TIMEOUT_MS", "250")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

    settings = get_settings()

    assert settings.mongo_uri == "mongodb://db:27017"
    assert settings.mongo_db == "election"
    assert settings.mongo_timeout_ms == 250
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_invalid_setting_raises_config_error(monkeypatch):
    monkeypatch.setenv("MONGO_TIMEOUT_MS", "soon")

    with pytest.raises(ConfigError):
        get_settings()
