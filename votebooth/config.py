# votebooth/config.py
# Central place for settings and the seed candidate list
import copy
import json
import os
from typing import List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from votebooth.errors import ConfigError
from votebooth.models.candidate_model import Candidate

load_dotenv()

DEFAULT_CORS_ORIGINS = [
    "http://localhost:3000",  # For Create React App
    "http://localhost:5173",  # For Vite
]

# Candidates contesting the current election. Ids are stable and never reused.
DEFAULT_CANDIDATES = [
    {
        "id": "1",
        "name": "Aditya Chavan",
        "party": "Congress",
        "position": "Chief Minister",
        "bio": "Experienced leader with a vision for the future.",
        "imageUrl": "/Aditya.png",
        "age": 45,
        "education": "Ph.D in Political Science",
        "experience": "Former State Minister (2015-2020)",
        "manifesto": "Economic reforms, healthcare accessibility, and education improvements.",
        "color": "#1a365d",
    },
    {
        "id": "2",
        "name": "Bhagavat Dhawale",
        "party": "Shiv Sena",
        "position": "Chief Minister",
        "bio": "Dedicated to serving the community and making positive change.",
        "imageUrl": "/Bhagavat.png",
        "age": 38,
        "education": "MBA, Public Administration",
        "experience": "Social Activist, City Council Member (2018-2022)",
        "manifesto": "Environmental protection, women's rights, and rural development.",
        "color": "#ff9933",
    },
    {
        "id": "3",
        "name": "Rajesh Kumar",
        "party": "Party C",
        "position": "President",
        "bio": "Bringing fresh ideas and innovative solutions.",
        "imageUrl": "https://randomuser.me/api/portraits/men/3.jpg",
        "age": 52,
        "education": "Law Degree",
        "experience": "Senior Advocate, Member of Parliament (2010-2020)",
        "manifesto": "Judicial reforms, infrastructure development, and farmers' welfare.",
        "color": "#138808",
    },
    {
        "id": "4",
        "name": "Sakshi Karale",
        "party": "Aam Aadmi Party",
        "position": "Chief Minister",
        "bio": "Focused on economic growth and technological advancement.",
        "imageUrl": "/Sakshi.png",
        "age": 41,
        "education": "Masters in Economics",
        "experience": "Financial Advisor, District Chairperson (2016-2022)",
        "manifesto": "Economic growth, youth employment, and technological advancement.",
        "color": "#9333ea",
    },
]


class Settings(BaseModel):
    mongo_uri: str = "mongodb://127.0.0.1:27017"
    mongo_db: str = "voting-app"
    mongo_timeout_ms: int = 5000

    # In production, use secure, environment-variable-based secrets
    secret_key: str = "a_very_secret_key_for_dev_only"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 60

    candidates_file: Optional[str] = None
    cors_origins: List[str] = DEFAULT_CORS_ORIGINS
    log_level: str = "INFO"


def get_settings() -> Settings:
    """Build settings from the environment (``.env`` is loaded at import time)."""
    values = {
        "mongo_uri": os.getenv("MONGO_URI"),
        "mongo_db": os.getenv("MONGO_DB"),
        "mongo_timeout_ms": os.getenv("MONGO_TIMEOUT_MS"),
        "secret_key": os.getenv("SECRET_KEY"),
        "jwt_algorithm": os.getenv("JWT_ALGORITHM"),
        "access_token_expire_minutes": os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES"),
        "candidates_file": os.getenv("CANDIDATES_FILE"),
        "log_level": os.getenv("LOG_LEVEL"),
    }
    origins = os.getenv("CORS_ORIGINS")
    if origins:
        values["cors_origins"] = [o.strip() for o in origins.split(",") if o.strip()]
    try:
        return Settings(**{k: v for k, v in values.items() if v not in (None, "")})
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e


def load_seed_candidates(settings: Settings) -> List[Candidate]:
    """
    Load the candidate list the registry is seeded with.

    Reads ``settings.candidates_file`` (a JSON list) when set, otherwise a
    copy of DEFAULT_CANDIDATES. A ``votes`` key in the input is ignored.

    Raises:
        ConfigError: unreadable file, malformed entries or duplicate ids.
    """
    if settings.candidates_file:
        try:
            with open(settings.candidates_file, "r", encoding="utf-8") as f:
                raw = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Could not read candidates file {settings.candidates_file}: {e}") from e
    else:
        raw = copy.deepcopy(DEFAULT_CANDIDATES)

    if not isinstance(raw, list) or not raw:
        raise ConfigError("Candidate configuration must be a non-empty list")

    try:
        candidates = [Candidate.model_validate(item) for item in raw]
    except ValidationError as e:
        raise ConfigError(f"Invalid candidate entry: {e}") from e

    seen = set()
    for candidate in candidates:
        if candidate.id in seen:
            raise ConfigError(f"Duplicate candidate id: {candidate.id}")
        seen.add(candidate.id)
    return candidates
