"""
Configuration for the deterministic job match engine.
Adjust tunables here, or build an alternate ScoringConfig and pass it in.
"""

import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

# Education ordinal scale shared by jobs and profiles
EDUCATION_LEVELS = {
    "High School": 1,
    "Bachelor": 2,
    "Master": 3,
    "PhD": 4,
}

MIN_EDUCATION_LEVEL = min(EDUCATION_LEVELS.values())
MAX_EDUCATION_LEVEL = max(EDUCATION_LEVELS.values())

# Defaults applied when upstream records leave a field unset
DEFAULT_EDUCATION_LEVEL = 2
DEFAULT_YEARS_EXPERIENCE = 0

# Free-text aliases recognised when education arrives as a string
EDUCATION_ALIASES = {
    "high school": 1,
    "highschool": 1,
    "hs": 1,
    "ged": 1,
    "diploma": 1,
    "associate": 1,
    "bachelor": 2,
    "bachelors": 2,
    "bachelor's": 2,
    "bs": 2,
    "ba": 2,
    "bsc": 2,
    "b.s.": 2,
    "b.e.": 2,
    "undergraduate": 2,
    "master": 3,
    "masters": 3,
    "master's": 3,
    "ms": 3,
    "ma": 3,
    "msc": 3,
    "m.s.": 3,
    "mba": 3,
    "graduate": 3,
    "phd": 4,
    "ph.d.": 4,
    "ph.d": 4,
    "doctorate": 4,
    "doctoral": 4,
}

# Title keywords that tag a posting as new-grad/entry-level/junior
ENTRY_LEVEL_KEYWORDS = [
    "new grad",
    "new graduate",
    "entry level",
    "entry-level",
    "early career",
    "junior",
    "jr",
    "graduate program",
    "university grad",
]

# Environment variables read by ScoringConfig.from_env()
ENV_PREFIX = "MATCH_"


class ScoringConfig(BaseModel):
    """Tunables for the four-stage scoring pipeline."""

    model_config = ConfigDict(frozen=True)

    # Stage 1: skill overlap
    neutral_base_score: float = Field(default=50.0, ge=0.0, le=100.0)

    # Stage 2: education gate
    education_shortfall_multiplier: float = Field(default=0.5, ge=0.0, le=1.0)

    # Stage 3: experience, with the entry-level bypass
    entry_level_max_years: float = Field(default=2, ge=0)
    near_miss_max_gap_years: float = Field(default=2, ge=0)
    near_miss_multiplier: float = Field(default=0.8, ge=0.0, le=1.0)
    under_qualified_multiplier: float = Field(default=0.3, ge=0.0, le=1.0)

    # Stage 4: entry-level priority boost
    entry_level_boost: float = Field(default=1.15, ge=1.0)

    # Stage 5: clamp
    max_score: int = Field(default=100, ge=0, le=100)

    @classmethod
    def from_env(cls, env_file: Optional[Path] = None) -> "ScoringConfig":
        """
        Build a config from MATCH_* environment variables.

        A .env file (cwd, or env_file when given) is loaded first without
        overriding variables already set. Unset variables keep their defaults.

        Example:
            MATCH_ENTRY_LEVEL_BOOST=1.25
            MATCH_EDUCATION_SHORTFALL_MULTIPLIER=0.6
        """
        load_dotenv(dotenv_path=env_file or Path.cwd() / ".env", override=False)

        overrides = {}
        for name in cls.model_fields:
            raw = os.getenv(f"{ENV_PREFIX}{name.upper()}")
            if raw is not None and raw.strip() != "":
                overrides[name] = raw.strip()

        return cls(**overrides)


DEFAULT_CONFIG = ScoringConfig()
