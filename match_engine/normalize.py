"""
Input normalization helpers.

The engine only folds case and surrounding whitespace when comparing skills.
Collapsing synonyms ("React.js" vs "ReactJS") is the upstream parser's job.
The education, years and entry-level helpers below are for those parsers,
so that they emit records the engine can consume.
"""

import math
import re
from typing import Iterable, List, Optional, Set, Union

from .config import (
    EDUCATION_ALIASES,
    ENTRY_LEVEL_KEYWORDS,
    MAX_EDUCATION_LEVEL,
    MIN_EDUCATION_LEVEL,
    ScoringConfig,
    DEFAULT_CONFIG,
)

YEARS_PATTERN = re.compile(r"(\d+(?:\.\d+)?)\s*\+?\s*(?:years|year|yrs|yr|yoe)\b", re.IGNORECASE)
EDUCATION_PATTERN = re.compile(
    r"(?<![a-z])(ph\.?\s?d|doctorate|doctoral|master's|masters?|mba|msc|m\.s|ms|bachelor's|bachelors?|bsc|b\.s|bs|b\.a|ba|high\s*school|ged)(?![a-z])",
    re.IGNORECASE,
)


def normalize_skill(skill: str) -> str:
    """Fold a skill token to its comparison form (trimmed, lower case)."""
    return skill.strip().lower()


def normalize_skill_set(skills: Optional[Iterable[str]]) -> Set[str]:
    """Normalize a skill collection to a set, dropping blank entries."""
    if not skills:
        return set()
    normalized = (normalize_skill(s) for s in skills if isinstance(s, str))
    return {s for s in normalized if s}


def education_level_from_text(text: str) -> Optional[int]:
    """
    Map a free-text degree name to the education ordinal.

    Returns None when nothing recognisable is found.

    Example:
        >>> education_level_from_text("Master's degree in CS")
        3
    """
    if not text:
        return None

    key = text.strip().lower()
    if key in EDUCATION_ALIASES:
        return EDUCATION_ALIASES[key]

    # Highest degree mentioned wins ("BS or MS" requires at most MS to satisfy)
    levels = []
    for match in EDUCATION_PATTERN.finditer(text):
        token = re.sub(r"\s+", " ", match.group(1).lower())
        level = EDUCATION_ALIASES.get(token) or EDUCATION_ALIASES.get(token.rstrip("."))
        if level is None:
            if token.startswith("ph") or token.startswith("doctor"):
                level = 4
            elif token.startswith("m"):
                level = 3
            elif token.startswith("b"):
                level = 2
            else:
                level = 1
        levels.append(level)

    return max(levels) if levels else None


def coerce_education_level(value: Union[int, float, str, None]) -> Optional[int]:
    """
    Coerce an education value from an upstream record to the ordinal.

    Integers, integral floats and numeric strings ("3", "2.0") pass through;
    degree names are mapped with education_level_from_text. Range checking
    is left to the models.
    """
    if value is None:
        return None
    if isinstance(value, bool):
        raise ValueError("education level must be a number or degree name, not a boolean")
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            return None
        try:
            value = float(stripped)
        except ValueError:
            level = education_level_from_text(stripped)
            if level is None:
                raise ValueError(f"unrecognised education level: {value!r}")
            return level
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        if not math.isfinite(value):
            raise ValueError(f"education level must be a finite number, got {value}")
        if not value.is_integer():
            raise ValueError(f"education level must be a whole number, got {value}")
        return int(value)
    raise ValueError(f"unsupported education level type: {type(value).__name__}")


def years_from_text(text: str) -> Optional[float]:
    """
    Pull the first "N years" / "N+ yrs" / "N YoE" figure out of posting text.

    Example:
        >>> years_from_text("Requires 3+ years of Python")
        3.0
    """
    if not text:
        return None
    match = YEARS_PATTERN.search(text)
    if not match:
        return None
    return float(match.group(1))


def is_entry_level_posting(
    title: str = "",
    min_years_experience: Optional[float] = None,
    tags: Optional[Iterable[str]] = None,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> bool:
    """
    Decide the is_entry_level flag for a parsed posting.

    A posting is entry-level when its title or tags say new-grad, entry-level
    or junior, or when the stated minimum experience is at most
    config.entry_level_max_years (0, 1 or 2 years by default).
    """
    if min_years_experience is not None and 0 <= min_years_experience <= config.entry_level_max_years:
        return True

    haystack = " ".join([title or ""] + list(tags or [])).lower()
    for keyword in ENTRY_LEVEL_KEYWORDS:
        if re.search(rf"\b{re.escape(keyword)}\b", haystack):
            return True

    return False


def is_valid_education_level(level: int) -> bool:
    """True when level lies on the 1..4 ordinal scale."""
    return MIN_EDUCATION_LEVEL <= level <= MAX_EDUCATION_LEVEL


def dedupe_skills(skills: Iterable[str]) -> List[str]:
    """Drop repeated skills (case-insensitive), keeping first spelling and order."""
    seen = set()
    result = []
    for skill in skills:
        key = normalize_skill(skill)
        if key and key not in seen:
            seen.add(key)
            result.append(skill.strip())
    return result
