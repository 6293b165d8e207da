"""
Deterministic Scoring Engine

All scoring functions are deterministic - same inputs produce same outputs.
No AI/LLM, no I/O and no shared state is used in this module.

Score = BaseSkillOverlap x EduMultiplier x YoEMultiplier x EntryBoost,
rounded half-up and capped at config.max_score. Stages run in that order.
"""

import logging
import math
from typing import Iterable, List, Optional, Tuple

from .config import DEFAULT_CONFIG, ScoringConfig
from .models import CandidateProfile, JobRequirements, ScoreBreakdown
from .normalize import dedupe_skills, normalize_skill, normalize_skill_set

logger = logging.getLogger(__name__)


def split_skills(
    job_skills: Iterable[str],
    candidate_skills: Iterable[str],
) -> Tuple[List[str], List[str]]:
    """
    Partition the job's skills into (matched, missing) against the candidate.

    Matching is exact after trimming and lower-casing. Job skills that repeat
    after normalization count once; spelling and order follow the job.
    """
    candidate_set = normalize_skill_set(candidate_skills)
    matched, missing = [], []
    for skill in dedupe_skills(s for s in job_skills if isinstance(s, str)):
        if normalize_skill(skill) in candidate_set:
            matched.append(skill)
        else:
            missing.append(skill)
    return matched, missing


def calculate_base_score(
    job_skills: Iterable[str],
    candidate_skills: Iterable[str],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> float:
    """
    Calculate skill overlap score (0-100).

    Formula:
    - No job skills listed: config.neutral_base_score (50). Missing data is
      not a mismatch.
    - Otherwise: (matched / required) * 100. Extra candidate skills are ignored.
    """
    matched, missing = split_skills(job_skills, candidate_skills)
    return overlap_score(matched, missing, config)


def overlap_score(
    matched: List[str],
    missing: List[str],
    config: ScoringConfig = DEFAULT_CONFIG,
) -> float:
    """Base score from an already partitioned job skill list."""
    total = len(matched) + len(missing)

    if total == 0:
        logger.debug(f"No job skills listed, base score = {config.neutral_base_score}")
        return config.neutral_base_score

    score = (len(matched) / total) * 100
    logger.debug(f"Skills: {len(matched)}/{total} = {score:.2f}%")
    return score


def calculate_education_multiplier(
    required_level: int,
    candidate_level: int,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> float:
    """
    Binary education gate.

    1.0 when the candidate meets the required level, otherwise the fixed
    shortfall multiplier regardless of how many levels short.
    """
    if candidate_level >= required_level:
        return 1.0
    logger.debug(
        f"Education: {candidate_level} < {required_level}, "
        f"multiplier = {config.education_shortfall_multiplier}"
    )
    return config.education_shortfall_multiplier


def is_experience_bypassed(
    job: JobRequirements,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> bool:
    """Entry-level bypass: entry-level or low-bar postings never look at candidate YoE."""
    return job.is_entry_level or job.min_years_experience <= config.entry_level_max_years


def calculate_experience_multiplier(
    job: JobRequirements,
    candidate_years: float,
    config: ScoringConfig = DEFAULT_CONFIG,
) -> float:
    """
    Experience multiplier with the entry-level bypass.

    - Bypass (entry-level, or min years <= 2): 1.0
    - Candidate meets or exceeds the bar: 1.0
    - Shortfall <= 2 years: 0.8
    - Larger shortfall: 0.3
    """
    if is_experience_bypassed(job, config):
        logger.debug("Experience: entry-level bypass, multiplier = 1.0")
        return 1.0

    required_years = job.min_years_experience
    if candidate_years >= required_years:
        return 1.0

    gap = required_years - candidate_years
    if gap <= config.near_miss_max_gap_years:
        multiplier = config.near_miss_multiplier
    else:
        multiplier = config.under_qualified_multiplier

    logger.debug(f"Experience: {candidate_years} < {required_years} years (gap {gap}), multiplier = {multiplier}")
    return multiplier


def round_half_up(value: float) -> int:
    """
    Round to the nearest integer, .5 going up (not banker's rounding).

    Works on the float as computed, so products that land just under .5
    round down: an empty stack on an entry-level posting gives
    50 * 1.15 == 57.49999999999999 and scores 57, not 58,
    the same as JavaScript Math.round on that value.
    """
    return int(math.floor(value + 0.5))


def finalize_score(raw_score: float, config: ScoringConfig = DEFAULT_CONFIG) -> int:
    """Round first, then clamp into [0, config.max_score]."""
    return max(0, min(round_half_up(raw_score), config.max_score))


def explain_match_score(
    job: JobRequirements,
    profile: CandidateProfile,
    config: Optional[ScoringConfig] = None,
) -> ScoreBreakdown:
    """
    Run the full pipeline and return every intermediate value.

    Args:
        job: Parsed job requirements
        profile: Candidate profile
        config: Scoring tunables (defaults to DEFAULT_CONFIG)

    Returns:
        ScoreBreakdown with match_score in [0, 100]
    """
    config = config or DEFAULT_CONFIG

    # 1. Skill overlap
    matched, missing = split_skills(job.tech_stack, profile.skill_bank)
    base_score = overlap_score(matched, missing, config)

    # 2. Education gate
    education_multiplier = calculate_education_multiplier(
        job.required_education_level, profile.education_level, config
    )

    # 3. Experience, bypass checked before any candidate comparison
    bypass = is_experience_bypassed(job, config)
    experience_multiplier = calculate_experience_multiplier(
        job, profile.current_years_experience, config
    )

    raw_score = base_score * education_multiplier * experience_multiplier

    # 4. Entry-level priority boost
    if job.is_entry_level:
        raw_score *= config.entry_level_boost

    # 5. Round, then clamp
    match_score = finalize_score(raw_score, config)

    logger.debug(
        f"Match score: base={base_score:.2f} edu={education_multiplier} "
        f"yoe={experience_multiplier} entry={job.is_entry_level} "
        f"raw={raw_score:.2f} final={match_score}"
    )

    return ScoreBreakdown(
        match_score=match_score,
        base_score=base_score,
        matched_skills=matched,
        missing_skills=missing,
        education_multiplier=education_multiplier,
        experience_multiplier=experience_multiplier,
        entry_level_bypass=bypass,
        entry_level_boost_applied=job.is_entry_level,
        raw_score=raw_score,
    )


def calculate_match_score(
    job: JobRequirements,
    profile: CandidateProfile,
    config: Optional[ScoringConfig] = None,
) -> int:
    """
    Compatibility score (0-100) of a profile against a job.

    Example:
        >>> job = JobRequirements(tech_stack=["React", "Node"], min_years_experience=5)
        >>> profile = CandidateProfile(skill_bank=["react", "node"], current_years_experience=1)
        >>> calculate_match_score(job, profile)
        30
    """
    return explain_match_score(job, profile, config).match_score
