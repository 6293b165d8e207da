"""
Main Matcher Module

Entry points for callers that hold raw records (store rows, parser output):
1. Build validated JobRequirements / CandidateProfile models
2. Calculate the deterministic match score
3. Return the score with its breakdown, rank many postings, or produce
   re-scoring updates for persistence
"""

import logging
from typing import Any, Dict, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from .config import ScoringConfig
from .models import CandidateProfile, JobRequirements
from .scoring_engine import explain_match_score

logger = logging.getLogger(__name__)

JobInput = Union[JobRequirements, Mapping[str, Any]]
ProfileInput = Union[CandidateProfile, Mapping[str, Any]]


class MatchingError(ValueError):
    """A job or profile record could not be turned into scoring input."""


def build_job_requirements(job_data: JobInput) -> JobRequirements:
    """
    Build JobRequirements from a model or a raw record.

    Stored job rows keep the parsed fields under "metadata"; those are used
    when present, otherwise the record itself is read.
    """
    if isinstance(job_data, JobRequirements):
        return job_data
    if not isinstance(job_data, Mapping):
        raise MatchingError(f"Invalid job record: expected a mapping, got {type(job_data).__name__}")

    record = job_data
    metadata = job_data.get("metadata")
    if isinstance(metadata, Mapping):
        record = metadata

    try:
        return JobRequirements.model_validate(dict(record))
    except ValidationError as e:
        raise MatchingError(f"Invalid job record: {e}") from e


def build_candidate_profile(profile_data: ProfileInput) -> CandidateProfile:
    """Build CandidateProfile from a model or a raw record."""
    if isinstance(profile_data, CandidateProfile):
        return profile_data
    if not isinstance(profile_data, Mapping):
        raise MatchingError(f"Invalid candidate profile: expected a mapping, got {type(profile_data).__name__}")

    try:
        return CandidateProfile.model_validate(dict(profile_data))
    except ValidationError as e:
        raise MatchingError(f"Invalid candidate profile: {e}") from e


def match_job(
    job_data: JobInput,
    profile_data: ProfileInput,
    config: Optional[ScoringConfig] = None,
    return_breakdown: bool = True,
) -> Dict[str, Any]:
    """
    Score one job posting against a candidate profile.

    Args:
        job_data: JobRequirements, or a raw job record
        profile_data: CandidateProfile, or a raw profile record
        config: Optional scoring tunables (defaults to DEFAULT_CONFIG)
        return_breakdown: Whether to include the per-stage breakdown

    Returns:
        {
            "match_score": int (0-100),
            "breakdown": {...}  # Optional, if return_breakdown=True
        }

    Raises:
        MatchingError: If either record fails validation

    Example:
        >>> result = match_job({"tech_stack": ["React"], "req_edu": 3}, {"skill_bank": ["react"]})
        >>> result["match_score"]
        50
    """
    try:
        job = build_job_requirements(job_data)
        profile = build_candidate_profile(profile_data)
    except MatchingError as e:
        logger.error(f"Matching failed: {e}", exc_info=True)
        raise

    breakdown = explain_match_score(job, profile, config)
    result: Dict[str, Any] = {"match_score": breakdown.match_score}
    if return_breakdown:
        result["breakdown"] = breakdown.model_dump()
    return result


def match_multiple_jobs(
    jobs: Iterable[JobInput],
    profile_data: ProfileInput,
    config: Optional[ScoringConfig] = None,
    return_breakdown: bool = False,
) -> List[Dict[str, Any]]:
    """
    Score a profile against many postings and rank them.

    A posting that fails validation is reported with match_score 0 and an
    "error" entry instead of aborting the batch. The profile itself must be
    valid.

    Returns:
        List of results, highest match_score first. Equal scores keep their
        input order. Each result carries "job_index" (0-based input position).

    Example:
        >>> results = match_multiple_jobs([job1, job2, job3], profile)
        >>> for i, result in enumerate(results, 1):
        >>>     print(f"#{i}: {result['match_score']}")
    """
    profile = build_candidate_profile(profile_data)
    jobs = list(jobs)
    logger.info(f"Matching profile against {len(jobs)} jobs")

    results = []
    for index, job_data in enumerate(jobs):
        try:
            result = match_job(job_data, profile, config, return_breakdown)
        except MatchingError as e:
            logger.error(f"Failed to match job {index + 1}/{len(jobs)}: {e}")
            result = {"match_score": 0, "error": str(e)}
        result["job_index"] = index
        results.append(result)

    # sort() is stable, so ties stay in input order
    results.sort(key=lambda r: r["match_score"], reverse=True)

    if results:
        logger.info(f"Completed matching {len(results)} jobs, top match: {results[0]['match_score']}")
    return results


def rescore_jobs(
    jobs: Iterable[Mapping[str, Any]],
    profile_data: ProfileInput,
    config: Optional[ScoringConfig] = None,
    only_unscored: bool = True,
) -> List[Dict[str, Any]]:
    """
    Batch re-scoring sweep over stored job rows.

    Each row needs an "id"; parsed fields are read from "metadata" when
    present. With only_unscored, rows whose match_score is already non-zero
    are skipped. Rows that fail validation are logged and skipped.

    Returns:
        [{"id": ..., "match_score": int}, ...] for the caller to persist
    """
    profile = build_candidate_profile(profile_data)

    updates = []
    skipped = 0
    for row in jobs:
        if not isinstance(row, Mapping):
            logger.error(f"Skipping job row of type {type(row).__name__}: expected a mapping")
            continue
        if only_unscored and row.get("match_score"):
            skipped += 1
            continue
        try:
            job = build_job_requirements(row)
        except MatchingError as e:
            logger.error(f"Skipping job {row.get('id')}: {e}")
            continue
        updates.append({
            "id": row.get("id"),
            "match_score": explain_match_score(job, profile, config).match_score,
        })

    logger.info(f"Rescored {len(updates)} jobs ({skipped} already scored)")
    return updates
