"""
Deterministic Job Match Engine

Scores a candidate profile against a parsed job posting with a fixed
four-stage rule pipeline:
1. Skill overlap (neutral 50 when the posting lists no skills)
2. Education gate
3. Experience multiplier with the entry-level bypass
4. Entry-level priority boost, then round and clamp to 0-100

Usage:
    from match_engine import calculate_match_score, JobRequirements, CandidateProfile

    job = JobRequirements(tech_stack=["React", "TypeScript"], is_entry_level=True)
    profile = CandidateProfile(skill_bank=["React", "TypeScript", "Node"])
    print(f"Match: {calculate_match_score(job, profile)}")
"""

from .config import DEFAULT_CONFIG, ScoringConfig
from .models import CandidateProfile, JobRequirements, ScoreBreakdown
from .scoring_engine import calculate_match_score, explain_match_score
from .matcher import MatchingError, match_job, match_multiple_jobs, rescore_jobs

__all__ = [
    "DEFAULT_CONFIG",
    "ScoringConfig",
    "CandidateProfile",
    "JobRequirements",
    "ScoreBreakdown",
    "calculate_match_score",
    "explain_match_score",
    "MatchingError",
    "match_job",
    "match_multiple_jobs",
    "rescore_jobs",
]
__version__ = "1.0.0"
