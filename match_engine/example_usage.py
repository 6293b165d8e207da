"""
Example usage of the deterministic job match engine.

Run this file to see the engine in action:
    python -m match_engine.example_usage
"""

import logging

from match_engine import ScoringConfig, match_job, match_multiple_jobs, rescore_jobs

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)

# Candidate profile as stored upstream
PROFILE = {
    "skill_bank": ["React", "TypeScript", "Node"],
    "edu_level": 2,
    "current_yoe": 1,
}

# Parsed postings as stored upstream
JOBS = [
    {"id": "frontend-new-grad", "match_score": 0, "metadata": {
        "tech_stack": ["React", "TypeScript"], "min_yoe": 0, "req_edu": 2, "is_entry_level": True}},
    {"id": "senior-fullstack", "match_score": 0, "metadata": {
        "tech_stack": ["React", "Node"], "min_yoe": 5, "req_edu": 2, "is_entry_level": False}},
    {"id": "research-engineer", "match_score": 0, "metadata": {
        "tech_stack": ["React"], "min_yoe": 1, "req_edu": "Master's", "is_entry_level": False}},
    {"id": "platform-engineer", "match_score": 0, "metadata": {
        "tech_stack": [], "min_yoe": 4, "req_edu": 2, "is_entry_level": False}},
]


def example_basic_matching():
    """Example 1: Score one posting with its breakdown."""
    print("\n" + "="*80)
    print("EXAMPLE 1: Basic Matching")
    print("="*80)

    result = match_job(JOBS[0], PROFILE)
    breakdown = result["breakdown"]

    print(f"\nOverall Match: {result['match_score']}")
    print(f"  Base (skills):   {breakdown['base_score']:5.1f}")
    print(f"  Education:       x{breakdown['education_multiplier']}")
    print(f"  Experience:      x{breakdown['experience_multiplier']}"
          f"{' (entry-level bypass)' if breakdown['entry_level_bypass'] else ''}")
    print(f"  Entry boost:     {'yes' if breakdown['entry_level_boost_applied'] else 'no'}")
    print(f"  Matched skills:  {', '.join(breakdown['matched_skills']) or '-'}")
    print(f"  Missing skills:  {', '.join(breakdown['missing_skills']) or '-'}")
    print(f"{'='*80}\n")


def example_multiple_jobs():
    """Example 2: Rank every posting for the profile."""
    print("\n" + "="*80)
    print("EXAMPLE 2: Multiple Job Matching")
    print("="*80)

    results = match_multiple_jobs(JOBS, PROFILE)

    for i, result in enumerate(results, 1):
        job_id = JOBS[result["job_index"]]["id"]
        print(f"#{i} - {job_id:20} Match: {result['match_score']}")
    print(f"{'='*80}\n")


def example_alternate_config():
    """Example 3: Same postings under a stricter scoring profile."""
    print("\n" + "="*80)
    print("EXAMPLE 3: Alternate Scoring Profile")
    print("="*80)

    strict = ScoringConfig(education_shortfall_multiplier=0.25, entry_level_boost=1.0)
    for update in rescore_jobs(JOBS, PROFILE, config=strict):
        print(f"  {update['id']:20} {update['match_score']}")
    print(f"{'='*80}\n")


def main():
    """Run all examples."""
    print("\n" + "="*80)
    print("DETERMINISTIC JOB MATCH ENGINE - EXAMPLES")
    print("="*80)

    example_basic_matching()
    example_multiple_jobs()
    example_alternate_config()


if __name__ == "__main__":
    main()
