"""
Unit tests for the deterministic scoring engine.
"""

import itertools
import unittest
from unittest.mock import patch

from match_engine import CandidateProfile, JobRequirements, ScoringConfig
from match_engine import scoring_engine
from match_engine.scoring_engine import (
    calculate_base_score,
    calculate_education_multiplier,
    calculate_experience_multiplier,
    calculate_match_score,
    explain_match_score,
    finalize_score,
    is_experience_bypassed,
    round_half_up,
    split_skills,
)


# Candidate shared by the reference scenarios
BASE_PROFILE = CandidateProfile(
    skill_bank=["React", "TypeScript", "Node"],
    education_level=2,
    current_years_experience=1,
)


class TestReferenceScenarios(unittest.TestCase):
    """Known postings scored against the same candidate."""

    def test_perfect_match_entry_level(self):
        """100% overlap with the entry boost is capped at 100."""
        job = JobRequirements(
            tech_stack=["React", "TypeScript"],
            min_years_experience=0,
            required_education_level=2,
            is_entry_level=True,
        )
        self.assertEqual(calculate_match_score(job, BASE_PROFILE), 100)

    def test_senior_role_heavy_penalty(self):
        """A 4-year gap on a senior role applies the 0.3 multiplier."""
        job = JobRequirements(
            tech_stack=["React", "Node"],
            min_years_experience=5,
            required_education_level=2,
            is_entry_level=False,
        )
        self.assertEqual(calculate_match_score(job, BASE_PROFILE), 30)

    def test_education_penalty(self):
        """A master's requirement halves a bachelor's candidate's score."""
        job = JobRequirements(
            tech_stack=["React"],
            min_years_experience=1,
            required_education_level=3,
            is_entry_level=False,
        )
        self.assertEqual(calculate_match_score(job, BASE_PROFILE), 50)

    def test_near_miss_on_empty_stack(self):
        """Empty stack is neutral 50; a 1-year gap applies 0.8."""
        job = JobRequirements(
            tech_stack=[],
            min_years_experience=4,
            required_education_level=2,
            is_entry_level=False,
        )
        profile = CandidateProfile(skill_bank=[], education_level=2, current_years_experience=3)
        self.assertEqual(calculate_match_score(job, profile), 40)


class TestBaseScore(unittest.TestCase):
    """Stage 1: skill overlap."""

    def test_empty_stack_is_neutral(self):
        self.assertEqual(calculate_base_score([], ["Python"]), 50.0)

    def test_partial_overlap(self):
        score = calculate_base_score(["Python", "Java", "SQL"], ["python", "sql"])
        self.assertAlmostEqual(score, 66.67, places=2)

    def test_case_and_whitespace_are_ignored(self):
        self.assertEqual(calculate_base_score(["  React ", "NODE"], ["react", "node  "]), 100.0)

    def test_extra_candidate_skills_do_not_penalize(self):
        narrow = calculate_base_score(["Go"], ["Go"])
        broad = calculate_base_score(["Go"], ["Go", "Rust", "Kafka", "Terraform"])
        self.assertEqual(narrow, broad)

    def test_no_fuzzy_matching(self):
        """Near spellings are different skills."""
        self.assertEqual(calculate_base_score(["React.js"], ["React"]), 0.0)

    def test_duplicate_job_skills_count_once(self):
        self.assertEqual(calculate_base_score(["React", "react ", "Node"], ["React"]), 50.0)

    def test_blank_job_skills_are_dropped(self):
        self.assertEqual(calculate_base_score(["  ", "React"], ["React"]), 100.0)
        self.assertEqual(calculate_base_score(["", "   "], []), 50.0)

    def test_split_skills_keeps_job_spelling_and_order(self):
        matched, missing = split_skills(["TypeScript", "Go", "react"], ["React", "typescript"])
        self.assertEqual(matched, ["TypeScript", "react"])
        self.assertEqual(missing, ["Go"])

    def test_custom_neutral_base(self):
        config = ScoringConfig(neutral_base_score=60)
        self.assertEqual(calculate_base_score([], [], config), 60)


class TestEducationMultiplier(unittest.TestCase):
    """Stage 2: binary education gate."""

    def test_meets_requirement(self):
        self.assertEqual(calculate_education_multiplier(2, 2), 1.0)
        self.assertEqual(calculate_education_multiplier(2, 4), 1.0)

    def test_any_shortfall_is_the_same_penalty(self):
        self.assertEqual(calculate_education_multiplier(3, 2), 0.5)
        self.assertEqual(calculate_education_multiplier(4, 1), 0.5)

    def test_custom_shortfall_multiplier(self):
        config = ScoringConfig(education_shortfall_multiplier=0.25)
        self.assertEqual(calculate_education_multiplier(3, 2, config), 0.25)


class TestExperienceMultiplier(unittest.TestCase):
    """Stage 3: experience with the entry-level bypass."""

    def test_entry_level_flag_bypasses_any_gap(self):
        job = JobRequirements(min_years_experience=10, is_entry_level=True)
        self.assertTrue(is_experience_bypassed(job))
        self.assertEqual(calculate_experience_multiplier(job, 0), 1.0)

    def test_low_bar_bypasses_without_flag(self):
        job = JobRequirements(min_years_experience=2, is_entry_level=False)
        self.assertTrue(is_experience_bypassed(job))
        self.assertEqual(calculate_experience_multiplier(job, 0), 1.0)

    def test_meets_or_exceeds(self):
        job = JobRequirements(min_years_experience=5)
        self.assertFalse(is_experience_bypassed(job))
        self.assertEqual(calculate_experience_multiplier(job, 5), 1.0)
        self.assertEqual(calculate_experience_multiplier(job, 12), 1.0)

    def test_near_miss(self):
        job = JobRequirements(min_years_experience=5)
        self.assertEqual(calculate_experience_multiplier(job, 4), 0.8)
        self.assertEqual(calculate_experience_multiplier(job, 3), 0.8)

    def test_under_qualified(self):
        job = JobRequirements(min_years_experience=5)
        self.assertEqual(calculate_experience_multiplier(job, 2.5), 0.3)
        self.assertEqual(calculate_experience_multiplier(job, 0), 0.3)

    def test_custom_bypass_threshold(self):
        config = ScoringConfig(entry_level_max_years=0)
        job = JobRequirements(tech_stack=["React"], min_years_experience=1)
        profile = CandidateProfile(skill_bank=["React"], current_years_experience=0)
        self.assertEqual(calculate_match_score(job, profile, config), 80)


class TestRoundingAndClamp(unittest.TestCase):
    """Stage 5: round half-up, then clamp."""

    def test_round_half_up(self):
        self.assertEqual(round_half_up(2.5), 3)
        self.assertEqual(round_half_up(3.5), 4)
        self.assertEqual(round_half_up(49.4), 49)
        self.assertEqual(round_half_up(0.0), 0)

    def test_clamp_after_rounding(self):
        self.assertEqual(finalize_score(115.0), 100)
        self.assertEqual(finalize_score(99.5), 100)
        self.assertEqual(finalize_score(99.4), 99)

    def test_custom_max_score(self):
        self.assertEqual(finalize_score(95.0, ScoringConfig(max_score=90)), 90)

    def test_float_product_just_under_half_rounds_down(self):
        """50 * 1.15 is 57.49999999999999 in floating point, so the score is 57."""
        job = JobRequirements(tech_stack=[], is_entry_level=True)
        breakdown = explain_match_score(job, CandidateProfile())
        self.assertLess(breakdown.raw_score, 57.5)
        self.assertEqual(breakdown.match_score, 57)


class TestEntryLevelBoost(unittest.TestCase):
    """Stage 4: priority boost for entry-level postings."""

    def test_boost_on_partial_overlap(self):
        job = JobRequirements(tech_stack=["React", "Node", "Go"], is_entry_level=True)
        profile = CandidateProfile(skill_bank=["React", "Node"])
        # 66.67 * 1.15 = 76.67
        self.assertEqual(calculate_match_score(job, profile), 77)

    def test_no_boost_without_flag(self):
        job = JobRequirements(tech_stack=["React", "Node", "Go"], is_entry_level=False)
        profile = CandidateProfile(skill_bank=["React", "Node"])
        self.assertEqual(calculate_match_score(job, profile), 67)

    def test_boost_disabled_by_config(self):
        job = JobRequirements(tech_stack=["React", "Node", "Go"], is_entry_level=True)
        profile = CandidateProfile(skill_bank=["React", "Node"])
        self.assertEqual(calculate_match_score(job, profile, ScoringConfig(entry_level_boost=1.0)), 67)


class TestBreakdown(unittest.TestCase):
    """explain_match_score exposes every stage."""

    def test_near_miss_breakdown(self):
        job = JobRequirements(tech_stack=["Kafka", "Go"], min_years_experience=4)
        profile = CandidateProfile(skill_bank=["go"], current_years_experience=3)
        breakdown = explain_match_score(job, profile)

        self.assertEqual(breakdown.match_score, 40)
        self.assertEqual(breakdown.base_score, 50.0)
        self.assertEqual(breakdown.matched_skills, ["Go"])
        self.assertEqual(breakdown.missing_skills, ["Kafka"])
        self.assertEqual(breakdown.education_multiplier, 1.0)
        self.assertEqual(breakdown.experience_multiplier, 0.8)
        self.assertFalse(breakdown.entry_level_bypass)
        self.assertFalse(breakdown.entry_level_boost_applied)
        self.assertAlmostEqual(breakdown.raw_score, 40.0)

    def test_skills_partitioned_once(self):
        job = JobRequirements(tech_stack=["Kafka", "Go"])
        profile = CandidateProfile(skill_bank=["Go"])
        with patch.object(scoring_engine, "split_skills", wraps=split_skills) as spy:
            breakdown = explain_match_score(job, profile)
        self.assertEqual(spy.call_count, 1)
        self.assertEqual(breakdown.base_score, 50.0)

    def test_entry_level_breakdown(self):
        job = JobRequirements(tech_stack=["React"], min_years_experience=6, is_entry_level=True)
        breakdown = explain_match_score(job, BASE_PROFILE)

        self.assertTrue(breakdown.entry_level_bypass)
        self.assertTrue(breakdown.entry_level_boost_applied)
        self.assertAlmostEqual(breakdown.raw_score, 115.0)
        self.assertEqual(breakdown.match_score, 100)


class TestProperties(unittest.TestCase):
    """Bounds, determinism and monotonicity."""

    STACKS = [[], ["React"], ["React", "Go"], ["Rust", "Go", "Kafka", "SQL"]]
    SKILL_BANKS = [[], ["react"], ["React", "Go", "SQL"]]
    YEARS = [0, 1, 3, 5, 10]

    def test_score_is_always_bounded(self):
        for stack, bank, req_edu, edu, min_years, years, entry in itertools.product(
            self.STACKS, self.SKILL_BANKS, range(1, 5), range(1, 5), self.YEARS, self.YEARS, [True, False]
        ):
            job = JobRequirements(
                tech_stack=stack,
                min_years_experience=min_years,
                required_education_level=req_edu,
                is_entry_level=entry,
            )
            profile = CandidateProfile(skill_bank=bank, education_level=edu, current_years_experience=years)
            score = calculate_match_score(job, profile)
            self.assertGreaterEqual(score, 0)
            self.assertLessEqual(score, 100)
            self.assertIsInstance(score, int)

    def test_determinism(self):
        job = JobRequirements(tech_stack=["Python", "Java"], min_years_experience=4, required_education_level=3)
        profile = CandidateProfile(skill_bank=["Python"], education_level=2, current_years_experience=1)
        scores = {calculate_match_score(job, profile) for _ in range(5)}
        self.assertEqual(len(scores), 1)

    def test_bypass_dominance(self):
        for min_years in [0, 3, 8, 20]:
            job = JobRequirements(tech_stack=["React"], min_years_experience=min_years, is_entry_level=True)
            profile = CandidateProfile(skill_bank=["React"], current_years_experience=0)
            self.assertEqual(explain_match_score(job, profile).experience_multiplier, 1.0)

    def test_monotonic_in_overlap(self):
        stack = ["Rust", "Go", "Kafka", "SQL", "Docker"]
        for min_years, entry in [(0, True), (5, False), (3, False)]:
            job = JobRequirements(tech_stack=stack, min_years_experience=min_years, is_entry_level=entry)
            previous = -1
            for known in range(len(stack) + 1):
                profile = CandidateProfile(skill_bank=stack[:known] + ["Java"], current_years_experience=2)
                score = calculate_match_score(job, profile)
                self.assertGreaterEqual(score, previous)
                previous = score


if __name__ == "__main__":
    unittest.main()
