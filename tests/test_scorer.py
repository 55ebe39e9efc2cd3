"""
Fallback scorer tests: precision/recall/F1, role penalties, experience
bonuses and report guarantees.
"""

import pytest

from matching.scorer import fallback_match_report, recommend, score_breakdown, strength_tier
from schemas import Recommendation


def test_full_stack_candidate_is_shortlisted():
    resume = "Experienced React and Node.js developer, 5 years experience"
    job = "Looking for React and Node.js engineer"

    b = score_breakdown(resume, job)
    assert b.recall == 1.0
    assert b.precision == 1.0
    assert b.bonus == 3

    report = fallback_match_report(resume, job)
    assert report.match_score == 100
    assert report.matched_skills == ["React", "Node.js"]
    assert report.missing_skills == []
    assert report.recommendation == Recommendation.SHORTLIST


def test_hr_resume_for_technical_role_is_rejected():
    resume = "HR generalist with recruitment and hiring experience"
    job = "Senior Software Engineer needing JavaScript and Python"

    b = score_breakdown(resume, job)
    assert b.recall == 0.0
    assert b.precision == 0.0
    assert b.score == 0

    report = fallback_match_report(resume, job)
    assert report.matched_skills == []
    assert report.missing_skills == ["Javascript", "Python", "Java"]
    assert report.recommendation == Recommendation.REJECT


def test_technical_penalty_applies_when_resume_has_no_technical_terms():
    b = score_breakdown("Market research analyst", "Data role: Python and SQL plus market research")
    assert b.base_score == 50
    assert b.penalty == 35
    assert b.score == 15


def test_business_penalty_applies_to_technical_resume_for_marketing_role():
    b = score_breakdown("Python developer with Flask", "Marketing specialist. Required Keywords: Python, SEO")
    assert b.recall == pytest.approx(1 / 3)
    assert b.precision == pytest.approx(1 / 2)
    assert b.base_score == 40
    assert b.penalty == 25
    assert b.score == 15
    assert b.matched == ["Python"]
    assert b.missing == ["Marketing", "Seo"]


def test_no_technical_penalty_when_resume_has_one_technical_term():
    b = score_breakdown("Market research analyst using Python", "Data role: Python and SQL plus market research")
    assert b.matched == ["Python", "Market research"]
    assert b.base_score == 80
    assert b.penalty == 0
    assert b.score == 80


def test_no_business_penalty_when_technical_resume_also_has_business_terms():
    b = score_breakdown("Python developer who ran SEO campaigns", "Marketing specialist. Required Keywords: Python, SEO")
    assert b.matched == ["Python", "Seo"]
    assert b.missing == ["Marketing"]
    assert b.base_score == 67
    assert b.penalty == 0
    assert b.score == 67


def test_penalty_floors_at_zero():
    b = score_breakdown("Python and Django developer", "HR Manager for recruitment and payroll")
    assert b.base_score == 0
    assert b.score == 0


def test_job_without_keywords_scores_only_bonuses():
    job = "Friendly team seeks a motivated person"
    b = score_breakdown("Python developer with Docker experience", job)
    assert b.recall == 0.0
    assert b.precision == 0.0
    assert b.score == 0

    b = score_breakdown("Senior Python developer with 6 years experience", job)
    assert b.f1 == 0.0
    assert b.bonus == 8
    assert b.score == 8


def test_empty_resume_and_empty_keywords_give_precision_one():
    b = score_breakdown("", "Friendly team seeks a motivated person")
    assert b.precision == 1.0
    assert b.recall == 0.0
    assert b.score == 0


def test_empty_resume_against_real_job_does_not_crash():
    report = fallback_match_report("", "Looking for React and Node.js engineer")
    assert report.match_score == 0
    assert report.missing_skills == ["React", "Node.js"]


def test_required_keywords_outside_vocabulary_count():
    job = "Need skills. Required Keywords: Figma, Notion, Airtable"
    b = score_breakdown("Designer fluent in Figma and Notion", job)
    assert b.matched == ["Figma", "Notion"]
    assert b.missing == ["Airtable"]
    assert b.recall == pytest.approx(2 / 3)


def test_partial_overlap_gives_moderate_score():
    report = fallback_match_report(
        "Python and Docker engineer who also knows React",
        "We need Python, Docker and AWS skills",
    )
    assert report.match_score == 67
    assert report.matched_skills == ["Python", "Docker"]
    assert report.missing_skills == ["Aws"]
    assert report.recommendation == Recommendation.CONSIDER
    assert "precision 67%" in report.summary
    assert "recall 67%" in report.summary
    assert "moderate" in report.summary


def test_explicit_keywords_override_extraction():
    b = score_breakdown("Kotlin developer", "Looking for React and Node.js engineer", keywords=["Kotlin", " "])
    assert b.matched == ["Kotlin"]
    assert b.missing == []
    assert b.recall == 1.0


@pytest.mark.parametrize("resume,bonus", [
    ("Team lead with 5+ years of Python", 8),
    ("Python developer, 7 years", 3),
    ("Python developer, 7 yrs", 3),
    ("Python developer, 15 years", 0),
    ("Python developer, 3 years", 0),
    ("Engineering manager", 5),
])
def test_experience_and_seniority_bonus(resume, bonus):
    assert score_breakdown(resume, "Python developer").bonus == bonus


def test_score_is_clamped_to_100():
    report = fallback_match_report("Senior Python developer, 6 years", "Python developer")
    assert report.match_score == 100


def test_skill_lists_are_capped_and_disjoint():
    job = "Python, Java, Ruby, PHP, Swift, Kotlin, React, Angular"
    everything = fallback_match_report(job, job)
    assert len(everything.matched_skills) == 5
    assert everything.missing_skills == []

    nothing = fallback_match_report("Accountant", job)
    assert nothing.matched_skills == []
    assert len(nothing.missing_skills) == 3

    partial = fallback_match_report("Python and Ruby", job)
    assert set(partial.matched_skills).isdisjoint(partial.missing_skills)


def test_scoring_is_deterministic():
    args = ("Python and Docker engineer", "We need Python, Docker and AWS skills")
    assert fallback_match_report(*args) == fallback_match_report(*args)


@pytest.mark.parametrize("score,expected", [
    (100, Recommendation.SHORTLIST),
    (75, Recommendation.SHORTLIST),
    (74, Recommendation.CONSIDER),
    (50, Recommendation.CONSIDER),
    (49, Recommendation.REJECT),
    (0, Recommendation.REJECT),
])
def test_recommendation_boundaries(score, expected):
    assert recommend(score) == expected


def test_strength_tiers():
    assert strength_tier(70) == "strong"
    assert strength_tier(69) == "moderate"
    assert strength_tier(50) == "moderate"
    assert strength_tier(49) == "weak"
