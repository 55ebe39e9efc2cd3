from dataclasses import dataclass
from typing import List, Optional, Sequence
import logging
import math
import re

from schemas import MatchReport, Recommendation
from .keywords import capitalize, dedupe, extract_keywords, find_terms
from .vocabulary import BUSINESS_TERMS, HR_TERMS, MARKETING_CRM_TERMS, TECHNICAL_TERMS

logger = logging.getLogger(__name__)

MAX_MATCHED = 5
MAX_MISSING = 3

TECHNICAL_MISMATCH_PENALTY = 35
BUSINESS_MISMATCH_PENALTY = 25
SENIORITY_BONUS = 5
EXPERIENCE_BONUS = 3

SENIORITY_TERMS = ("senior", "lead", "manager")
EXPERIENCE_RE = re.compile(r"\b[5-7]\s*\+?\s*(?:years?|yrs?)\b", re.IGNORECASE)


@dataclass(frozen=True)
class MatchBreakdown:
    precision: float
    recall: float
    f1: float
    base_score: int
    penalty: int
    bonus: int
    score: int
    matched: List[str]
    missing: List[str]


def recommend(score: int) -> Recommendation:
    if score >= 75:
        return Recommendation.SHORTLIST
    if score >= 50:
        return Recommendation.CONSIDER
    return Recommendation.REJECT


def strength_tier(score: int) -> str:
    if score >= 70:
        return "strong"
    if score >= 50:
        return "moderate"
    return "weak"


def _round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def _contains_any(text_lower: str, terms: Sequence[str]) -> bool:
    return any(t in text_lower for t in terms)


def score_breakdown(resume_text: str, job_description: str,
                    keywords: Optional[Sequence[str]] = None) -> MatchBreakdown:
    resume_lower = (resume_text or "").lower()
    job_text = job_description or ""

    raw = [k.strip() for k in (keywords or []) if k and k.strip()]
    if not raw:
        raw = extract_keywords(job_text)
    required = dedupe(k.lower() for k in raw)

    detected = set(find_terms(resume_lower))

    found = [k for k in required if k in resume_lower]
    missing = [k for k in required if k not in resume_lower]

    recall = len(found) / len(required) if required else 0.0
    if detected:
        precision = len(detected & set(required)) / len(detected)
    else:
        precision = 1.0 if not required else 0.0
    f1 = 2 * precision * recall / (precision + recall) if precision + recall else 0.0

    base = _round_half_up(f1 * 100)
    score = base

    # Role context comes from the job text plus any explicit keywords.
    role_lower = " ".join([job_text] + list(raw)).lower()
    job_technical = _contains_any(role_lower, TECHNICAL_TERMS)
    job_hr = _contains_any(role_lower, HR_TERMS)
    job_marketing = _contains_any(role_lower, MARKETING_CRM_TERMS)
    resume_technical = _contains_any(resume_lower, TECHNICAL_TERMS)
    resume_business = _contains_any(resume_lower, BUSINESS_TERMS)

    if job_technical and not resume_technical:
        score = max(0, score - TECHNICAL_MISMATCH_PENALTY)
    if (job_hr or job_marketing) and resume_technical and not resume_business:
        score = max(0, score - BUSINESS_MISMATCH_PENALTY)
    penalty = base - score

    bonus = 0
    if _contains_any(resume_lower, SENIORITY_TERMS):
        bonus += SENIORITY_BONUS
    if EXPERIENCE_RE.search(resume_text or ""):
        bonus += EXPERIENCE_BONUS

    final = max(0, min(100, score + bonus))

    return MatchBreakdown(
        precision=precision,
        recall=recall,
        f1=f1,
        base_score=base,
        penalty=penalty,
        bonus=bonus,
        score=final,
        matched=[capitalize(k) for k in found[:MAX_MATCHED]],
        missing=[capitalize(k) for k in missing[:MAX_MISSING]],
    )


def fallback_match_report(resume_text: str, job_description: str,
                          keywords: Optional[Sequence[str]] = None) -> MatchReport:
    """
    Deterministic match report used when remote scoring is unavailable.

    Never raises; the same inputs always give the same report.
    """
    b = score_breakdown(resume_text, job_description, keywords)
    summary = (
        f"Keyword analysis: precision {b.precision:.0%}, recall {b.recall:.0%}, "
        f"F1 {b.f1:.0%}. The candidate is a {strength_tier(b.score)} match for this role "
        f"with a score of {b.score}%."
    )
    logger.debug(
        "Fallback score %s (base %s, penalty %s, bonus %s)",
        b.score, b.base_score, b.penalty, b.bonus,
    )
    return MatchReport(
        match_score=b.score,
        matched_skills=b.matched,
        missing_skills=b.missing,
        summary=summary,
        recommendation=recommend(b.score),
    )
