import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from errors import RemoteServiceUnavailable
from schemas import MatchReport
from .llm_gemini import GeminiGateway
from .scorer import fallback_match_report

logger = logging.getLogger(__name__)

SOURCE_LLM = "llm"
SOURCE_FALLBACK = "fallback"


@dataclass(frozen=True)
class AnalysisOutcome:
    report: MatchReport
    source: str


def analyze_resume(resume_text: str, job_description: str,
                   keywords: Optional[Sequence[str]] = None,
                   gateway: Optional[GeminiGateway] = None) -> AnalysisOutcome:
    """Score with the remote model, falling back to the local keyword scorer."""
    gateway = gateway or GeminiGateway.from_settings()
    try:
        report = gateway.score(resume_text, job_description)
        return AnalysisOutcome(report=report, source=SOURCE_LLM)
    except RemoteServiceUnavailable as e:
        logger.warning("Remote analysis unavailable (%s); using fallback analyzer", e)
    return AnalysisOutcome(
        report=fallback_match_report(resume_text, job_description, keywords),
        source=SOURCE_FALLBACK,
    )
