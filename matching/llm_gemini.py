import json
import logging
import math
import re
from typing import Any, Dict, List, Optional

import requests
from pydantic import ValidationError

from config import Settings, get_settings
from errors import GatewayTimeout, RemoteError, ResponseParseError
from schemas import GeneratedJobDescription, MatchReport, Recommendation
from .keywords import dedupe
from .prompts import (
    ANALYSIS_TEMPLATE,
    FALLBACK_JD_SKILLS,
    FALLBACK_JD_TEMPLATE,
    JD_SYSTEM_TEMPLATE,
    JD_USER_TEMPLATE,
)

logger = logging.getLogger(__name__)

GEMINI_API_URL = "https://generativelanguage.googleapis.com/v1beta/models/{model}:generateContent"

ANALYSIS_CONFIG = {
    "temperature": 0.3,
    "topK": 40,
    "topP": 0.95,
    "maxOutputTokens": 1024,
}
JD_CONFIG = {"temperature": 0.6}

_FENCE_RE = re.compile(r"^```[a-zA-Z]*\s*(.*?)\s*```$", re.DOTALL)


def _first_json_object(text: str) -> Dict[str, Any]:
    text = (text or "").strip()
    fence = _FENCE_RE.match(text)
    if fence:
        text = fence.group(1)
    start = text.find("{")
    if start < 0:
        raise ResponseParseError("No JSON object found in model reply")
    try:
        obj, _ = json.JSONDecoder().raw_decode(text, start)
    except json.JSONDecodeError as e:
        raise ResponseParseError(f"Malformed JSON in model reply: {e}") from e
    if not isinstance(obj, dict):
        raise ResponseParseError("Model reply JSON is not an object")
    return obj


def _str_list(value: Any, limit: int) -> List[str]:
    items = value if isinstance(value, list) else []
    cleaned = [str(s).strip() for s in items]
    return dedupe(s for s in cleaned if s)[:limit]


def parse_match_report(raw_text: str) -> MatchReport:
    """
    Turn a model reply into a MatchReport.

    Raises ResponseParseError when the reply has no JSON object or the object
    does not fit the report schema.
    """
    data = _first_json_object(raw_text)

    score = data.get("matchScore")
    if isinstance(score, bool) or not isinstance(score, (int, float)) or not math.isfinite(score):
        raise ResponseParseError(f"matchScore is not a number: {score!r}")
    score = max(0, min(100, int(round(score))))

    try:
        recommendation = Recommendation(str(data.get("recommendation", "")).strip())
    except ValueError as e:
        raise ResponseParseError(f"Unknown recommendation: {data.get('recommendation')!r}") from e

    matched = _str_list(data.get("matchedSkills"), 5)
    matched_keys = {m.lower() for m in matched}
    missing = [s for s in _str_list(data.get("missingSkills"), 3 + len(matched))
               if s.lower() not in matched_keys][:3]

    try:
        return MatchReport(
            match_score=score,
            matched_skills=matched,
            missing_skills=missing,
            summary=str(data.get("summary") or "").strip(),
            recommendation=recommendation,
        )
    except ValidationError as e:
        raise ResponseParseError(f"Invalid response structure: {e}") from e


def fallback_job_description(role_title: str, company_name: str = "Your Company") -> GeneratedJobDescription:
    return GeneratedJobDescription(
        title=role_title,
        description=FALLBACK_JD_TEMPLATE.format(role=role_title, company=company_name),
        skills=list(FALLBACK_JD_SKILLS),
    )


def parse_generated_jd(raw_text: str) -> Optional[GeneratedJobDescription]:
    """Generated JD from a model reply, or None when the reply is unusable."""
    try:
        data = _first_json_object(raw_text)
    except ResponseParseError:
        return None
    if not data.get("description"):
        return None
    try:
        return GeneratedJobDescription(
            title=str(data.get("title") or "").strip(),
            description=str(data["description"]),
            skills=_str_list(data.get("skills"), 15),
        )
    except ValidationError:
        return None


class GeminiGateway:
    """Remote resume scoring and JD generation through the Gemini REST API."""

    def __init__(self, api_key: Optional[str], model_name: str = "gemini-1.5-pro",
                 jd_model_name: str = "gemini-1.5-flash", timeout: float = 30.0,
                 api_url: str = GEMINI_API_URL):
        self.api_key = api_key
        self.model_name = model_name
        self.jd_model_name = jd_model_name
        self.timeout = timeout
        self.api_url = api_url

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "GeminiGateway":
        settings = settings or get_settings()
        return cls(
            api_key=settings.gemini_api_key,
            model_name=settings.gemini_model,
            jd_model_name=settings.gemini_jd_model,
            timeout=settings.llm_timeout,
        )

    def _generate(self, prompts: List[str], generation_config: Dict[str, Any], model: str) -> str:
        if not self.api_key:
            raise RemoteError("GEMINI_API_KEY not configured")

        payload = {
            "contents": [{"role": "user", "parts": [{"text": p}]} for p in prompts],
            "generationConfig": generation_config,
        }
        logger.info("Making request to Gemini API (%s)...", model)
        try:
            response = requests.post(
                self.api_url.format(model=model),
                params={"key": self.api_key},
                json=payload,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            raise GatewayTimeout(f"Gemini API timed out after {self.timeout}s") from e
        except requests.RequestException as e:
            raise RemoteError(f"Gemini API request failed: {e}") from e

        if not response.ok:
            logger.error("Gemini API error response: %s", response.text[:500])
            raise RemoteError(f"Gemini API error: {response.status_code}")

        try:
            data = response.json()
            return data["candidates"][0]["content"]["parts"][0]["text"]
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise RemoteError("Unexpected Gemini response envelope") from e

    def score(self, resume_text: str, job_description: str) -> MatchReport:
        """Ask the model to score a resume; raises RemoteServiceUnavailable subclasses."""
        prompt = ANALYSIS_TEMPLATE.format(resume=resume_text, jd=job_description)
        text = self._generate([prompt], ANALYSIS_CONFIG, self.model_name)
        return parse_match_report(text)

    def generate_job_description(self, role_title: str, company_name: str = "Your Company",
                                 recruiter_name: Optional[str] = None) -> GeneratedJobDescription:
        system_prompt = JD_SYSTEM_TEMPLATE.format(company=company_name)
        user_prompt = JD_USER_TEMPLATE.format(
            role=role_title, company=company_name, recruiter=recruiter_name or "Recruiter"
        )
        text = self._generate([system_prompt, user_prompt], JD_CONFIG, self.jd_model_name)
        parsed = parse_generated_jd(text)
        if parsed is None:
            logger.warning("Unusable JD reply for %r; using template", role_title)
            return fallback_job_description(role_title, company_name)
        if not parsed.title:
            return parsed.model_copy(update={"title": role_title})
        return parsed
