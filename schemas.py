from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class Recommendation(str, Enum):
    SHORTLIST = "Shortlist for Next Round"
    CONSIDER = "Consider with Caution"
    REJECT = "Reject"


# Result of scoring one resume against one job description
class MatchReport(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    match_score: int = Field(alias="matchScore", ge=0, le=100)
    matched_skills: List[str] = Field(default_factory=list, alias="matchedSkills", max_length=5)
    missing_skills: List[str] = Field(default_factory=list, alias="missingSkills", max_length=3)
    summary: str = Field(min_length=1)
    recommendation: Recommendation


# Job posting models
class JobIn(BaseModel):
    company: str
    title: str
    description: str
    keywords: List[str] = []
    vacancies: int = Field(default=1, ge=1)


class JobOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    company: str
    title: str
    description: str
    vacancies: int
    created_at: Optional[str] = None
    applicants: int = 0


class ApplicationOut(BaseModel):
    id: int
    job_id: int
    name: str
    email: str
    resume_file_name: Optional[str] = None
    ai_analysis: MatchReport
    analysis_source: str
    submitted_at: Optional[str] = None


class JobResults(BaseModel):
    job_id: int
    title: str
    vacancies: int
    total_applicants: int
    average_score: int
    shortlisted: int


# Direct analysis request (resume text already extracted)
class AnalyzeIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    resume_text: str = Field(default="", alias="resumeText")
    job_description: str = Field(default="", alias="jobDescription")
    keywords: List[str] = []


class GenerateJDIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    role_title: str = Field(default="", alias="roleTitle")
    company_name: str = Field(default="Your Company", alias="companyName")
    recruiter_name: Optional[str] = Field(default=None, alias="recruiterName")


class GeneratedJobDescription(BaseModel):
    title: str
    description: str
    skills: List[str] = []
