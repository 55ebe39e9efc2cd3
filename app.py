from __future__ import annotations
import logging
import os
from contextlib import asynccontextmanager
from typing import List
from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from config import configure_logging, get_settings
from errors import JobNotFound, PersistenceFailure, RemoteServiceUnavailable, UnsupportedFileFormat
from models import Base
from schemas import (
    AnalyzeIn,
    ApplicationOut,
    GenerateJDIn,
    GeneratedJobDescription,
    JobIn,
    JobOut,
    JobResults,
    MatchReport,
    Recommendation,
)
from stores import ApplicationRecord, ApplicationStore, JobRecord, JobStore
from parsers.extract import ResumeTextExtractor
from matching.analyzer import analyze_resume
from matching.keywords import append_required_keywords
from matching.llm_gemini import GeminiGateway, fallback_job_description

logger = logging.getLogger(__name__)

engine = None
Session = sessionmaker(autoflush=False, autocommit=False, future=True)
job_store = JobStore(Session)
application_store = ApplicationStore(Session)
extractor = ResumeTextExtractor()


def get_gateway() -> GeminiGateway:
    return GeminiGateway.from_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the data directory and database on startup."""
    global engine

    settings = get_settings()
    configure_logging(settings.log_level)
    os.makedirs(settings.base_dir, exist_ok=True)

    logger.info(f"Using base directory: {settings.base_dir}")
    logger.info(f"Database path: {settings.db_path}")
    engine = create_engine(f"sqlite:///{settings.db_path}", future=True)
    Session.configure(bind=engine)

    Base.metadata.create_all(engine)

    yield
    engine.dispose()
    logger.info("Application shutting down.")


app = FastAPI(title="AI Resume Screening", lifespan=lifespan)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _job_out(job: JobRecord, applicants: int = 0) -> JobOut:
    return JobOut(
        id=job.id,
        company=job.company,
        title=job.title,
        description=job.description,
        vacancies=job.vacancies,
        created_at=job.created_at.isoformat() if job.created_at else None,
        applicants=applicants,
    )


def _application_out(rec: ApplicationRecord) -> ApplicationOut:
    return ApplicationOut(
        id=rec.id,
        job_id=rec.job_id,
        name=rec.name,
        email=rec.email,
        resume_file_name=rec.resume_file_name,
        ai_analysis=rec.report,
        analysis_source=rec.source,
        submitted_at=rec.submitted_at.isoformat() if rec.submitted_at else None,
    )


def _get_job_or_404(job_id: int) -> JobRecord:
    try:
        return job_store.get(job_id)
    except JobNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))


# -------------------------------------------------------------------
# Routes
# -------------------------------------------------------------------
@app.post("/jobs", response_model=JobOut)
def create_job(job: JobIn):
    """Post a job; keywords are appended to the description for analysis."""
    if not job.company.strip() or not job.title.strip() or not job.description.strip():
        raise HTTPException(status_code=400, detail="company, title and description are required.")

    description = append_required_keywords(job.description.strip(), job.keywords)
    try:
        rec = job_store.create(job.company.strip(), job.title.strip(), description, job.vacancies)
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return _job_out(rec)


@app.get("/jobs/list", response_model=List[JobOut])
def list_jobs():
    """Return all jobs with applicant counts, newest first."""
    try:
        rows = job_store.list_with_counts()
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [_job_out(job, n) for job, n in rows]


@app.get("/jobs/{job_id}", response_model=JobOut)
def get_job(job_id: int):
    return _job_out(_get_job_or_404(job_id))


@app.delete("/jobs/{job_id}", response_model=dict)
def delete_job(job_id: int):
    try:
        job_store.delete(job_id)
    except JobNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return {"deleted": job_id}


@app.post("/jobs/{job_id}/applications", response_model=ApplicationOut)
def submit_application(
    job_id: int,
    name: str = Form(""),
    email: str = Form(""),
    resume: UploadFile = File(None),
):
    """Extract resume text, analyze it against the job and store the result."""
    if not name.strip() or not email.strip() or resume is None:
        raise HTTPException(status_code=400, detail="Please fill in all fields and upload your resume.")

    job = _get_job_or_404(job_id)

    try:
        resume_text = extractor.extract_bytes(resume.filename, resume.file.read())
    except UnsupportedFileFormat as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=422, detail=f"Failed to read resume: {e}")

    if not resume_text.strip():
        raise HTTPException(status_code=422, detail="No text could be extracted from the resume.")

    outcome = analyze_resume(resume_text, job.description, gateway=get_gateway())

    try:
        rec = application_store.create(
            job_id=job.id,
            name=name.strip(),
            email=email.strip(),
            resume_file_name=resume.filename,
            resume_text=resume_text,
            report=outcome.report,
            source=outcome.source,
        )
    except JobNotFound as e:
        raise HTTPException(status_code=404, detail=str(e))
    except PersistenceFailure:
        raise HTTPException(status_code=500, detail="Submission failed. Please try again.")
    return _application_out(rec)


@app.get("/jobs/{job_id}/applications", response_model=List[ApplicationOut])
def list_applications(job_id: int):
    _get_job_or_404(job_id)
    try:
        records = application_store.list_by_job(job_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))
    return [_application_out(r) for r in records]


@app.get("/jobs/{job_id}/results", response_model=JobResults)
def job_results(job_id: int):
    """Applicant totals, average match score and shortlist size for a job."""
    job = _get_job_or_404(job_id)
    try:
        records = application_store.list_by_job(job_id)
    except PersistenceFailure as e:
        raise HTTPException(status_code=500, detail=str(e))

    scores = [r.report.match_score for r in records]
    average = int(sum(scores) / len(scores) + 0.5) if scores else 0
    shortlisted = sum(1 for r in records if r.report.recommendation == Recommendation.SHORTLIST)
    return JobResults(
        job_id=job.id,
        title=job.title,
        vacancies=job.vacancies,
        total_applicants=len(records),
        average_score=average,
        shortlisted=shortlisted,
    )


@app.post("/analyze", response_model=MatchReport)
def analyze(req: AnalyzeIn):
    """Score resume text against a job description."""
    if not req.resume_text.strip() or not req.job_description.strip():
        raise HTTPException(
            status_code=400,
            detail="Missing required parameters: resumeText and jobDescription",
        )
    outcome = analyze_resume(req.resume_text, req.job_description, req.keywords, gateway=get_gateway())
    return outcome.report


@app.post("/generate-jd", response_model=GeneratedJobDescription)
def generate_jd(req: GenerateJDIn):
    role = req.role_title.strip()
    if not role:
        raise HTTPException(status_code=400, detail="roleTitle is required")
    company = req.company_name.strip() or "Your Company"
    try:
        return get_gateway().generate_job_description(role, company, req.recruiter_name)
    except RemoteServiceUnavailable as e:
        logger.warning(f"JD generation unavailable ({e}); using template")
        return fallback_job_description(role, company)
