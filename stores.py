"""
Job and application persistence over SQLAlchemy sessions.

Each operation runs in its own session and returns plain records, so callers
never hold ORM objects past the session that loaded them. Database errors are
rolled back and surfaced as PersistenceFailure, as are stored
analyses that no longer validate; nothing is retried.
"""
import json
import logging
from contextlib import contextmanager
from dataclasses import dataclass
from datetime import datetime
from typing import Iterator, List, Optional, Tuple

from pydantic import ValidationError
from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from errors import JobNotFound, PersistenceFailure
from models import Application, Job
from schemas import MatchReport

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class JobRecord:
    id: int
    company: str
    title: str
    description: str
    vacancies: int
    created_at: Optional[datetime]

    @classmethod
    def from_row(cls, job: Job) -> "JobRecord":
        return cls(job.id, job.company, job.title, job.description, job.vacancies, job.created_at)


@dataclass(frozen=True)
class ApplicationRecord:
    id: int
    job_id: int
    name: str
    email: str
    resume_file_name: Optional[str]
    resume_text: str
    report: MatchReport
    source: str
    submitted_at: Optional[datetime]

    @classmethod
    def from_row(cls, app: Application) -> "ApplicationRecord":
        return cls(
            id=app.id,
            job_id=app.job_id,
            name=app.name,
            email=app.email,
            resume_file_name=app.resume_file_name,
            resume_text=app.resume_text or "",
            report=MatchReport.model_validate(app.ai_analysis),
            source=app.analysis_source,
            submitted_at=app.submitted_at,
        )


@contextmanager
def _session_scope(factory: sessionmaker, action: str) -> Iterator[Session]:
    with factory() as s:
        try:
            yield s
        except SQLAlchemyError as e:
            s.rollback()
            logger.error("Database error while trying to %s: %s", action, e)
            raise PersistenceFailure(f"Failed to {action}") from e
        except (ValidationError, json.JSONDecodeError) as e:
            s.rollback()
            logger.error("Invalid stored data while trying to %s: %s", action, e)
            raise PersistenceFailure(f"Failed to {action}: stored analysis is invalid") from e


class JobStore:
    def __init__(self, session_factory: sessionmaker):
        self.Session = session_factory

    def create(self, company: str, title: str, description: str, vacancies: int = 1) -> JobRecord:
        with _session_scope(self.Session, "create job") as s:
            job = Job(company=company, title=title, description=description, vacancies=vacancies)
            s.add(job)
            s.commit()
            s.refresh(job)
            logger.info("Created job %s (%s at %s)", job.id, title, company)
            return JobRecord.from_row(job)

    def get(self, job_id: int) -> JobRecord:
        with _session_scope(self.Session, "load job") as s:
            job = s.get(Job, job_id)
            if job is None:
                raise JobNotFound(job_id)
            return JobRecord.from_row(job)

    def delete(self, job_id: int) -> None:
        with _session_scope(self.Session, "delete job") as s:
            job = s.get(Job, job_id)
            if job is None:
                raise JobNotFound(job_id)
            s.delete(job)
            s.commit()
            logger.info("Deleted job %s", job_id)

    def list_with_counts(self) -> List[Tuple[JobRecord, int]]:
        """All jobs, newest first, with their number of applications."""
        with _session_scope(self.Session, "list jobs") as s:
            counts = (
                select(Application.job_id, func.count(Application.id).label("n"))
                .group_by(Application.job_id)
                .subquery()
            )
            rows = s.execute(
                select(Job, func.coalesce(counts.c.n, 0))
                .outerjoin(counts, counts.c.job_id == Job.id)
                .order_by(Job.created_at.desc(), Job.id.desc())
            ).all()
            return [(JobRecord.from_row(job), int(n)) for job, n in rows]


class ApplicationStore:
    def __init__(self, session_factory: sessionmaker):
        self.Session = session_factory

    def create(self, job_id: int, name: str, email: str, resume_file_name: Optional[str],
               resume_text: str, report: MatchReport, source: str) -> ApplicationRecord:
        with _session_scope(self.Session, "store application") as s:
            if s.get(Job, job_id) is None:
                raise JobNotFound(job_id)
            app = Application(
                job_id=job_id,
                name=name,
                email=email,
                resume_file_name=resume_file_name,
                resume_text=resume_text,
                ai_analysis=report.model_dump(mode="json", by_alias=True),
                analysis_source=source,
            )
            s.add(app)
            s.commit()
            s.refresh(app)
            logger.info("Stored application %s for job %s (score %s, %s)",
                        app.id, job_id, report.match_score, source)
            return ApplicationRecord.from_row(app)

    def list_by_job(self, job_id: int) -> List[ApplicationRecord]:
        """Applications for a job, best match first."""
        with _session_scope(self.Session, "list applications") as s:
            rows = s.scalars(
                select(Application)
                .where(Application.job_id == job_id)
                .order_by(Application.submitted_at, Application.id)
            ).all()
            records = [ApplicationRecord.from_row(a) for a in rows]
        records.sort(key=lambda r: r.report.match_score, reverse=True)
        return records
