"""
Test fixtures shared by the resume screening tests
"""

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from errors import RemoteError
from models import Base
from schemas import MatchReport, Recommendation


class FakeGateway:
    """Stands in for GeminiGateway; returns a fixed report or raises."""

    def __init__(self, report=None, error=None):
        self.report = report
        self.error = error
        self.calls = []

    def score(self, resume_text, job_description):
        self.calls.append((resume_text, job_description))
        if self.error is not None:
            raise self.error
        return self.report

    def generate_job_description(self, role_title, company_name="Your Company", recruiter_name=None):
        raise self.error or RemoteError("not configured")


@pytest.fixture
def fake_gateway():
    return FakeGateway


@pytest.fixture
def llm_report():
    return MatchReport(
        match_score=88,
        matched_skills=["Python", "FastAPI"],
        missing_skills=["Kubernetes"],
        summary="Strong backend candidate.",
        recommendation=Recommendation.SHORTLIST,
    )


@pytest.fixture
def mock_env(monkeypatch, tmp_path):
    """Isolated data directory and no Gemini key, so analysis uses the fallback"""
    monkeypatch.delenv("GEMINI_API_KEY", raising=False)
    monkeypatch.delenv("SPACE_ID", raising=False)
    monkeypatch.setenv("BASE_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("LOG_LEVEL", "WARNING")
    return tmp_path


@pytest.fixture
def session_factory(tmp_path):
    engine = create_engine(f"sqlite:///{tmp_path / 'stores.db'}", future=True)
    Base.metadata.create_all(engine)
    yield sessionmaker(bind=engine, autoflush=False, future=True)
    engine.dispose()


@pytest.fixture
def client(mock_env):
    import app as app_module

    with TestClient(app_module.app) as c:
        yield c


@pytest.fixture
def sample_job_payload():
    return {
        "company": "Tech Corp",
        "title": "Backend Engineer",
        "description": "Looking for React and Node.js engineer",
        "keywords": ["Docker"],
        "vacancies": 2,
    }
