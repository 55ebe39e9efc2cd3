import os
import logging
from typing import List
from pydantic import BaseModel
from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class Settings(BaseModel):
    gemini_api_key: str | None = None
    gemini_model: str = "gemini-1.5-pro"
    gemini_jd_model: str = "gemini-1.5-flash"
    llm_timeout: float = 30.0
    base_dir: str = "data"
    log_level: str = "INFO"
    cors_origins: List[str] = ["*"]

    @property
    def db_path(self) -> str:
        return os.path.join(self.base_dir, "app.db")


def get_settings() -> Settings:
    """Read settings from the environment (and .env) at call time."""
    is_hf = os.environ.get("SPACE_ID") is not None
    origins = os.getenv("CORS_ORIGINS", "*")
    return Settings(
        gemini_api_key=os.getenv("GEMINI_API_KEY") or None,
        gemini_model=os.getenv("GEMINI_MODEL", "gemini-1.5-pro"),
        gemini_jd_model=os.getenv("GEMINI_JD_MODEL", "gemini-1.5-flash"),
        llm_timeout=float(os.getenv("LLM_TIMEOUT", "30")),
        base_dir=os.getenv("BASE_DIR", "/tmp/data" if is_hf else "data"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
    )


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or get_settings().log_level,
        format=LOG_FORMAT,
    )
