"""Application configuration.

Environment variables override all defaults. A `.env` file next to the
backend directory is loaded for local development.
"""

import os
from pathlib import Path
from typing import List

from dotenv import load_dotenv


# Load .env for local development
_BACKEND_DIR = Path(__file__).resolve().parents[2]
load_dotenv(dotenv_path=_BACKEND_DIR / ".env", override=False)


def _split_csv(value: str) -> List[str]:
    return [part.strip() for part in value.split(",") if part.strip()]


class Settings:
    # Database Configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./invoicely.db")

    # Seeded on first start; the front end works against this user's id
    DEFAULT_USERNAME: str = os.getenv("DEFAULT_USERNAME", "owner")

    # Groq API Key (Must be set via .env, never in code)
    GROQ_API_KEY: str = os.getenv("GROQ_API_KEY", "")
    GROQ_MODEL: str = os.getenv("GROQ_MODEL", "llama-3.3-70b-versatile")
    AI_TIMEOUT_SECONDS: float = float(os.getenv("AI_TIMEOUT_SECONDS", "10"))

    # Logo uploads
    UPLOAD_DIR: str = os.getenv("UPLOAD_DIR", "./uploads")
    MAX_LOGO_BYTES: int = int(os.getenv("MAX_LOGO_BYTES", str(2 * 1024 * 1024)))

    # CORS (specific origins only, no wildcards)
    CORS_ORIGINS: List[str] = _split_csv(
        os.getenv(
            "CORS_ORIGINS",
            "http://localhost:3000,http://127.0.0.1:3000,http://localhost:5173,http://127.0.0.1:5173",
        )
    )

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()
    ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")
    DEBUG: bool = ENVIRONMENT == "development"


settings = Settings()
