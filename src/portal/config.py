"""
Byte Portal Configuration

All settings come from the environment (or a .env file at the project root).
"""
import os
from pathlib import Path
from typing import List
from urllib.parse import quote_plus
from dotenv import load_dotenv

load_dotenv(Path(__file__).resolve().parents[2] / ".env")


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes")


def _env_list(name: str, default: str = "") -> List[str]:
    return [item.strip() for item in os.getenv(name, default).split(",") if item.strip()]


class Config:
    """Configuration class for Byte Portal API"""

    DEBUG = _env_bool("DEBUG")
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    # Database settings
    DB_HOST = os.getenv("DB_HOST", "localhost")
    DB_PORT = os.getenv("DB_PORT", "5432")
    DB_NAME = os.getenv("DB_NAME", "byte")
    DB_USER = os.getenv("DB_USER", "postgres")
    DB_PASSWORD = os.getenv("DB_PASSWORD", "")

    # API settings
    API_HOST = os.getenv("API_HOST", "127.0.0.1")
    API_PORT = int(os.getenv("API_PORT", "8100"))
    CORS_ORIGINS = _env_list("CORS_ORIGINS", "*")

    # JWT settings
    JWT_SECRET = os.getenv("JWT_SECRET", "byte-portal-secret-key-change-in-production")
    JWT_ALGORITHM = "HS256"
    JWT_EXPIRATION_HOURS = int(os.getenv("JWT_EXPIRATION_HOURS", "24"))

    # SMTP (Email notifications). Missing credentials disable email delivery.
    SMTP_HOST = os.getenv("SMTP_HOST", "smtp.gmail.com")
    SMTP_PORT = int(os.getenv("SMTP_PORT", "587"))
    SMTP_SECURE = _env_bool("SMTP_SECURE")          # implicit TLS, port 465
    SMTP_USER = os.getenv("SMTP_USER", "")
    SMTP_PASSWORD = os.getenv("SMTP_PASSWORD", "")
    SMTP_FROM = os.getenv("SMTP_FROM", "")
    SMTP_FROM_NAME = os.getenv("SMTP_FROM_NAME", "Byte")
    SMTP_TIMEOUT = float(os.getenv("SMTP_TIMEOUT", "30"))

    # Public site URL used for links in emails
    SITE_URL = os.getenv("SITE_URL", "http://localhost:3000")

    @staticmethod
    def get_postgres_dsn() -> str:
        """POSTGRES_DSN if set, otherwise built from the DB_* settings"""
        dsn = os.getenv("POSTGRES_DSN")
        if dsn:
            return dsn
        auth = Config.DB_USER
        if Config.DB_PASSWORD:
            auth = f"{auth}:{quote_plus(Config.DB_PASSWORD)}"
        return f"postgresql://{auth}@{Config.DB_HOST}:{Config.DB_PORT}/{Config.DB_NAME}"

    @staticmethod
    def smtp_enabled() -> bool:
        return bool(Config.SMTP_USER and Config.SMTP_PASSWORD)
