from __future__ import annotations

import os
import tempfile
from pathlib import Path

from dotenv import load_dotenv

# Load .env if present
ENV_PATH = Path(__file__).resolve().parents[1] / ".env"
if ENV_PATH.exists():
    load_dotenv(ENV_PATH)


class Config:
    SECRET_KEY: str = os.getenv("SECRET_KEY", os.urandom(32).hex())

    SITE_NAME = os.getenv("SITE_NAME", "Admin Dashboard")

    # Hosted backend (REST + auth gateway)
    SUPABASE_URL: str = os.getenv("SUPABASE_URL", "http://localhost:54321")
    SUPABASE_ANON_KEY: str = os.getenv("SUPABASE_ANON_KEY", "")
    REMOTE_TIMEOUT_SECONDS: float = float(os.getenv("REMOTE_TIMEOUT_SECONDS", "10"))

    # Dashboard
    ANALYTICS_DAYS: int = int(os.getenv("ANALYTICS_DAYS", "7"))
    ANALYTICS_LABEL_FORMAT: str = os.getenv("ANALYTICS_LABEL_FORMAT", "%a")
    DASHBOARD_CACHE_TIMEOUT: int = int(os.getenv("DASHBOARD_CACHE_TIMEOUT", "300"))
    # Upper bound on how long an in-flight operation tag may live
    OPERATION_LOCK_SECONDS: int = int(os.getenv("OPERATION_LOCK_SECONDS", "30"))

    # Sessions
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = os.getenv("FLASK_ENV", "production") == "production"
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_LIFETIME_MINUTES = int(os.getenv("SESSION_LIFETIME_MINUTES", "60"))

    # Caching: shared by every worker process on the host.
    # Use RedisCache (CACHE_REDIS_URL) when workers span hosts.
    CACHE_TYPE = os.getenv("CACHE_TYPE", "FileSystemCache")
    CACHE_DIR = os.getenv("CACHE_DIR", os.path.join(tempfile.gettempdir(), "blogdesk-cache"))
    CACHE_DEFAULT_TIMEOUT = DASHBOARD_CACHE_TIMEOUT
    CACHE_REDIS_URL = os.getenv("CACHE_REDIS_URL")

    # Worker processes serving the app; gunicorn.conf.py exports it
    WEB_CONCURRENCY: int = int(os.getenv("WEB_CONCURRENCY", "1"))

    # Rate limiting
    RATELIMIT_DEFAULT = os.getenv("RATELIMIT_DEFAULT", "100 per minute")
    RATELIMIT_STORAGE_URI = os.getenv("RATELIMIT_STORAGE_URI", "memory://")

    # Security headers
    # Post images are hosted anywhere, so img-src allows any https origin
    SECURITY_CSP = (
        "default-src 'self'; "
        "script-src 'none'; "
        "style-src 'self'; "
        "img-src 'self' https:; "
        "font-src 'self'; "
        "object-src 'none'; "
        "base-uri 'self'; "
        "form-action 'self'; "
        "frame-ancestors 'none'"
    )
    SECURITY_HSTS_SECONDS = 31536000
    SECURITY_PERMISSIONS_POLICY = (
        "geolocation=(), microphone=(), camera=(), payment=(), usb=(), "
        "magnetometer=(), gyroscope=(), accelerometer=()"
    )

    # Flask env
    ENV = os.getenv("FLASK_ENV", "production")
    DEBUG = ENV != "production"
