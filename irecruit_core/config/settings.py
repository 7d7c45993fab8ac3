from __future__ import annotations
import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv


@dataclass
class AppConfig:
    backend: str = "sqlite"
    sqlite_db: str = "irecruit.db"
    supabase_url: str = ""
    supabase_key: str = ""
    upload_root: str = "."
    smtp_host: str = "localhost"
    smtp_port: int = 25
    smtp_user: str = ""
    smtp_password: str = ""
    smtp_sender: str = "no-reply@irecruit.com"
    smtp_use_tls: bool = False
    smtp_use_ssl: bool = False


def _env(name: str, default: str = "") -> str:
    return os.getenv(name, default).strip() or default


def _env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name, "").strip().lower()
    if not raw:
        return default
    return raw in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name, "").strip()
    try:
        return int(raw) if raw else default
    except ValueError:
        return default


def load_app_config() -> AppConfig:
    """Construit la configuration depuis .env + os.environ (sans cache)."""
    load_dotenv()

    backend = _env("IRECRUIT_BACKEND", "sqlite").lower()
    cfg = AppConfig(
        backend=backend,
        sqlite_db=_env("IRECRUIT_SQLITE_DB", "irecruit.db"),
        supabase_url=_env("SUPABASE_URL"),
        supabase_key=_env("SUPABASE_KEY"),
        upload_root=_env("IRECRUIT_UPLOAD_ROOT", "."),
        smtp_host=_env("SMTP_HOST", "localhost"),
        smtp_port=_env_int("SMTP_PORT", 25),
        smtp_user=_env("SMTP_USER"),
        smtp_password=_env("SMTP_PASSWORD"),
        smtp_sender=_env("SMTP_SENDER", "no-reply@irecruit.com"),
        smtp_use_tls=_env_bool("SMTP_USE_TLS"),
        smtp_use_ssl=_env_bool("SMTP_USE_SSL"),
    )
    if cfg.backend not in ("sqlite", "supabase"):
        raise RuntimeError(f"Unknown IRECRUIT_BACKEND: {cfg.backend!r} (expected 'sqlite' or 'supabase')")
    if cfg.backend == "supabase" and (not cfg.supabase_url or not cfg.supabase_key):
        raise RuntimeError("Missing SUPABASE_URL or SUPABASE_KEY in environment/.env")
    if cfg.smtp_use_tls and cfg.smtp_use_ssl:
        raise RuntimeError("SMTP_USE_TLS and SMTP_USE_SSL are mutually exclusive")
    return cfg


@lru_cache(maxsize=1)
def get_app_config() -> AppConfig:
    return load_app_config()
