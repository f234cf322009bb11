"""
Configuration management for roomrules.
"""
import os
from typing import Optional
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


class Config:
    """Application configuration."""

    # Project paths
    PROJECT_ROOT = Path(__file__).parent.parent.parent
    SRC_DIR = PROJECT_ROOT / "src"

    # Supabase (PostgREST) data store
    SUPABASE_URL: Optional[str] = os.getenv("SUPABASE_URL")
    SUPABASE_ANON_KEY: Optional[str] = os.getenv("SUPABASE_ANON_KEY")
    SUPABASE_TIMEOUT_S: int = int(os.getenv("SUPABASE_TIMEOUT_S", "15"))

    # Cache lifetimes in seconds
    RULES_CACHE_TTL_S: int = int(os.getenv("RULES_CACHE_TTL_S", "600"))
    CATALOG_CACHE_TTL_S: int = int(os.getenv("CATALOG_CACHE_TTL_S", "300"))

    # Catalog sampling
    SUGGESTION_SAMPLE_SIZE: int = 200
    SUGGESTION_LIMIT: int = 12
    SEARCH_SAMPLE_SIZE: int = 500
    DEFAULT_SEARCH_LIMIT: int = 20

    # Flask settings
    FLASK_ENV: str = os.getenv("FLASK_ENV", "development")
    FLASK_DEBUG: bool = os.getenv("FLASK_DEBUG", "True").lower() == "true"
    FLASK_HOST: str = os.getenv("FLASK_HOST", "0.0.0.0")
    FLASK_PORT: int = int(os.getenv("FLASK_PORT", "5000"))
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret-key")
    CORS_ORIGINS: str = os.getenv("CORS_ORIGINS", "*")

    # Logging
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    @classmethod
    def validate(cls) -> list[str]:
        """
        Validate configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        errors = []

        if not cls.SUPABASE_URL:
            errors.append("SUPABASE_URL not set in environment")
        elif not cls.SUPABASE_URL.startswith(("http://", "https://")):
            errors.append(f"Invalid SUPABASE_URL: {cls.SUPABASE_URL}. Must be an http(s) URL")

        if not cls.SUPABASE_ANON_KEY:
            errors.append("SUPABASE_ANON_KEY not set in environment")

        if cls.RULES_CACHE_TTL_S <= 0 or cls.CATALOG_CACHE_TTL_S <= 0:
            errors.append("Cache TTLs must be positive")

        return errors

    @classmethod
    def is_valid(cls) -> bool:
        """Check if configuration is valid."""
        return len(cls.validate()) == 0

    @classmethod
    def get_cors_origins(cls) -> list[str]:
        """Parse CORS_ORIGINS into a list ("*" allows everything)."""
        origins = [o.strip() for o in cls.CORS_ORIGINS.split(",") if o.strip()]
        return origins or ["*"]

    @classmethod
    def get_summary(cls) -> dict:
        """Get configuration summary (safe for logging)."""
        return {
            "flask_env": cls.FLASK_ENV,
            "flask_debug": cls.FLASK_DEBUG,
            "supabase_configured": cls.SUPABASE_URL is not None,
            "supabase_key_configured": cls.SUPABASE_ANON_KEY is not None,
            "rules_cache_ttl_s": cls.RULES_CACHE_TTL_S,
            "catalog_cache_ttl_s": cls.CATALOG_CACHE_TTL_S,
            "log_level": cls.LOG_LEVEL,
        }
