# 📄 File: app/shared/config/settings.py
#
# 🧭 Purpose (Layman Explanation):
# The main configuration center that reads all settings from environment variables
# and provides them to the rest of the PetVally app in an organized way.
#
# 🧪 Purpose (Technical Summary):
# Pydantic-based settings management with environment variable loading,
# validation, and type safety for all application configuration parameters.
#
# 🔗 Dependencies:
# - pydantic-settings for configuration management
# - python-dotenv (.env file loading through pydantic-settings)
# - typing for type hints
#
# 🔄 Connected Modules / Calls From:
# - app.main (application startup)
# - Database connection modules
# - Security, storage and AI clients
# - All modules requiring configuration

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Uses Pydantic for validation and type safety. Settings are loaded
    from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # =========================================================================
    # APPLICATION SETTINGS
    # =========================================================================

    APP_NAME: str = Field(default="PetVally API", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")
    APP_DESCRIPTION: str = Field(
        default="Pet adoption, store, caregiving and vet care platform",
        description="Application description"
    )
    ENVIRONMENT: str = Field(default="development", description="Runtime environment")
    DEBUG: bool = Field(default=True, description="Debug mode flag")
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: str = Field(default="json", description="Log format: json or text")
    LOG_FILE: Optional[str] = Field(None, description="Optional log file path")

    # =========================================================================
    # SERVER CONFIGURATION
    # =========================================================================

    HOST: str = Field(default="0.0.0.0", description="Server host")
    PORT: int = Field(default=8000, description="Server port")
    RELOAD: bool = Field(default=True, description="Auto-reload on changes")
    WORKERS: int = Field(default=1, description="Number of worker processes")

    # =========================================================================
    # DATABASE CONFIGURATION
    # =========================================================================

    DATABASE_URL: Optional[str] = Field(None, description="Database connection URL")
    DB_HOST: str = Field(default="localhost", description="Database host")
    DB_PORT: int = Field(default=5432, description="Database port")
    DB_NAME: str = Field(default="petvally_db", description="Database name")
    DB_USER: str = Field(default="postgres", description="Database user")
    DB_PASSWORD: str = Field(default="", description="Database password")

    # Connection Pool Settings
    DB_POOL_SIZE: int = Field(default=10, description="Database pool size")
    DB_MAX_OVERFLOW: int = Field(default=20, description="Database pool overflow")
    DB_POOL_TIMEOUT: int = Field(default=30, description="Database pool timeout")
    DB_POOL_RECYCLE: int = Field(default=3600, description="Database pool recycle time")
    DB_CREATE_TABLES: bool = Field(
        default=False,
        description="Create missing tables on startup (local runs and tests)"
    )

    # =========================================================================
    # SECURITY SETTINGS
    # =========================================================================

    JWT_SECRET_KEY: str = Field(
        default="default_secret_please_change_in_production",
        description="JWT signing secret"
    )
    JWT_ALGORITHM: str = Field(default="HS256", description="JWT algorithm")
    TOKEN_EXPIRE_DAYS: int = Field(default=4, description="User and caregiver token lifetime")
    ADMIN_TOKEN_EXPIRE_DAYS: int = Field(default=1, description="Admin token lifetime")
    BCRYPT_ROUNDS: int = Field(default=10, description="BCrypt hash rounds")
    COOKIE_SECURE: bool = Field(default=False, description="Send auth cookies over HTTPS only")

    # CORS Settings
    CORS_ORIGINS: str = Field(
        default="http://localhost:3000,http://localhost:8080",
        description="CORS allowed origins"
    )
    CORS_ALLOW_CREDENTIALS: bool = Field(default=True, description="CORS allow credentials")

    # Rate limiting
    RATE_LIMIT_ENABLED: bool = Field(default=True, description="Enable slowapi rate limits")
    AUTH_RATE_LIMIT: str = Field(
        default="10/minute",
        description="Login/register rate limit in '<limit>/<period>' format"
    )

    # =========================================================================
    # IMAGE HOSTING (SUPABASE STORAGE)
    # =========================================================================

    SUPABASE_URL: str = Field(default="", description="Supabase project URL")
    SUPABASE_SERVICE_ROLE_KEY: str = Field(default="", description="Supabase service role key")
    SUPABASE_STORAGE_BUCKET: str = Field(
        default="petvally-images",
        description="Supabase storage bucket"
    )
    MAX_IMAGE_SIZE: int = Field(default=5242880, description="Max image size (5MB)")
    IMAGE_QUALITY: int = Field(default=85, description="Image compression quality")

    # =========================================================================
    # AI VET CHAT (GOOGLE GEMINI)
    # =========================================================================

    GOOGLE_GEMINI_API_KEY: Optional[str] = Field(None, description="Google Gemini API key")
    GOOGLE_GEMINI_MODEL: str = Field(default="gemini-2.0-flash", description="Gemini model")
    GOOGLE_GEMINI_API_URL: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        description="Gemini REST API base URL"
    )
    GOOGLE_GEMINI_TIMEOUT: int = Field(default=60, description="Gemini request timeout (seconds)")
    VETCHAT_SESSION_COOKIE_MAX_AGE: int = Field(
        default=60 * 60 * 24 * 7,
        description="Vet chat session cookie lifetime (seconds)"
    )
    VETCHAT_SESSION_TTL: int = Field(
        default=60 * 60 * 24,
        description="Idle time before a vet chat history is dropped (seconds)"
    )
    VETCHAT_MAX_SESSIONS: int = Field(
        default=1000,
        description="Most vet chat histories kept in memory; least recently used go first"
    )

    # =========================================================================
    # ADMIN SETTINGS
    # =========================================================================

    ADMIN_USERNAME: Optional[str] = Field(None, description="Bootstrap admin username")
    ADMIN_PASSWORD: Optional[str] = Field(None, description="Bootstrap admin password")

    # =========================================================================
    # VALIDATORS
    # =========================================================================

    @field_validator("ENVIRONMENT")
    @classmethod
    def validate_environment(cls, v: str) -> str:
        """Validate environment value."""
        allowed_environments = ["development", "staging", "production", "test"]
        if v.lower() not in allowed_environments:
            raise ValueError(f"Environment must be one of {allowed_environments}")
        return v.lower()

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level value."""
        allowed_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in allowed_levels:
            raise ValueError(f"Log level must be one of {allowed_levels}")
        return v.upper()

    @field_validator("JWT_ALGORITHM")
    @classmethod
    def validate_jwt_algorithm(cls, v: str) -> str:
        """Validate JWT algorithm."""
        allowed_algorithms = ["HS256", "HS384", "HS512"]
        if v not in allowed_algorithms:
            raise ValueError(f"JWT algorithm must be one of {allowed_algorithms}")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def validate_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("CORS_ORIGINS")
    @classmethod
    def validate_cors_origins(cls, v: str) -> str:
        """Validate CORS origins format."""
        origins = [origin.strip() for origin in v.split(",")]
        for origin in origins:
            if not origin.startswith(("http://", "https://", "*")):
                raise ValueError(f"Invalid CORS origin format: {origin}")
        return v

    # =========================================================================
    # COMPUTED PROPERTIES
    # =========================================================================

    @property
    def database_url(self) -> str:
        """Get the database URL, preferring explicit DATABASE_URL."""
        if self.DATABASE_URL:
            return self.DATABASE_URL

        return (
            f"postgresql+asyncpg://{self.DB_USER}:{self.DB_PASSWORD}"
            f"@{self.DB_HOST}:{self.DB_PORT}/{self.DB_NAME}"
        )

    @property
    def is_sqlite(self) -> bool:
        return self.database_url.startswith("sqlite")

    @property
    def cors_origins_list(self) -> List[str]:
        """Get CORS origins as a list."""
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",")]

    @property
    def token_max_age(self) -> int:
        """User/caregiver cookie max-age in seconds."""
        return self.TOKEN_EXPIRE_DAYS * 24 * 60 * 60

    @property
    def admin_token_max_age(self) -> int:
        return self.ADMIN_TOKEN_EXPIRE_DAYS * 24 * 60 * 60

    @property
    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.ENVIRONMENT == "development"

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.ENVIRONMENT == "production"

    @property
    def is_testing(self) -> bool:
        """Check if running in test environment."""
        return self.ENVIRONMENT == "test"


# ============================================================================
# SETTINGS FACTORY
# ============================================================================

@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings singleton.

    Uses lru_cache to ensure settings are loaded only once
    and reused throughout the application lifecycle.

    Returns:
        Settings: Application settings instance
    """
    return Settings()
