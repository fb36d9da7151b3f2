"""Application settings read from the environment."""
from pydantic_settings import BaseSettings
from pydantic import field_validator, model_validator
from typing import List, Literal, Optional
import secrets


class Settings(BaseSettings):
    """Application configuration from environment variables."""

    # Environment
    ENV: Literal["dev", "staging", "prod"] = "dev"

    # Backend-as-a-service
    APPWRITE_ENDPOINT: str
    APPWRITE_PROJECT: str
    APPWRITE_DATABASE_ID: str
    APPWRITE_TABLE_ID: str  # Products collection
    EDITORS_TEAM_ID: str
    VIEWERS_TEAM_ID: str
    GATEWAY_TIMEOUT: float = 10.0  # seconds
    GATEWAY_CHECK_ON_STARTUP: bool = True

    # Federated login
    APP_URL: str = "http://localhost:8000"
    OAUTH_PROVIDER: str = "auth0"
    OAUTH_SCOPES: str = "openid,profile,email"

    # Security
    SECRET_KEY: Optional[str] = None  # Auto-generated outside prod
    SESSION_COOKIE_NAME: str = "catalog_session"
    SESSION_MAX_AGE: int = 14 * 24 * 60 * 60  # 14 days
    COOKIE_SECURE: bool = False
    COOKIE_SAMESITE: Literal["lax", "strict", "none"] = "lax"
    COOKIE_HTTPONLY: bool = True

    # CSRF Protection
    CSRF_SECRET_KEY: Optional[str] = None  # Auto-generated if not provided
    CSRF_TOKEN_EXPIRY: int = 3600  # 1 hour

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_AUTH_REQUESTS: int = 5  # requests per window
    RATE_LIMIT_AUTH_WINDOW: int = 60  # seconds

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "json"
    LOG_FILE: Optional[str] = None

    # Presentation
    CURRENCY_SYMBOL: str = "₱"

    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "allow"

    @field_validator("APPWRITE_ENDPOINT", "APP_URL")
    @classmethod
    def validate_url(cls, v: str) -> str:
        """Require an http(s) URL and drop any trailing slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError(f"Expected an http(s) URL, got {v!r}")
        return v.rstrip("/")

    @model_validator(mode="after")
    def validate_production_settings(self):
        """Validate production-specific requirements."""
        if self.ENV == "prod":
            if not self.SECRET_KEY or len(self.SECRET_KEY) < 32:
                raise ValueError(
                    "SECRET_KEY must be explicitly set in production (min 32 characters). "
                    "Generate with: python -c 'import secrets; print(secrets.token_urlsafe(32))'"
                )

            if self.COOKIE_SAMESITE == "none" and not self.COOKIE_SECURE:
                raise ValueError(
                    "COOKIE_SAMESITE='none' requires COOKIE_SECURE=True. "
                    "Use 'lax' or 'strict' for production."
                )

        if not self.SECRET_KEY:
            self.SECRET_KEY = secrets.token_urlsafe(32)

        if not self.CSRF_SECRET_KEY:
            self.CSRF_SECRET_KEY = secrets.token_urlsafe(32)

        return self

    @property
    def oauth_scopes_list(self) -> List[str]:
        """Parse OAuth scopes from a comma separated string."""
        return [s.strip() for s in self.OAUTH_SCOPES.split(",") if s.strip()]

    @property
    def oauth_success_url(self) -> str:
        return f"{self.APP_URL}/auth/oauth/callback"

    @property
    def oauth_failure_url(self) -> str:
        return f"{self.APP_URL}/login?error=true"

    def validate_required_for_env(self) -> None:
        """
        Validate all required settings for the current environment.

        Raises:
            ValueError: If required settings are missing
        """
        errors = []

        # Always required
        required = {
            "APPWRITE_PROJECT": self.APPWRITE_PROJECT,
            "APPWRITE_DATABASE_ID": self.APPWRITE_DATABASE_ID,
            "APPWRITE_TABLE_ID": self.APPWRITE_TABLE_ID,
            "EDITORS_TEAM_ID": self.EDITORS_TEAM_ID,
            "VIEWERS_TEAM_ID": self.VIEWERS_TEAM_ID,
        }
        for name, value in required.items():
            if not value or not value.strip():
                errors.append(f"{name} is required")

        if self.EDITORS_TEAM_ID and self.EDITORS_TEAM_ID == self.VIEWERS_TEAM_ID:
            errors.append("EDITORS_TEAM_ID and VIEWERS_TEAM_ID must be different teams")

        # Production requirements
        if self.ENV == "prod":
            if not self.APP_URL.startswith("https://"):
                errors.append("APP_URL must use https in production")

        if errors:
            raise ValueError(
                "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
            )


# Singleton settings instance
settings = Settings()
