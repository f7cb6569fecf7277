"""Application configuration via environment variables."""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from environment variables or .env file."""
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    # Application
    app_name: str = "COBRA Checklist"
    debug: bool = False

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    allowed_origins: str = "*"  # Comma-separated origins, or "*" for all

    # Database
    database_url: str = "sqlite:///./cobra_checklist.db"

    # Logging
    log_dir: str = "~/.logs/cobra"

    # Mock user attribution (no real authentication in this service)
    mock_auth_enabled: bool = True
    default_user_email: str = "admin@cobra.mil"
    default_user_position: str = "Incident Commander"


settings = Settings()
