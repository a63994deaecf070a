"""Configuration settings for complytrack."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Checklist Service Configuration
    # Empty means the report engine reads the in-process checklist service
    checklist_service_url: str = ""
    checklist_timeout_seconds: float = 10.0
    seed_catalog_path: str = ""  # Defaults to the bundled catalog

    # Gap Analysis Configuration
    evidence_analyzer_url: str = "http://localhost:3001"
    analyzer_timeout_seconds: float = 30.0
    critical_categories: list[str] = [
        "Access Control",
        "Data Protection",
        "Risk Management",
    ]

    # API Configuration
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
    ]

    # Tracing Configuration
    tracing_enabled: bool = True
    log_level: str = "INFO"
    trace_max_events: int = 1000

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }


settings = Settings()
