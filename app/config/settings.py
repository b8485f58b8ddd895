from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 5000
    cors_origins: str = "*"

    db_host: str = "localhost"
    db_port: int = 5432
    db_database: str = "jd_analysis"
    db_username: str = "jd_analysis"
    db_password: str = "secret"

    analysis_provider: str = "http"
    analysis_api_base_url: str = "http://localhost:8000"
    analysis_api_timeout_seconds: int = 300

    uploads_root: str = "uploads"
    max_upload_size_mb: int = 10
    allowed_upload_extensions: str = ".txt,.doc,.docx,.pdf,.jpg,.jpeg,.png"

    @property
    def max_upload_size_bytes(self) -> int:
        return self.max_upload_size_mb * 1024 * 1024

    @property
    def allowed_extensions(self) -> list[str]:
        return [
            ext.strip().lower()
            for ext in self.allowed_upload_extensions.split(",")
            if ext.strip()
        ]

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]
