from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    data_path: Path = Path.home() / "JobBoard"
    jwt_secret: str = "change-me-in-production"
    jwt_algorithm: str = "HS256"
    token_ttl_seconds: int = 7 * 24 * 3600
    # Resumes are capped and restricted to document formats.
    max_resume_bytes: int = 5 * 1024 * 1024  # 5 MiB
    allowed_resume_types: list[str] = [
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    ]
    cors_origins: list[str] = ["http://localhost:5173"]
    api_prefix: str = "/api"
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 5000

    @property
    def db_path(self) -> Path:
        return self.data_path / "jobboard.sqlite"

    @property
    def resume_dir(self) -> Path:
        return self.data_path / "uploads" / "resumes"

    model_config = {"env_prefix": "JOBBOARD_"}


settings = Settings()
