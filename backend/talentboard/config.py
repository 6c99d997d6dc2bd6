from pathlib import Path
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    environment: str = "development"
    # Any SQLAlchemy URL; unset means a SQLite file under data_dir.
    database_url: str | None = None
    data_dir: Path = Path("data")
    uploads_dir: Path = Path("uploads")
    max_resume_bytes: int = 5 * 1024 * 1024  # 5 MiB
    allowed_resume_types: frozenset[str] = frozenset({
        "application/pdf",
        "application/msword",
        "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    })
    db_connect_timeout_seconds: int = 10
    api_prefix: str = "/api"
    uploads_url_prefix: str = "/uploads"
    cors_origins: list[str] = ["*"]
    log_level: str = "INFO"
    host: str = "127.0.0.1"
    port: int = 3001

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def db_url(self) -> str:
        if self.database_url:
            return self.database_url
        return f"sqlite:///{self.data_dir / 'talentboard.sqlite'}"

    model_config = {"env_prefix": "TALENTBOARD_"}


settings = Settings()
