from pathlib import Path

from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict

from shared.exceptions import ServerError
from shared.imaging.schemas import Constraint


def _env_files() -> list[str]:
    """Load .env from the repository root (when running locally) then local .env."""
    base = Path(__file__).resolve().parent.parent.parent.parent  # repository root
    return [str(base / ".env"), ".env"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=_env_files(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── AWS ───────────────────────────────────────────────────────────────────
    region: str = "us-east-1"

    # Upload flow: presigned uploads land in the private upload bucket and are
    # finalized into the public bucket
    aws_s3_bucket_upload: str = ""
    aws_s3_bucket_public: str = ""

    # Serve flow: variants are read from source and written to destination
    aws_s3_bucket_source: str = ""
    aws_s3_bucket_destination: str = ""

    # Queue name receiving callback messages after async finalize
    callback_queue: str = ""

    # Presigned PUT URL expiry
    upload_url_expiry_seconds: int = 900  # 15 min

    # ── Limits ────────────────────────────────────────────────────────────────
    max_bytes: int = 6_291_456  # 6 MB
    max_width: int = 2000
    max_height: int = 2000

    # ── Callback delivery ─────────────────────────────────────────────────────
    environment: str = "development"
    api_secret_key: str = ""
    api_username: str = ""
    api_password: str = ""

    log_level: str = "INFO"

    @property
    def constraint(self) -> Constraint:
        return Constraint(
            max_width=self.max_width,
            max_height=self.max_height,
            max_bytes=self.max_bytes,
        )

    @property
    def is_test(self) -> bool:
        return self.environment.upper() == "TEST"


def load_settings() -> Settings:
    """Read settings for one invocation; a bad value is a server error."""
    try:
        settings = Settings()
        settings.constraint  # rejects non-positive limits
    except ValidationError as exc:
        raise ServerError(f"Invalid configuration: {exc}") from exc
    return settings
