"""Application configuration."""
import os
from dataclasses import dataclass
from typing import Optional


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}")


@dataclass
class ApiConfig:
    """Issue tracker API settings."""

    base_url: str = "http://localhost:8080"
    api_token: str = ""  # Bearer token, or API token when api_user is set
    api_user: str = ""  # Basic auth user (e-mail)
    timeout: float = 60.0

    @classmethod
    def from_env(cls) -> "ApiConfig":
        """Load config from environment variables."""
        return cls(
            base_url=os.getenv("FIELDKIT_API_URL", "http://localhost:8080"),
            api_token=os.getenv("FIELDKIT_API_TOKEN", ""),
            api_user=os.getenv("FIELDKIT_API_USER", ""),
            timeout=_env_float("FIELDKIT_TIMEOUT", 60.0),
        )


@dataclass
class AppConfig:
    """Application settings."""

    output_dir: str = "./output"
    container: str = "fields"
    records: str = "issues"
    record_key: str = "key"
    api: Optional[ApiConfig] = None

    def __post_init__(self):
        """Initialize defaults."""
        if self.api is None:
            self.api = ApiConfig.from_env()

    @classmethod
    def from_env(cls) -> "AppConfig":
        """Load config from environment variables."""
        return cls(
            output_dir=os.getenv("FIELDKIT_OUTPUT_DIR", "./output"),
            container=os.getenv("FIELDKIT_CONTAINER", "fields"),
            records=os.getenv("FIELDKIT_RECORDS", "issues"),
            record_key=os.getenv("FIELDKIT_RECORD_KEY", "key"),
            api=ApiConfig.from_env(),
        )


# Global instance
app_config = AppConfig.from_env()
