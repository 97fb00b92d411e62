"""Configuration and settings."""

import os

from dotenv import load_dotenv
from pydantic import BaseModel, SecretStr, field_validator

load_dotenv()

# Logging
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_FILE = os.getenv("LOG_FILE", "")  # JSONL output; console only when empty
VERBOSE_LOGGING = os.getenv("VERBOSE_LOGGING", "false").lower() == "true"

# OpenTelemetry
TRACING_ENABLED = os.getenv("TRACING_ENABLED", "false").lower() == "true"
TRACING_ENDPOINT = os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", "http://localhost:4318/v1/traces")
TRACING_SERVICE_NAME = os.getenv("OTEL_SERVICE_NAME", "mailosaur-client")

# Service defaults
DEFAULT_BASE_URL = "https://mailosaur.com/"
DEFAULT_SMTP_HOST = "mailosaur.io"
DEFAULT_SMTP_PORT = 25
DEFAULT_REQUEST_TIMEOUT = 30.0
DEFAULT_WAIT_TIMEOUT = 10.0
DEFAULT_POLL_INTERVAL = 1.0


class ClientSettings(BaseModel):
    """Everything a MailosaurClient needs to talk to the service."""

    api_key: SecretStr
    base_url: str = DEFAULT_BASE_URL
    smtp_host: str = DEFAULT_SMTP_HOST
    smtp_port: int = DEFAULT_SMTP_PORT
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT
    wait_timeout: float = DEFAULT_WAIT_TIMEOUT
    poll_interval: float = DEFAULT_POLL_INTERVAL

    model_config = {"frozen": True}

    @field_validator("api_key")
    @classmethod
    def _require_api_key(cls, value: SecretStr) -> SecretStr:
        if not value.get_secret_value().strip():
            raise ValueError("api_key must not be empty")
        return value

    @field_validator("base_url")
    @classmethod
    def _trailing_slash(cls, value: str) -> str:
        # Request paths are relative, so the base must end in "/" to keep its path.
        return value if value.endswith("/") else f"{value}/"

    @field_validator("request_timeout", "wait_timeout", "poll_interval")
    @classmethod
    def _positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("must be greater than zero")
        return value

    @classmethod
    def from_env(cls) -> "ClientSettings":
        """Build settings from MAILOSAUR_* environment variables (.env is loaded at import)."""
        api_key = os.getenv("MAILOSAUR_API_KEY", "").strip()
        if not api_key:
            raise ValueError("MAILOSAUR_API_KEY is not set")
        return cls(
            api_key=api_key,
            base_url=os.getenv("MAILOSAUR_BASE_URL") or DEFAULT_BASE_URL,
            smtp_host=os.getenv("MAILOSAUR_SMTP_HOST") or DEFAULT_SMTP_HOST,
            smtp_port=int(os.getenv("MAILOSAUR_SMTP_PORT") or DEFAULT_SMTP_PORT),
            request_timeout=float(os.getenv("MAILOSAUR_TIMEOUT") or DEFAULT_REQUEST_TIMEOUT),
            wait_timeout=float(os.getenv("MAILOSAUR_WAIT_TIMEOUT") or DEFAULT_WAIT_TIMEOUT),
            poll_interval=float(os.getenv("MAILOSAUR_POLL_INTERVAL") or DEFAULT_POLL_INTERVAL),
        )


def default_server() -> str:
    """Server id used by the CLI and the integration fixtures when none is passed."""
    return os.getenv("MAILOSAUR_SERVER", "").strip()
