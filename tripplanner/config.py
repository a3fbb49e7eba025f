"""
Process configuration for the trip plan backend.

Configuration is read once at startup into an immutable PlannerConfig and
passed explicitly to the app factory and the plan service.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


class ConfigurationError(Exception):
    """Raised when required process configuration is missing or invalid."""

    pass


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes")


@dataclass(frozen=True)
class PlannerConfig:
    """
    Configuration for the plan backend.

    Attributes:
        api_key: Credential for the completion API (required)
        model: Completion model identifier
        timeout_seconds: Per-call timeout for the completion API
        max_retries: Additional attempts on rate-limit/unavailable errors
        retry_backoff_seconds: Base backoff; attempt n waits n * base seconds
        port: HTTP port for the dev server
        environment: Deployment environment name ("development" shows error detail)
        log_level: Root log level name
        log_json: Emit JSON log lines instead of the text format
        log_file: Optional path of a log file written alongside stdout
    """

    api_key: str
    model: str = "gpt-5-nano"
    timeout_seconds: float = 60.0
    max_retries: int = 2
    retry_backoff_seconds: float = 2.0
    port: int = 3000
    environment: str = "production"
    log_level: str = "INFO"
    log_json: bool = False
    log_file: Optional[str] = None

    @property
    def is_development(self) -> bool:
        return self.environment.lower() == "development"

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "PlannerConfig":
        """
        Build a config from environment variables.

        Args:
            env: Mapping to read from. Defaults to os.environ.

        Returns:
            Populated PlannerConfig

        Raises:
            ConfigurationError: If OPENAI_API_KEY is missing or a numeric
                variable cannot be parsed.
        """
        if env is None:
            env = os.environ

        api_key = env.get("OPENAI_API_KEY", "").strip()
        if not api_key:
            raise ConfigurationError(
                "OPENAI_API_KEY environment variable is not set. "
                "Please set it to your OpenAI API key."
            )

        try:
            return cls(
                api_key=api_key,
                model=env.get("OPENAI_MODEL", cls.model),
                timeout_seconds=float(env.get("OPENAI_TIMEOUT_SECONDS", cls.timeout_seconds)),
                max_retries=int(env.get("PLAN_MAX_RETRIES", cls.max_retries)),
                retry_backoff_seconds=float(
                    env.get("PLAN_RETRY_BACKOFF_SECONDS", cls.retry_backoff_seconds)
                ),
                port=int(env.get("PORT", cls.port)),
                environment=env.get("APP_ENV", cls.environment),
                log_level=env.get("LOG_LEVEL", cls.log_level).upper(),
                log_json=_parse_bool(env.get("LOG_JSON", "false")),
                log_file=env.get("LOG_FILE", "").strip() or None,
            )
        except ValueError as e:
            raise ConfigurationError(f"Invalid numeric configuration value: {e}") from e
