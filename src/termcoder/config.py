"""Environment configuration for termcoder."""

import os
from collections.abc import Mapping
from typing import Literal

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, Field

from termcoder.agents.exceptions import ConfigError

Provider = Literal["anthropic", "openai"]

PROVIDERS: tuple[Provider, ...] = ("anthropic", "openai")
DEFAULT_PROVIDER: Provider = "anthropic"
DEFAULT_MODELS: dict[str, str] = {
    "anthropic": "claude-sonnet-4-5-20250929",
    "openai": "gpt-4o-mini",
}

DEFAULT_EXCLUDES = (
    "node_modules/**",
    ".git/**",
    "dist/**",
    "build/**",
    "*.log",
)


class EditPolicy(BaseModel):
    """Thresholds used by the edit validator."""

    model_config = ConfigDict(frozen=True)

    max_file_chars: int = Field(default=500_000, gt=0)
    max_line_chars: int = Field(default=2_000, gt=0)


class SearchDefaults(BaseModel):
    """Defaults applied when a grep or glob request leaves a limit unset."""

    model_config = ConfigDict(frozen=True)

    context_lines: int = Field(default=2, ge=0)
    max_results: int = Field(default=100, ge=1)
    glob_max_results: int = Field(default=1_000, ge=1)
    default_excludes: tuple[str, ...] = DEFAULT_EXCLUDES
    rg_command: str = "rg"
    rg_timeout: float = Field(default=30.0, gt=0)


class AssistantConfig(BaseModel):
    """Resolved configuration for the tool surface and the LLM runner."""

    model_config = ConfigDict(frozen=True)

    provider: Provider = DEFAULT_PROVIDER
    model: str = DEFAULT_MODELS[DEFAULT_PROVIDER]
    temperature: float = 0.2
    max_tokens: int = 4096
    max_steps: int = Field(default=10, ge=1)
    anthropic_api_key: str | None = None
    openai_api_key: str | None = None
    log_level: str = "WARNING"
    edit_policy: EditPolicy = Field(default_factory=EditPolicy)
    search: SearchDefaults = Field(default_factory=SearchDefaults)


def resolve_provider(
    explicit: str | None,
    anthropic_api_key: str | None,
    openai_api_key: str | None,
) -> Provider:
    """Pick the provider from explicit configuration, then from available keys."""
    if explicit:
        lower = explicit.strip().lower()
        if lower in PROVIDERS:
            return lower  # type: ignore[return-value]
    if anthropic_api_key:
        return "anthropic"
    if openai_api_key:
        return "openai"
    return DEFAULT_PROVIDER


def _get_str(env: Mapping[str, str], key: str) -> str | None:
    value = env.get(key)
    if value is None or not value.strip():
        return None
    return value.strip()


def _get_int(env: Mapping[str, str], key: str, default: int) -> int:
    value = _get_str(env, key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as e:
        raise ConfigError(f"{key} must be an integer, got {value!r}") from e


def _get_float(env: Mapping[str, str], key: str, default: float) -> float:
    value = _get_str(env, key)
    if value is None:
        return default
    try:
        return float(value)
    except ValueError as e:
        raise ConfigError(f"{key} must be a number, got {value!r}") from e


def load_config(env: Mapping[str, str] | None = None) -> AssistantConfig:
    """Build an AssistantConfig from environment variables.

    Args:
        env: Mapping to read instead of ``os.environ``. When omitted, a
            ``.env`` file in the working directory is loaded first.

    Raises:
        ConfigError: If a numeric variable cannot be parsed.
    """
    if env is None:
        load_dotenv()
        env = os.environ

    anthropic_api_key = _get_str(env, "ANTHROPIC_API_KEY")
    openai_api_key = _get_str(env, "OPENAI_API_KEY")
    provider = resolve_provider(
        _get_str(env, "AI_PROVIDER"), anthropic_api_key, openai_api_key
    )

    try:
        return AssistantConfig(
            provider=provider,
            model=_get_str(env, "AI_MODEL") or DEFAULT_MODELS[provider],
            temperature=_get_float(env, "AI_TEMPERATURE", 0.2),
            max_tokens=_get_int(env, "AI_MAX_TOKENS", 4096),
            max_steps=_get_int(env, "AI_MAX_STEPS", 10),
            anthropic_api_key=anthropic_api_key,
            openai_api_key=openai_api_key,
            log_level=(_get_str(env, "TERMCODER_LOG_LEVEL") or "WARNING").upper(),
            edit_policy=EditPolicy(
                max_file_chars=_get_int(env, "TERMCODER_MAX_FILE_CHARS", 500_000),
                max_line_chars=_get_int(env, "TERMCODER_MAX_LINE_CHARS", 2_000),
            ),
            search=SearchDefaults(
                rg_timeout=_get_float(env, "TERMCODER_RG_TIMEOUT", 30.0),
            ),
        )
    except ValueError as e:
        # pydantic.ValidationError subclasses ValueError
        raise ConfigError(f"Invalid configuration: {e}") from e
