"""Exceptions for configuration and LLM agent operations."""


class AgentError(Exception):
    """Base exception for all agent operations."""


class ConfigError(AgentError):
    """Raised when environment configuration is malformed."""


class ProviderError(AgentError):
    """Raised when the selected LLM provider is unavailable or its call fails."""
