"""Runtime settings read from the environment."""

import os

from pydantic import BaseModel, Field, ValidationError

DEFAULT_MODEL = "claude-3-7-sonnet-latest"
DEFAULT_MAX_TOKENS = 1024


class SettingsError(ValueError):
    """Raised when the environment does not describe usable settings."""


class MissingCredentialError(SettingsError):
    """Raised when the Anthropic API key is not configured."""


class AgentSettings(BaseModel):
    """Settings for the agent and its inference client."""

    api_key: str = Field(..., min_length=1, repr=False)
    model: str = DEFAULT_MODEL
    max_tokens: int = Field(default=DEFAULT_MAX_TOKENS, gt=0)
    system_prompt: str | None = None

    @classmethod
    def from_env(cls, environ: dict[str, str] | None = None) -> "AgentSettings":
        """Build settings from environment variables.

        Raises:
            MissingCredentialError: If ANTHROPIC_API_KEY is unset or empty
            SettingsError: If any other variable holds an invalid value
        """
        env = os.environ if environ is None else environ

        api_key = env.get("ANTHROPIC_API_KEY", "").strip()
        if not api_key:
            raise MissingCredentialError("ANTHROPIC_API_KEY environment variable not set.")

        raw_max_tokens = env.get("AGENT_MAX_TOKENS") or str(DEFAULT_MAX_TOKENS)
        try:
            max_tokens = int(raw_max_tokens)
        except ValueError as e:
            raise SettingsError(f"AGENT_MAX_TOKENS must be an integer, got '{raw_max_tokens}'.") from e

        try:
            return cls(
                api_key=api_key,
                model=env.get("AGENT_MODEL") or DEFAULT_MODEL,
                max_tokens=max_tokens,
                system_prompt=env.get("AGENT_SYSTEM_PROMPT") or None,
            )
        except ValidationError as e:
            problems = "; ".join(f"{'.'.join(map(str, err['loc']))}: {err['msg']}" for err in e.errors())
            raise SettingsError(f"invalid settings: {problems}") from e
