"""Pydantic configuration models for chatdeck.

For loading and environment expansion, see loader.py.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator, model_validator


class ProviderConfig(BaseModel):
    """One entry of the ordered provider chain."""

    kind: Literal["remote", "local"] = Field(description="Remote API model or local/on-device model")
    model: str | None = Field(
        default=None,
        description="Model identifier. Remote models use provider:model format (e.g., google_genai:gemini-2.0-flash)",
    )
    api_key: str | None = Field(default=None, description="API key for the model provider")
    base_url: str | None = Field(default=None, description="Endpoint for OpenAI-compatible local servers")
    temperature: float | None = Field(default=None, description="Model temperature")
    timeout_seconds: float = Field(default=60.0, description="Request timeout per attempt")
    include_history: bool = Field(
        default=False,
        description="Local models only: send prior turns as context, not just the new text",
    )
    label: str | None = Field(default=None, description="Display name used in the reply footer")

    model_config = {"extra": "allow"}

    @model_validator(mode="after")
    def validate_model(self) -> "ProviderConfig":
        """Remote providers need a model identifier."""
        if self.kind == "remote" and not self.model:
            raise ValueError("Remote providers require a 'model' identifier")
        return self


DEFAULT_LOCAL_BASE_URL = "http://localhost:11434/v1"


def default_providers() -> list[ProviderConfig]:
    """Default chain: newest remote models first, then a local fallback."""
    return [
        ProviderConfig(kind="remote", model="google_genai:gemini-2.0-flash"),
        ProviderConfig(kind="remote", model="google_genai:gemini-2.0-flash-lite-preview-02-05"),
        ProviderConfig(kind="remote", model="google_genai:gemini-flash-latest"),
        ProviderConfig(kind="remote", model="google_genai:gemini-pro-latest"),
        ProviderConfig(kind="local", model="gemma3", base_url=DEFAULT_LOCAL_BASE_URL),
    ]


class StoreConfig(BaseModel):
    """Configuration for the durable session store."""

    directory: Path = Field(
        default=Path("~/.chatdeck/store"),
        description="Directory holding the session index and per-session message files",
    )

    @field_validator("directory")
    @classmethod
    def expand_user(cls, v: Path) -> Path:
        """Expand a leading ~ to the user's home directory."""
        return v.expanduser()


class ChatConfig(BaseModel):
    """Conversation presentation settings."""

    default_title: str = Field(default="New conversation", description="Title of a freshly created session")
    title_prefix_length: int = Field(
        default=15, ge=1, description="Characters of the first message kept in the derived title"
    )
    title_suffix: str = Field(default="...", description="Appended to the truncated title")
    footer_template: str = Field(
        default="\n\nRunning on: {provider}",
        description="Appended to every successful reply; {provider} is the provider identifier",
    )
    error_template: str = Field(
        default="Failed.\n\n[Cause]: {cause}",
        description="Body of the diagnostic message stored when every provider fails",
    )


class LoggingConfig(BaseModel):
    """Configuration for logging system."""

    level: str = Field(default="INFO", description="Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)")
    directory: str = Field(default="logs", description="Directory for log files")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB before rotation")
    backup_count: int = Field(default=5, description="Number of backup log files to keep")
    console: bool = Field(default=False, description="Also log to stderr (interleaves with the chat)")


class Config(BaseModel):
    """Root configuration for chatdeck."""

    store: StoreConfig = Field(default_factory=StoreConfig, description="Durable store configuration")
    chat: ChatConfig = Field(default_factory=ChatConfig)
    providers: list[ProviderConfig] = Field(
        default_factory=default_providers,
        description="Ordered provider chain; the first non-empty reply wins",
    )
    logging: LoggingConfig = Field(default_factory=LoggingConfig, description="Logging configuration")

    model_config = {"extra": "allow"}
