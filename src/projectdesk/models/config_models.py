"""Configuration models persisted to config.json."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field, field_validator


class BackendConfig(BaseModel):
    """Hosted backend connection settings."""

    url: str = Field(default="http://localhost:54321", description="Backend base URL")
    anon_key: str = Field(default="", description="Public (anon) API key")
    timeout: int = Field(default=30, ge=1)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("url cannot be empty")
        return v.strip().rstrip("/")


class UIConfig(BaseModel):
    """Terminal UI settings."""

    theme: Literal["textual-dark", "textual-light"] = Field(default="textual-dark")


class AppConfig(BaseModel):
    """Main projectdesk configuration."""

    backend: BackendConfig = Field(default_factory=BackendConfig)
    ui: UIConfig = Field(default_factory=UIConfig)
