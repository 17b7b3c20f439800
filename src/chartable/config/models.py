"""Pydantic models for application configuration."""

from pathlib import Path
from typing import Optional

from pydantic import BaseModel, Field, model_validator


class AppConfig(BaseModel):
    """Configuration for the chartable server and CLI."""

    host: str = "127.0.0.1"
    port: int = Field(default=8080, ge=1, le=65535)
    debug: bool = False
    data_path: Optional[Path] = None
    data_url: str = ""
    default_page_size: int = Field(default=10, ge=1)
    max_page_size: int = Field(default=100, ge=1)
    request_timeout_s: float = Field(default=10.0, gt=0)

    @model_validator(mode="after")
    def _page_size_within_max(self) -> "AppConfig":
        if self.default_page_size > self.max_page_size:
            raise ValueError(
                f"default_page_size ({self.default_page_size}) exceeds "
                f"max_page_size ({self.max_page_size})"
            )
        return self
