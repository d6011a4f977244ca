from __future__ import annotations

from pathlib import Path
from typing import Literal, Optional

from pydantic import Field  # type: ignore[import]
from pydantic_settings import BaseSettings, SettingsConfigDict  # type: ignore[import]

from git_insight.models import CommitStyle, StyleType


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", env_prefix="GIT_INSIGHT_", extra="ignore"
    )

    repo_path: Path = Field(default_factory=Path.cwd, description="Path to the Git repository to inspect")
    log_limit: int = Field(default=10, ge=1, description="Number of commits shown by the log command")

    message_style: StyleType = Field(default=StyleType.CONVENTIONAL)
    include_scope: bool = Field(default=True)
    include_footer: bool = Field(default=False)
    max_message_length: int = Field(default=72, ge=4)

    analysis_workers: Optional[int] = Field(default=None, ge=1, description="Thread pool size for file scoring")

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(default="WARNING")
    console_width: Optional[int] = Field(default=None, description="Override console width for Rich output")

    def commit_style(self) -> CommitStyle:
        return CommitStyle(
            type=self.message_style,
            include_scope=self.include_scope,
            include_footer=self.include_footer,
            max_length=self.max_message_length,
        )


settings = Settings()
