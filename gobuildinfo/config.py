"""Runtime configuration — env-driven via pydantic-settings.

Reads from a .env file and GOBUILDINFO_* environment variables. CLI options
take precedence over these values.
"""

from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class BuildInfoSettings(BaseSettings):
    """Settings with environment variable overrides.

    Examples
    --------
    Override via environment::

        export GOBUILDINFO_BUILD_NAME=my-service
        export GOBUILDINFO_BUILD_NUMBER=42
        export GOBUILDINFO_LOG_LEVEL=DEBUG

    Or via .env file::

        GOBUILDINFO_STORE_PATH=/data/builds
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="GOBUILDINFO_",
        env_file_encoding="utf-8",
    )

    log_level: str = "INFO"

    # Build identification; collection is skipped unless both are set
    build_name: str = ""
    build_number: str = ""
    project: str = ""

    # Where build-info and partials are written
    store_path: Path = Path(".gobuildinfo/builds")

    # Go toolchain
    go_executable: str = "go"
    go_command_timeout: int | None = None


# Module-level singleton; import as `from gobuildinfo.config import settings`
settings = BuildInfoSettings()
