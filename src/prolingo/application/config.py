from pathlib import Path
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from prolingo.domain.constants import (
    DEFAULT_EASE_FACTOR,
    DEFAULT_MAX_QUEUE_SIZE,
    EASE_PENALTY,
    MASTERY_THRESHOLD,
    MIN_EASE_FACTOR,
    PRONUNCIATION_PASS_THRESHOLD,
)
from prolingo.domain.review.models import SchedulerParams

CONFIG_FILES = [
    Path(".config/prolingo/config.toml"),
    Path(".prolingo.toml"),
]


def _config_dir() -> Path:
    return Path.home() / ".config/prolingo"


class AppConfig(BaseSettings):
    """
    Configuration model for prolingo.
    Supports loading from:
    1. Environment variables (PROLINGO_*)
    2. Config file (~/.config/prolingo/config.toml or ~/.prolingo.toml)
    3. Manual overrides (CLI)
    """

    model_config = SettingsConfigDict(
        env_prefix="PROLINGO_",
        extra="ignore",
    )

    # Paths
    store_path: Path = Field(default_factory=lambda: _config_dir() / "reviews.yaml")
    log_dir: Path = Field(default_factory=lambda: _config_dir() / "logs")

    # Scheduler
    min_ease_factor: float = Field(default=MIN_EASE_FACTOR, gt=0)
    default_ease_factor: float = Field(default=DEFAULT_EASE_FACTOR, gt=0)
    ease_penalty: float = Field(default=EASE_PENALTY, ge=0)
    mastery_threshold: int = Field(default=MASTERY_THRESHOLD, ge=1)

    # Speech practice
    pronunciation_threshold: float = Field(default=PRONUNCIATION_PASS_THRESHOLD, ge=0, le=1)

    # Queue
    queue_limit: int = Field(default=DEFAULT_MAX_QUEUE_SIZE, ge=1)

    # Server
    server_host: str = "127.0.0.1"
    server_port: int = 8777

    verbose: int = 1

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        from pydantic_settings import TomlConfigSettingsSource

        # Find the first existing file
        toml_file = None
        for rel in CONFIG_FILES:
            candidate = Path.home() / rel
            if candidate.exists():
                toml_file = candidate
                break

        # Earlier sources win: CLI overrides, then env, then the TOML file.
        if toml_file:
            return (
                init_settings,
                env_settings,
                TomlConfigSettingsSource(settings_cls, toml_file=toml_file),
            )
        else:
            return (
                init_settings,
                env_settings,
            )

    @field_validator("store_path", "log_dir", mode="before")
    @classmethod
    def resolve_path(cls, v: Any) -> Path:
        return Path(v).expanduser().resolve()

    @model_validator(mode="after")
    def check_ease_bounds(self) -> "AppConfig":
        if self.default_ease_factor < self.min_ease_factor:
            raise ValueError(
                f"default_ease_factor ({self.default_ease_factor}) must not be below "
                f"min_ease_factor ({self.min_ease_factor})"
            )
        return self

    def scheduler_params(self) -> SchedulerParams:
        return SchedulerParams(
            min_ease_factor=self.min_ease_factor,
            default_ease_factor=self.default_ease_factor,
            ease_penalty=self.ease_penalty,
            mastery_threshold=self.mastery_threshold,
        )


def resolve_config(cli_overrides: dict[str, Any] | None = None) -> AppConfig:
    """
    Multi-layered configuration resolution.
    1. Defaults in AppConfig
    2. ~/.config/prolingo/config.toml (if exists)
    3. Environment variables (PROLINGO_*)
    4. cli_overrides (passed from Typer)
    """
    # Typer passes None for options the user did not set.
    overrides = {k: v for k, v in (cli_overrides or {}).items() if v is not None}
    return AppConfig(**overrides)
