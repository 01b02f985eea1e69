#!/usr/bin/env python3
"""
Configuration Management for the Finance Dashboard

Environment-driven settings, read once per process after loading a local
``.env`` file. Every setting has a default, so an empty environment gives a
working development setup under ``./data``.

Environment variables:
- FINDASH_ENV: development | test | production
- FINDASH_DATA_DIR: root for workspaces and reports
- FINDASH_WORKSPACE: workspace used when a command names none
- FINDASH_CSV_ENCODING: text encoding of imported CSV files
- FINDASH_DATE_FORMATS: extra strptime formats, separated by "|"
- FINDASH_ALERT_WINDOW_DAYS: look-ahead for bill and reminder alerts
- FINDASH_RECENT_TRANSACTIONS: rows in the recent-transactions listing
- LOG_LEVEL, DEBUG
"""

import logging
import os
import tempfile
from dataclasses import asdict, dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

from .dates import DEFAULT_DATE_FORMATS

# Load environment variables from .env file
load_dotenv()


class Environment(Enum):
    """Application environment types."""

    DEVELOPMENT = "development"
    TEST = "test"
    PRODUCTION = "production"


@dataclass
class StorageConfig:
    """Where workspaces are kept between CLI invocations."""

    workspace_dir: Path
    default_workspace: str = "default"


@dataclass
class IngestConfig:
    """CSV ingestion settings."""

    encoding: str = "utf-8-sig"
    date_formats: tuple[str, ...] = field(default_factory=lambda: DEFAULT_DATE_FORMATS)


@dataclass
class AnalysisConfig:
    """Analysis and reporting settings."""

    output_dir: Path
    alert_window_days: int = 7
    recent_transactions: int = 10


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from e


def _env_flag(name: str) -> bool:
    return os.getenv(name, "false").strip().lower() in ("1", "true", "yes")


def _split_formats(value: str | None) -> tuple[str, ...]:
    if not value:
        return ()
    return tuple(item.strip() for item in value.split("|") if item.strip())


def _resolve_data_dir(env: Environment) -> Path:
    configured = os.getenv("FINDASH_DATA_DIR")
    if configured:
        return Path(configured).expanduser().resolve()
    if env == Environment.TEST:
        return Path(tempfile.gettempdir()) / "test_findash"
    return Path("./data").resolve()


@dataclass
class Config:
    """
    Main configuration for the finance dashboard.

    Directory layout under ``data_dir``:
        workspaces/   one JSON document per workspace
        reports/      exported summary reports
    """

    environment: Environment
    data_dir: Path
    output_dir: Path

    storage: StorageConfig
    ingest: IngestConfig
    analysis: AnalysisConfig

    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls) -> "Config":
        """Create configuration from environment variables, creating directories."""
        env = Environment(os.getenv("FINDASH_ENV", "development"))
        data_dir = _resolve_data_dir(env)
        output_dir = data_dir / "reports"
        workspace_dir = data_dir / "workspaces"

        for directory in (data_dir, output_dir, workspace_dir):
            directory.mkdir(parents=True, exist_ok=True)

        extra_formats = _split_formats(os.getenv("FINDASH_DATE_FORMATS"))

        return cls(
            environment=env,
            data_dir=data_dir,
            output_dir=output_dir,
            storage=StorageConfig(
                workspace_dir=workspace_dir,
                default_workspace=os.getenv("FINDASH_WORKSPACE", "default").strip(),
            ),
            ingest=IngestConfig(
                encoding=os.getenv("FINDASH_CSV_ENCODING", "utf-8-sig"),
                date_formats=DEFAULT_DATE_FORMATS + extra_formats,
            ),
            analysis=AnalysisConfig(
                output_dir=output_dir,
                alert_window_days=_env_int("FINDASH_ALERT_WINDOW_DAYS", 7),
                recent_transactions=_env_int("FINDASH_RECENT_TRANSACTIONS", 10),
            ),
            debug=_env_flag("DEBUG"),
            log_level=os.getenv("LOG_LEVEL", "INFO").strip().upper(),
        )

    def validate(self) -> list[str]:
        """Return a list of configuration problems; empty when valid."""
        errors = []

        for name, path in (
            ("data_dir", self.data_dir),
            ("output_dir", self.output_dir),
            ("workspace_dir", self.storage.workspace_dir),
        ):
            if not path.is_dir():
                errors.append(f"{name} does not exist: {path}")

        if not self.storage.default_workspace:
            errors.append("FINDASH_WORKSPACE must not be blank")

        try:
            "".encode(self.ingest.encoding)
        except LookupError:
            errors.append(f"Unknown CSV encoding: {self.ingest.encoding}")

        if self.analysis.alert_window_days < 0:
            errors.append("Alert window days must be non-negative")
        if self.analysis.recent_transactions <= 0:
            errors.append("Recent transaction count must be positive")

        if not isinstance(logging.getLevelName(self.log_level), int):
            errors.append(f"Unknown LOG_LEVEL: {self.log_level}")

        return errors

    def setup_logging(self) -> None:
        """Configure root logging for the environment."""
        level = logging.DEBUG if self.debug else getattr(logging, self.log_level, logging.INFO)

        if self.environment == Environment.DEVELOPMENT:
            format_str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        else:
            format_str = "%(asctime)s - %(levelname)s - %(message)s"

        logging.basicConfig(level=level, format=format_str, datefmt="%Y-%m-%d %H:%M:%S")
        logging.getLogger("findash").setLevel(level)

    def to_dict(self) -> dict[str, Any]:
        """JSON-friendly view: paths and enums as strings, tuples as lists."""

        def plain(value: Any) -> Any:
            if isinstance(value, Path):
                return str(value)
            if isinstance(value, Enum):
                return value.value
            if isinstance(value, (list, tuple)):
                return [plain(item) for item in value]
            if isinstance(value, dict):
                return {key: plain(item) for key, item in value.items()}
            return value

        # asdict keeps Path and Enum instances, so convert afterwards
        return plain(asdict(self))


_config: Config | None = None


def get_config() -> Config:
    """
    Get the process-wide configuration, loading it on first use.

    Raises:
        ValueError: If the environment produces an invalid configuration
    """
    global _config
    if _config is None:
        config = Config.from_environment()

        errors = config.validate()
        if errors:
            raise ValueError(f"Configuration validation failed: {'; '.join(errors)}")

        config.setup_logging()
        _config = config

    return _config


def reload_config() -> Config:
    """Discard the cached configuration and load it again from the environment."""
    global _config
    _config = None
    return get_config()


def get_data_dir() -> Path:
    return get_config().data_dir


def get_output_dir() -> Path:
    return get_config().output_dir


def is_development() -> bool:
    return get_config().environment == Environment.DEVELOPMENT


def is_test() -> bool:
    return get_config().environment == Environment.TEST


def is_production() -> bool:
    return get_config().environment == Environment.PRODUCTION
