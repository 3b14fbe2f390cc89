"""
Configuration management using YAML files and dataclasses.

This module defines all configuration dataclasses and provides loading
from YAML files with defaults. Configuration sections:
- SubscriptionConfig: Policy given to newly added subscriptions
- StateConfig: Where subscription state lives and how much history it keeps
- SessionConfig: Summary log rotation between sessions
- LoggingConfig: Logging behavior
- AppConfig: Root configuration container
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import yaml

from .core.subscription import DEFAULT_DIRECTORY


@dataclass
class SubscriptionConfig:
    """Defaults applied to newly added subscriptions.

    Attributes:
        backlog_limit: Intake cap per merge; 0 skips the backlog on first sync,
            None takes every new item
        use_title_as_filename: Whether downloads are named after item titles
        default_directory: Placeholder directory when none is given
    """

    backlog_limit: int | None = 0
    use_title_as_filename: bool = False
    default_directory: str = DEFAULT_DIRECTORY


@dataclass
class StateConfig:
    """Configuration for persisted subscription state.

    Attributes:
        path: Path of the MessagePack state file
        retention: Maximum number of seen entries kept per feed, None for unbounded
    """

    path: str = "subscriptions.msgpack"
    retention: int | None = None


@dataclass
class SessionConfig:
    """Configuration for session boundaries.

    Attributes:
        keep_history: Summary records carried over from earlier sessions,
            None to keep all
    """

    keep_history: int | None = 200


@dataclass
class LoggingConfig:
    """Configuration for logging behavior.

    Attributes:
        level: Logging level ("DEBUG", "INFO", "WARNING", "ERROR")
        console: Whether to log to console
        file: Whether to log to file
        format: Log file format ("jsonl" or "plain")
        filename: Name of the log file
    """

    level: str = "INFO"
    console: bool = True
    file: bool = False
    format: str = "jsonl"
    filename: str = "feed_tracker.jsonl"


@dataclass
class AppConfig:
    """Root configuration container aggregating all config sections."""

    subscription: SubscriptionConfig = field(default_factory=SubscriptionConfig)
    state: StateConfig = field(default_factory=StateConfig)
    session: SessionConfig = field(default_factory=SessionConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: str | None) -> AppConfig:
    """Load configuration from a YAML file with defaults."""
    if not path:
        return AppConfig()

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    return _merge_config(AppConfig(), raw)


def _merge_config(base: AppConfig, raw: dict[str, Any]) -> AppConfig:
    """Merge raw YAML config into base AppConfig."""
    data = _asdict(base)
    for key, value in raw.items():
        if key not in data:
            continue
        if isinstance(value, dict) and isinstance(data[key], dict):
            data[key].update({k: v for k, v in value.items() if k in data[key]})
        else:
            data[key] = value
    return _fromdict(data)


def _asdict(cfg: AppConfig) -> dict[str, Any]:
    """Convert AppConfig to nested dictionary."""
    return {
        "subscription": {
            "backlog_limit": cfg.subscription.backlog_limit,
            "use_title_as_filename": cfg.subscription.use_title_as_filename,
            "default_directory": cfg.subscription.default_directory,
        },
        "state": {
            "path": cfg.state.path,
            "retention": cfg.state.retention,
        },
        "session": {
            "keep_history": cfg.session.keep_history,
        },
        "logging": {
            "level": cfg.logging.level,
            "console": cfg.logging.console,
            "file": cfg.logging.file,
            "format": cfg.logging.format,
            "filename": cfg.logging.filename,
        },
    }


def _fromdict(data: dict[str, Any]) -> AppConfig:
    """Reconstruct AppConfig from nested dictionary."""
    return AppConfig(
        subscription=SubscriptionConfig(**data["subscription"]),
        state=StateConfig(**data["state"]),
        session=SessionConfig(**data["session"]),
        logging=LoggingConfig(**data["logging"]),
    )
