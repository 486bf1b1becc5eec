"""Application configuration defaults."""

from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

APP_NAME = "local-search"


def _get_default_document_dir() -> Path:
    """Base directory holding the user's indexed documents."""
    return Path.home() / "Documents" / APP_NAME


def _get_default_index_path() -> Path:
    state_home = os.environ.get("XDG_STATE_HOME")
    base = Path(state_home) if state_home else Path.home() / ".local" / "state"
    return base / APP_NAME / "index.db"


def _get_default_config_path() -> Path:
    config_home = os.environ.get("XDG_CONFIG_HOME")
    base = Path(config_home) if config_home else Path.home() / ".config"
    return base / APP_NAME / "config.toml"


@dataclass(slots=True)
class AppConfig:
    document_directories: List[Path] = field(
        default_factory=lambda: [_get_default_document_dir()]
    )
    index_path: Path | None = None
    parallel: bool = True

    def __post_init__(self) -> None:
        if self.index_path is None:
            self.index_path = _get_default_index_path()

    def resolve_index_path(self, base_dir: Path | None = None) -> Path:
        if self.index_path is None:
            self.index_path = _get_default_index_path()
        if Path(self.index_path).is_absolute() or base_dir is None:
            return Path(self.index_path)
        return base_dir / self.index_path


def load_config(config_file: Path | None = None, *, document_base_dir: Path | None = None) -> AppConfig:
    """Read a TOML config file, falling back to defaults when it is absent.

    Relative ``document_directories`` entries are taken relative to the
    document base directory. Display settings in the file are ignored.
    """
    config_file = Path(config_file) if config_file is not None else _get_default_config_path()
    base_dir = document_base_dir or _get_default_document_dir()
    if not config_file.is_file():
        return AppConfig(document_directories=[base_dir])

    with config_file.open("rb") as handle:
        try:
            data = tomllib.load(handle)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"Invalid config file {config_file}: {exc}") from exc

    if "document_directories" not in data:
        raise ValueError(f"Missing document_directories in config file {config_file}")
    directories = [base_dir / Path(entry) for entry in data["document_directories"]]
    index_path = data.get("index_path")
    return AppConfig(
        document_directories=directories,
        index_path=Path(index_path).expanduser() if index_path else None,
        parallel=bool(data.get("parallel", True)),
    )
