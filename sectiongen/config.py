"""Configuration loading for sectiongen (.sectiongen.yml and CLI overrides)."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional
from urllib.parse import urlparse

import yaml

from .emitter import OutputLayout
from .errors import GeneratorError
from .postproc.formatter import FORMATTER_NAMES
from .schema.resolver import DEFAULT_MAX_DEPTH

CONFIG_FILENAME = ".sectiongen.yml"
DEFAULT_URL = "http://localhost:1337"
DEFAULT_FORMATTER = "tidy"
DEFAULT_PRETTIER_COMMAND = "prettier"
DEFAULT_TIMEOUT = 30.0


class ConfigError(GeneratorError):
    """Raised when the configuration file or options are invalid."""


@dataclass
class FileSettings:
    """Optional settings read from .sectiongen.yml."""

    url: Optional[str] = None
    formatter: Optional[str] = None
    prettier_command: Optional[str] = None
    templates_dir: Optional[Path] = None
    max_depth: Optional[int] = None
    timeout: Optional[float] = None


@dataclass(frozen=True)
class GeneratorConfig:
    """Immutable settings for one generation run."""

    component_id: str
    project_dir: Path
    url: str = DEFAULT_URL
    formatter: str = DEFAULT_FORMATTER
    prettier_command: str = DEFAULT_PRETTIER_COMMAND
    templates_dir: Optional[Path] = None
    max_depth: int = DEFAULT_MAX_DEPTH
    timeout: float = DEFAULT_TIMEOUT
    dry_run: bool = False

    @property
    def layout(self) -> OutputLayout:
        return OutputLayout(self.project_dir)


def load_file_settings(config_path: Path, *, required: bool = False) -> FileSettings:
    """Read ``config_path``; a missing file yields empty settings unless ``required``."""
    config_path = config_path.expanduser()
    if not config_path.exists():
        if required:
            raise ConfigError(f"Config file not found: {config_path}")
        return FileSettings()

    text = config_path.read_text(encoding="utf-8")
    if not text.strip():
        return FileSettings()
    try:
        data = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {config_path.name}: {exc}") from exc
    if data is None:
        return FileSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path.name} must contain a mapping at the root")

    templates_dir = _as_str(data.get("templates_dir"), "templates_dir")
    return FileSettings(
        url=_as_str(data.get("url"), "url"),
        formatter=_as_str(data.get("formatter"), "formatter"),
        prettier_command=_as_str(data.get("prettier_command"), "prettier_command"),
        templates_dir=(config_path.parent / templates_dir).resolve() if templates_dir else None,
        max_depth=_as_int(data.get("max_depth"), "max_depth"),
        timeout=_as_float(data.get("timeout"), "timeout"),
    )


def build_config(
    component_id: str,
    *,
    project_dir: str | Path = ".",
    config_path: Path | None = None,
    overrides: Dict[str, Any] | None = None,
    dry_run: bool = False,
) -> GeneratorConfig:
    """Merge CLI overrides over file settings over defaults.

    ``overrides`` values of ``None`` mean "not given on the command line".
    """
    root = Path(project_dir).expanduser().resolve()
    if config_path is not None:
        settings = load_file_settings(config_path, required=True)
    else:
        settings = load_file_settings(root / CONFIG_FILENAME)
    given = {key: value for key, value in (overrides or {}).items() if value is not None}

    formatter = str(given.get("formatter") or settings.formatter or DEFAULT_FORMATTER).lower()
    if formatter not in FORMATTER_NAMES:
        raise ConfigError(
            f"Unknown formatter '{formatter}'. Expected one of: {', '.join(FORMATTER_NAMES)}"
        )

    max_depth = given.get("max_depth", settings.max_depth)
    if max_depth is None:
        max_depth = DEFAULT_MAX_DEPTH
    if max_depth < 1:
        raise ConfigError("max_depth must be at least 1")

    timeout = given.get("timeout", settings.timeout)
    if timeout is None:
        timeout = DEFAULT_TIMEOUT
    if timeout <= 0:
        raise ConfigError("timeout must be positive")

    url = str(given.get("url") or settings.url or DEFAULT_URL).rstrip("/")
    parsed = urlparse(url)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ConfigError(f"CMS url must be an absolute http(s) URL, got '{url}'")

    templates_dir = given.get("templates_dir")
    if templates_dir is not None:
        templates_dir = Path(templates_dir).expanduser().resolve()
    else:
        templates_dir = settings.templates_dir
    if templates_dir is not None and not templates_dir.is_dir():
        raise ConfigError(f"Templates directory not found: {templates_dir}")

    return GeneratorConfig(
        component_id=component_id,
        project_dir=root,
        url=url,
        formatter=formatter,
        prettier_command=str(
            given.get("prettier_command") or settings.prettier_command or DEFAULT_PRETTIER_COMMAND
        ),
        templates_dir=templates_dir,
        max_depth=int(max_depth),
        timeout=float(timeout),
        dry_run=dry_run,
    )


def _as_str(value: Any, key: str) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, (str, int, float)) and not isinstance(value, bool):
        return str(value)
    raise ConfigError(f"'{key}' must be a string")


def _as_int(value: Any, key: str) -> Optional[int]:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            pass
    raise ConfigError(f"'{key}' must be an integer")


def _as_float(value: Any, key: str) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            pass
    raise ConfigError(f"'{key}' must be a number")


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_URL",
    "FileSettings",
    "GeneratorConfig",
    "build_config",
    "load_file_settings",
]
