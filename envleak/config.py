"""Configuration loading and management."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

DEFAULT_CONFIG_PATHS = [
    Path("envleak.yaml"),
    Path(".envleak.yaml"),
    Path.home() / ".envleak" / "config.yaml",
]


@dataclass(frozen=True)
class ScanSettings:
    """Filters applied while collecting the corpus."""

    allowed_extensions: frozenset[str]
    skip_dirs: frozenset[str]
    max_file_size: int = 1_000_000
    max_locations: int = 5


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from file.

    Args:
        config_path: Optional path to config file. If not provided,
                    searches default locations.

    Returns:
        Configuration dictionary, merged over the defaults.
    """
    paths_to_try = [config_path] if config_path else DEFAULT_CONFIG_PATHS

    for path in paths_to_try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                config = yaml.safe_load(f)
            if config is not None and not isinstance(config, dict):
                raise ValueError(f"{path}: top level must be a mapping")
            return merge_configs(get_default_config(), config or {})

    return get_default_config()


def get_default_config() -> dict[str, Any]:
    """Return default configuration."""
    return {
        "scan": {
            "allowed_extensions": [".py", ".rs", ".md", ".sh", ".toml"],
            "skip_dirs": [".git", "target", "node_modules", "build", "dist", ".venv"],
            "max_file_size": 1_000_000,
        },
        "report": {
            "max_locations": 5,
        },
        "tools": [
            {"name": "ruff format", "command": ["ruff", "format", "--check", "."]},
            {"name": "ruff check", "command": ["ruff", "check", "."]},
            {"name": "mypy", "command": ["mypy", "."]},
            {"name": "pytest", "command": ["pytest"]},
        ],
    }


def _section(config: dict[str, Any], name: str, defaults: dict[str, Any]) -> dict[str, Any]:
    """Return a config section; an empty section means defaults."""
    section = config.get(name) or defaults[name]
    if not isinstance(section, dict):
        raise ValueError(f"config section '{name}' must be a mapping")
    return section


def get_scan_settings(config: dict[str, Any] | None = None) -> ScanSettings:
    """Build corpus filters from a configuration dictionary.

    Args:
        config: Full configuration dictionary. Defaults are used when omitted.

    Returns:
        ScanSettings with extensions normalised to lower case with a leading dot.
    """
    defaults = get_default_config()
    config = config or defaults
    scan_config = _section(config, "scan", defaults)
    report_config = _section(config, "report", defaults)

    extensions = scan_config.get("allowed_extensions", defaults["scan"]["allowed_extensions"])
    normalized = frozenset(
        (ext if ext.startswith(".") else f".{ext}").lower() for ext in extensions
    )

    return ScanSettings(
        allowed_extensions=normalized,
        skip_dirs=frozenset(scan_config.get("skip_dirs", defaults["scan"]["skip_dirs"])),
        max_file_size=int(scan_config.get("max_file_size", defaults["scan"]["max_file_size"])),
        max_locations=int(
            report_config.get("max_locations", defaults["report"]["max_locations"])
        ),
    )


def get_tools(config: dict[str, Any]) -> list[tuple[str, list[str]]]:
    """Get the external check commands as (name, argv) pairs.

    Args:
        config: Full configuration dictionary.

    Returns:
        Tool list in configured order.
    """
    tools = config.get("tools", get_default_config()["tools"])
    return [(tool["name"], list(tool["command"])) for tool in tools]


def merge_configs(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge two configuration dictionaries.

    Args:
        base: Base configuration.
        override: Override configuration (takes precedence).

    Returns:
        Merged configuration.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = value

    return result
