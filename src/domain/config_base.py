"""TOML loading helpers shared by team-strength system configs.

Every file in a config directory describes one named system. Parsers raise
plain ``ValueError`` messages; :func:`load_system_configs` prefixes them with
the offending file path so the caller never has to thread it through.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, TypeVar
import tomllib


@dataclass(frozen=True)
class BaseSystemConfig:
    """Name, description and source file of one configured system."""

    name: str
    description: str | None
    file_path: Path

    def as_config_json(self) -> dict[str, Any]:
        raise NotImplementedError


T = TypeVar("T", bound=BaseSystemConfig)
SystemParser = Callable[[dict[str, Any], str, str | None, Path], T]


def load_system_configs(
    config_dir: Path,
    parser: SystemParser[T],
    *,
    duplicate_name_label: str = "rating",
) -> list[T]:
    """Parse every ``*.toml`` file in ``config_dir``, sorted by file name.

    ``parser`` receives the raw table, the ``[system]`` name and description,
    and the file path.
    """
    if not config_dir.exists():
        raise FileNotFoundError(f"Config directory not found: {config_dir}")
    if not config_dir.is_dir():
        raise NotADirectoryError(f"Config path is not a directory: {config_dir}")

    config_files = sorted(config_dir.glob("*.toml"))
    if not config_files:
        raise ValueError(f"No .toml config files found in: {config_dir}")

    systems = [_load_file(file_path, parser) for file_path in config_files]

    names = [system.name for system in systems]
    duplicates = sorted({name for name in names if names.count(name) > 1})
    if duplicates:
        raise ValueError(
            f"Duplicate {duplicate_name_label} system names found in {config_dir}: {duplicates}"
        )
    return systems


def _load_file(file_path: Path, parser: SystemParser[T]) -> T:
    with file_path.open("rb") as file:
        try:
            raw = tomllib.load(file)
        except tomllib.TOMLDecodeError as exc:
            raise ValueError(f"{file_path}: invalid TOML: {exc}") from exc

    try:
        name, description = parse_system_metadata(raw)
        return parser(raw, name, description, file_path)
    except ValueError as exc:
        if str(exc).startswith(f"{file_path}:"):
            raise
        raise ValueError(f"{file_path}: {exc}") from exc


def find_system_config(systems: Iterable[T], name: str, *, label: str, config_dir: Path) -> T:
    for system in systems:
        if system.name == name:
            return system
    raise ValueError(f"No {label} system named {name!r} in {config_dir}")


def parse_system_metadata(raw: dict[str, Any]) -> tuple[str, str | None]:
    """Read the shared [system] table."""
    system_raw = raw.get("system", {})

    name = str(system_raw.get("name", "")).strip()
    if not name:
        raise ValueError("[system].name is required")

    description_value = system_raw.get("description")
    description = None if description_value is None else str(description_value)
    return name, description


def require_table(raw: dict[str, Any], key: str, *, section: str) -> dict[str, Any]:
    value = raw.get(key)
    if not isinstance(value, dict):
        raise ValueError(f"[{section}.{key}] table is required")
    return value


def read_int(raw: dict[str, Any], key: str, default: int, *, section: str) -> int:
    """Read an integer setting, rejecting booleans and fractional numbers."""
    value = raw.get(key, default)
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValueError(f"[{section}].{key} must be an integer, got {value!r}")
    if isinstance(value, float) and not value.is_integer():
        raise ValueError(f"[{section}].{key} must be an integer, got {value!r}")
    return int(value)


__all__ = [
    "BaseSystemConfig",
    "find_system_config",
    "load_system_configs",
    "parse_system_metadata",
    "read_int",
    "require_table",
]
