"""Configuration loading for gotrim (.gotrim.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".gotrim.yml"

IMPORT_TOOLS = ("builtin", "goimports")


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class ImportsConfig:
    """Import group collapsing and organizing settings."""

    collapse: bool = True
    organize: bool = True
    remove_unused: bool = True
    local_prefix: Optional[str] = None
    tool: str = "builtin"


@dataclass
class GoTrimConfig:
    """Represents the settings defined in .gotrim.yml."""

    root: Path
    blocks: bool = True
    imports: ImportsConfig = field(default_factory=ImportsConfig)
    exclude_paths: List[str] = field(default_factory=list)


def load_config(config_path: Path) -> GoTrimConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return GoTrimConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    imports = ImportsConfig()
    imports_data = _as_dict(data.get("imports"))
    if imports_data:
        imports.collapse = _bool_or(imports_data.get("collapse"), imports.collapse)
        imports.organize = _bool_or(imports_data.get("organize"), imports.organize)
        imports.remove_unused = _bool_or(imports_data.get("remove_unused"), imports.remove_unused)
        imports.local_prefix = _as_str(imports_data.get("local_prefix"))
        tool = _as_str(imports_data.get("tool"))
        if tool is not None:
            if tool not in IMPORT_TOOLS:
                raise ConfigError(
                    f"Unknown imports.tool {tool!r}; expected one of {', '.join(IMPORT_TOOLS)}"
                )
            imports.tool = tool

    return GoTrimConfig(
        root=root,
        blocks=_bool_or(data.get("blocks"), True),
        imports=imports,
        exclude_paths=_as_str_list(data.get("exclude_paths")),
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Failed to read {path.name}: {exc}") from exc
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    if isinstance(value, bool):
        return None
    return str(value) if isinstance(value, (str, int, float)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "on", "1"}:
            return True
        if lowered in {"false", "no", "off", "0"}:
            return False
    return None


def _bool_or(value: Any, default: bool) -> bool:
    parsed = _as_bool(value)
    return default if parsed is None else parsed


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "GoTrimConfig", "ImportsConfig", "load_config"]
