"""Runtime configuration for convex-typegen - centralized configuration management."""

import copy
import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from convex_typegen.utils.constants import CONFIG_FILE_NAME
from convex_typegen.utils.logging import logger

DEFAULTS = {
    "paths": {
        "output": "./src/types/convex.ts",
        "convex_dir": "convex",
        "schema_file": "schema.ts",
        # Relative to convex_dir; written by `npx convex dev`
        "marker": "_generated/dataModel.d.ts",
    },
    "generation": {
        "import_path": "convex",
        "emit_hooks": True,
        "extensions": [".ts"],
    },
    "watch": {
        "debounce_ms": 300,
    },
}


def _coerce(value: str, default_value: Any) -> Any:
    """Convert an environment string to the type of ``default_value``."""
    if isinstance(default_value, bool):
        lowered = value.strip().lower()
        if lowered in ("1", "true", "yes", "on"):
            return True
        if lowered in ("0", "false", "no", "off"):
            return False
        raise ValueError(f"not a boolean: {value!r}")
    if isinstance(default_value, int):
        return int(value)
    if isinstance(default_value, list):
        return [v.strip() for v in value.split(",") if v.strip()]
    return value


def load_runtime_config(root: str = ".") -> dict[str, Any]:
    """
    Load runtime configuration from convex-typegen.json and environment variables.

    Config priority (highest to lowest):
    1. Environment variables (CONVEX_TYPEGEN_<SECTION>_<KEY>)
    2. <root>/convex-typegen.json
    3. Built-in defaults

    Args:
        root: Project root to look for the config file

    Returns:
        Configuration dictionary with merged values
    """
    cfg = copy.deepcopy(DEFAULTS)

    path = Path(root) / CONFIG_FILE_NAME
    try:
        if path.exists():
            with open(path, encoding="utf-8") as f:
                user = json.load(f)

            if isinstance(user, dict):
                for section in cfg:
                    if section in user and isinstance(user[section], dict):
                        for key, value in user[section].items():
                            if key in cfg[section] and isinstance(value, type(cfg[section][key])):
                                cfg[section][key] = value
    except (json.JSONDecodeError, OSError) as e:
        logger.warning(f"Could not load config file from {path}: {e}")
        logger.info("Continuing with default configuration")

    for section in cfg:
        for key in cfg[section]:
            env_var = f"CONVEX_TYPEGEN_{section.upper()}_{key.upper()}"
            if env_var in os.environ:
                value = os.environ[env_var]
                try:
                    cfg[section][key] = _coerce(value, cfg[section][key])
                except (ValueError, AttributeError) as e:
                    logger.warning(f"Invalid value for environment variable {env_var}: '{value}' - {e}")
                    logger.info(f"Using default value: {cfg[section][key]}")

    return cfg


@dataclass(frozen=True)
class GenerationConfig:
    """Resolved settings for one generation run."""

    root: Path
    output_path: Path
    convex_dir: Path
    schema_file: str
    marker_path: Path
    import_path: str
    emit_hooks: bool
    extensions: tuple[str, ...]
    debounce_ms: int

    @property
    def schema_path(self) -> Path:
        return self.convex_dir / self.schema_file


def config_from_mapping(cfg: dict[str, Any], root: str | Path = ".") -> GenerationConfig:
    """Resolve a configuration dictionary against the project root."""
    root_path = Path(root).resolve()
    paths = cfg["paths"]
    generation = cfg["generation"]
    convex_dir = root_path / paths["convex_dir"]
    return GenerationConfig(
        root=root_path,
        output_path=root_path / paths["output"],
        convex_dir=convex_dir,
        schema_file=paths["schema_file"],
        marker_path=convex_dir / paths["marker"],
        import_path=generation["import_path"],
        emit_hooks=bool(generation["emit_hooks"]),
        extensions=tuple(generation["extensions"]),
        debounce_ms=int(cfg["watch"]["debounce_ms"]),
    )


def load_generation_config(root: str = ".", overrides: dict[str, dict[str, Any]] | None = None) -> GenerationConfig:
    """Load the runtime configuration, apply per-invocation overrides, resolve paths.

    Args:
        root: Project root
        overrides: ``{section: {key: value}}``; None values are ignored

    Returns:
        Resolved GenerationConfig
    """
    cfg = load_runtime_config(root)
    for section, values in (overrides or {}).items():
        for key, value in values.items():
            if value is not None:
                cfg[section][key] = value
    return config_from_mapping(cfg, root)
