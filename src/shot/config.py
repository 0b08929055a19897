"""Shot configuration system.

Configuration is YAML-based with per-run CLI overrides (--output, --var).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.shot/config.yaml
3. ./shot.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

DEFAULT_SUFFIX = ".shot"

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class TemplateConfig:
    """Template resource configuration.

    Attributes:
        suffix: Filename suffix that marks a source as a template file
        search_paths: Directories searched for relative template names
        encoding: Text encoding of template files
    """

    suffix: str = DEFAULT_SUFFIX
    search_paths: list[str] = field(default_factory=lambda: ["."])
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        """Validate template configuration."""
        if not self.suffix.startswith(".") or len(self.suffix) < 2:
            raise ValueError(f"Template suffix must look like '.ext' (got {self.suffix!r})")


@dataclass
class OutputConfig:
    """Output configuration.

    Attributes:
        path: Default output file (None writes to stdout)
    """

    path: str | None = None


@dataclass
class ShotConfig:
    """Top-level Shot configuration.

    Attributes:
        templates: Template lookup settings
        output: Output destination
        locals: Default locals available to every render
    """

    templates: TemplateConfig = field(default_factory=TemplateConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    locals: dict[str, Any] = field(default_factory=dict)

    # Runtime overrides (set by CLI)
    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


def substitute_env_vars(value: Any) -> Any:
    """Substitute environment variables in config values.

    Supports ${VAR} syntax for environment variable substitution.
    Example: ${SITE_NAME} -> value of SITE_NAME

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted
    """
    if isinstance(value, str):
        pattern = re.compile(r"\$\{([^}]+)\}")

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return pattern.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Search order:
    1. ./.shot/config.yaml
    2. ./shot.yaml

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    if start_path is None:
        start_path = Path.cwd()

    start_path = start_path.resolve()

    candidates = [
        start_path / ".shot" / "config.yaml",
        start_path / "shot.yaml",
    ]

    for candidate in candidates:
        if candidate.exists():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> ShotConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        ShotConfig instance
    """
    data = substitute_env_vars(data)

    config = ShotConfig()

    if "templates" in data:
        templates_data = data["templates"] or {}
        search_paths = templates_data.get("search_paths", config.templates.search_paths)
        if isinstance(search_paths, str):
            search_paths = [search_paths]
        config.templates = TemplateConfig(
            suffix=templates_data.get("suffix", config.templates.suffix),
            search_paths=[str(p) for p in search_paths],
            encoding=templates_data.get("encoding", config.templates.encoding),
        )

    if "output" in data:
        output_data = data["output"] or {}
        config.output = OutputConfig(path=output_data.get("path"))

    if "locals" in data:
        locals_data = data["locals"] or {}
        if not isinstance(locals_data, dict):
            raise ValueError("'locals' must be a mapping of names to values")
        config.locals = dict(locals_data)

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> ShotConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        ShotConfig instance

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is not None:
        with open(found_path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
        config = load_config_from_dict(data)
        config._config_path = found_path
    else:
        config = ShotConfig()

    return config


def create_default_config() -> str:
    """Create default configuration YAML content.

    Returns:
        YAML string with default configuration and comments
    """
    return '''# Shot Configuration

# Template lookup
templates:
  suffix: ".shot"        # Sources ending with this suffix are read from files
  search_paths:          # Searched in order for relative template names
    - ".shot/templates"
    - "."
  encoding: "utf-8"

# Output settings
output:
  path: null             # Default output file (null writes to stdout)

# Default locals available to every render (overridden by --var)
locals:
  # site_name: "${SITE_NAME}"
'''
