"""
Configuration module for codepack.

Supports loading from YAML/JSON files with environment variable overrides.
Default values are loaded from defaults.yaml for maintainability.
"""

import json
import logging
import os
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any, Optional

import yaml

from codepack.core.errors import ConfigError

logger = logging.getLogger(__name__)

# Path to the default configuration file
_DEFAULTS_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"

# Cache for default values
_defaults_cache: dict[str, Any] | None = None


def _load_defaults() -> dict[str, Any]:
    """Load default configuration values from defaults.yaml."""
    global _defaults_cache

    if _defaults_cache is not None:
        return _defaults_cache

    if not _DEFAULTS_CONFIG_PATH.exists():
        logger.warning(f"Defaults config not found: {_DEFAULTS_CONFIG_PATH}")
        _defaults_cache = {}
        return _defaults_cache

    try:
        content = _DEFAULTS_CONFIG_PATH.read_text(encoding="utf-8")
        _defaults_cache = yaml.safe_load(content) or {}
    except yaml.YAMLError as e:
        logger.error(f"Failed to parse defaults config: {e}")
        _defaults_cache = {}

    return _defaults_cache


def _get_default(section: str, key: str, fallback: Any = None) -> Any:
    """Get a default value from the defaults config."""
    defaults = _load_defaults()
    section_defaults = defaults.get(section) or {}
    value = section_defaults.get(key, fallback)
    # Lists are shared through the cache, hand out copies
    if isinstance(value, list):
        return list(value)
    return value


@dataclass
class InputConfig:
    """Limits applied while reading candidate files."""

    max_file_size: int = field(
        default_factory=lambda: _get_default("input", "max_file_size", 50 * 1024 * 1024)
    )


@dataclass
class IgnoreConfig:
    """Which ignore sources the walker consults."""

    use_gitignore: bool = field(default_factory=lambda: _get_default("ignore", "use_gitignore", True))
    use_dot_ignore: bool = field(
        default_factory=lambda: _get_default("ignore", "use_dot_ignore", True)
    )
    use_default_patterns: bool = field(
        default_factory=lambda: _get_default("ignore", "use_default_patterns", True)
    )
    custom_patterns: list[str] = field(
        default_factory=lambda: _get_default("ignore", "custom_patterns", [])
    )


@dataclass
class OutputConfig:
    """Per-file transform toggles and result-shaping parameters."""

    file_path: Optional[str] = field(
        default_factory=lambda: _get_default("output", "file_path", "codepack-output.xml")
    )
    truncate_base64: bool = field(
        default_factory=lambda: _get_default("output", "truncate_base64", False)
    )
    remove_comments: bool = field(
        default_factory=lambda: _get_default("output", "remove_comments", False)
    )
    remove_empty_lines: bool = field(
        default_factory=lambda: _get_default("output", "remove_empty_lines", False)
    )
    compress: bool = field(default_factory=lambda: _get_default("output", "compress", False))
    top_files_length: int = field(
        default_factory=lambda: _get_default("output", "top_files_length", 5)
    )
    # False disables the tree, True shows every entry, an int is a display threshold
    token_count_tree: bool | int = field(
        default_factory=lambda: _get_default("output", "token_count_tree", False)
    )
    sort_by_changes: bool = field(
        default_factory=lambda: _get_default("output", "sort_by_changes", False)
    )

    def token_tree_threshold(self) -> int | None:
        """Return the minimum token count to display, or None when the tree is off."""
        value = self.token_count_tree
        if value is True:
            return 0
        if value is False or value is None:
            return None
        if isinstance(value, int):
            return value if value > 0 else None
        return 0


@dataclass
class SecurityConfig:
    """Secret scanning settings."""

    enable_security_check: bool = field(
        default_factory=lambda: _get_default("security", "enable_security_check", True)
    )
    entropy_min_classes: int = field(
        default_factory=lambda: _get_default("security", "entropy_min_classes", 3)
    )
    entropy_min_unique_chars: int = field(
        default_factory=lambda: _get_default("security", "entropy_min_unique_chars", 10)
    )


@dataclass
class TokenCountConfig:
    """Tokenizer selection."""

    encoding: str = field(
        default_factory=lambda: _get_default("token_count", "encoding", "o200k_base")
    )


@dataclass
class ProcessingConfig:
    """Parallelism of the per-file map phase."""

    max_workers: int = field(default_factory=lambda: _get_default("processing", "max_workers", 4))


@dataclass
class LoggingConfig:
    """Configuration for logging."""

    level: str = field(default_factory=lambda: _get_default("logging", "level", "INFO"))
    format: str = field(
        default_factory=lambda: _get_default(
            "logging", "format", "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
        )
    )


_SECTIONS: dict[str, type] = {
    "input": InputConfig,
    "ignore": IgnoreConfig,
    "output": OutputConfig,
    "security": SecurityConfig,
    "token_count": TokenCountConfig,
    "processing": ProcessingConfig,
    "logging": LoggingConfig,
}


@dataclass
class PackConfig:
    """Main configuration class for codepack."""

    input: InputConfig = field(default_factory=InputConfig)
    ignore: IgnoreConfig = field(default_factory=IgnoreConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)
    token_count: TokenCountConfig = field(default_factory=TokenCountConfig)
    processing: ProcessingConfig = field(default_factory=ProcessingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    include: list[str] = field(default_factory=list)

    # Set programmatically by the caller, never read from config files
    cwd: Path = field(default_factory=Path.cwd)
    stdin_file_paths: list[Path] = field(default_factory=list)

    @classmethod
    def from_file(cls, path: Path | str) -> "PackConfig":
        """
        Load configuration from a YAML or JSON file.

        Args:
            path: Path to the configuration file (.yaml, .yml, or .json)

        Returns:
            PackConfig instance with loaded values

        Raises:
            FileNotFoundError: If the config file doesn't exist
            ConfigError: If the file format or content is unsupported
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        content = path.read_text(encoding="utf-8")

        try:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(content) or {}
            elif path.suffix == ".json":
                data = json.loads(content) if content.strip() else {}
            else:
                raise ConfigError(f"Unsupported config file format: {path.suffix}")
        except (yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigError(f"Failed to parse config file {path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a mapping at the top level")

        return cls._from_dict(data)

    @classmethod
    def _from_dict(cls, data: dict) -> "PackConfig":
        """Create PackConfig from a dictionary."""
        config = cls()

        for section, section_cls in _SECTIONS.items():
            if section not in data:
                continue
            try:
                setattr(config, section, section_cls(**(data[section] or {})))
            except TypeError as e:
                raise ConfigError(f"Invalid keys in config section '{section}': {e}") from e

        if "include" in data:
            include = data["include"] or []
            if not isinstance(include, list):
                raise ConfigError("'include' must be a list of glob patterns")
            config.include = [str(p) for p in include]

        return config

    def apply_env_overrides(self) -> "PackConfig":
        """
        Apply environment variable overrides to the configuration.

        Environment variables follow the pattern: CODEPACK_<SECTION>_<KEY>
        Examples:
            - CODEPACK_INPUT_MAX_FILE_SIZE
            - CODEPACK_OUTPUT_COMPRESS
            - CODEPACK_TOKEN_COUNT_ENCODING
            - CODEPACK_PROCESSING_MAX_WORKERS

        Returns:
            Self with environment overrides applied
        """
        env_mappings = {
            # Input config
            "CODEPACK_INPUT_MAX_FILE_SIZE": ("input", "max_file_size", int),
            # Ignore config
            "CODEPACK_IGNORE_USE_GITIGNORE": ("ignore", "use_gitignore", _parse_bool),
            "CODEPACK_IGNORE_USE_DOT_IGNORE": ("ignore", "use_dot_ignore", _parse_bool),
            "CODEPACK_IGNORE_USE_DEFAULT_PATTERNS": ("ignore", "use_default_patterns", _parse_bool),
            "CODEPACK_IGNORE_CUSTOM_PATTERNS": ("ignore", "custom_patterns", _parse_list),
            # Output config
            "CODEPACK_OUTPUT_FILE_PATH": ("output", "file_path", str),
            "CODEPACK_OUTPUT_TRUNCATE_BASE64": ("output", "truncate_base64", _parse_bool),
            "CODEPACK_OUTPUT_REMOVE_COMMENTS": ("output", "remove_comments", _parse_bool),
            "CODEPACK_OUTPUT_REMOVE_EMPTY_LINES": ("output", "remove_empty_lines", _parse_bool),
            "CODEPACK_OUTPUT_COMPRESS": ("output", "compress", _parse_bool),
            "CODEPACK_OUTPUT_TOP_FILES_LENGTH": ("output", "top_files_length", int),
            "CODEPACK_OUTPUT_TOKEN_COUNT_TREE": ("output", "token_count_tree", _parse_bool_or_int),
            "CODEPACK_OUTPUT_SORT_BY_CHANGES": ("output", "sort_by_changes", _parse_bool),
            # Security config
            "CODEPACK_SECURITY_ENABLE_SECURITY_CHECK": (
                "security",
                "enable_security_check",
                _parse_bool,
            ),
            # Token count config
            "CODEPACK_TOKEN_COUNT_ENCODING": ("token_count", "encoding", str),
            # Processing config
            "CODEPACK_PROCESSING_MAX_WORKERS": ("processing", "max_workers", int),
            # Logging config
            "CODEPACK_LOGGING_LEVEL": ("logging", "level", str),
        }

        for env_var, (section, key, converter) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                section_obj = getattr(self, section)
                try:
                    setattr(section_obj, key, converter(value))
                except ValueError as e:
                    raise ConfigError(f"Invalid value for {env_var}: {value!r}") from e

        return self

    def resolved_output_path(self) -> Path | None:
        """Absolute path of the output file, which the walker always excludes."""
        if not self.output.file_path:
            return None
        path = Path(self.output.file_path)
        if not path.is_absolute():
            path = Path(self.cwd) / path
        return path.resolve()

    def to_dict(self) -> dict:
        """Convert configuration to a dictionary."""
        data = asdict(self)
        data["cwd"] = str(self.cwd)
        data["stdin_file_paths"] = [str(p) for p in self.stdin_file_paths]
        return data

    def to_yaml(self) -> str:
        """Serialize configuration to YAML string."""
        return yaml.dump(self.to_dict(), default_flow_style=False, sort_keys=False)

    def to_json(self) -> str:
        """Serialize configuration to JSON string."""
        return json.dumps(self.to_dict(), indent=2)


def _parse_bool(value: str) -> bool:
    """Parse a string to boolean."""
    return value.lower() in ("true", "1", "yes", "on")


def _parse_bool_or_int(value: str) -> bool | int:
    """Parse a token tree setting: a boolean word or a threshold."""
    lowered = value.strip().lower()
    if lowered in ("true", "yes", "on"):
        return True
    if lowered in ("false", "no", "off", ""):
        return False
    return int(lowered)


def _parse_list(value: str) -> list[str]:
    """Parse a comma separated list, dropping blanks."""
    return [item.strip() for item in value.split(",") if item.strip()]


def load_config(config_path: Optional[Path | str] = None, apply_env: bool = True) -> PackConfig:
    """
    Load configuration with optional environment variable overrides.

    Args:
        config_path: Optional path to config file. If None, uses defaults.
        apply_env: Whether to apply environment variable overrides.

    Returns:
        PackConfig instance
    """
    if config_path:
        config = PackConfig.from_file(config_path)
    else:
        config = PackConfig()

    if apply_env:
        config.apply_env_overrides()

    return config
