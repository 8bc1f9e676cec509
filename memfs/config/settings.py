"""
FSConfig - Configuration Management

Sensible defaults with full override capability.

Example:
    >>> # Use defaults (reads from environment)
    >>> fs = MemoryFileSystem()

    >>> # Explicit configuration
    >>> config = FSConfig(batch_workers=2, default_dump_file="session.dump")
    >>> fs = MemoryFileSystem(config=config)

    >>> # From config file
    >>> config = FSConfig.from_file("./memfs.toml")

Environment Variables:
    MEMFS_BATCH_WORKERS - Worker threads for batch create/write/delete
    MEMFS_LOCK_TIMEOUT - Seconds to wait for a dump file lock
    MEMFS_DUMP_FILE - Dump file used by save/load without an argument
    MEMFS_LOG_LEVEL - Root log level for the CLI
"""

from __future__ import annotations

from pathlib import Path
from typing import Any, cast

# TOML support: tomllib is built-in for Python 3.11+, use tomli for 3.10
try:
    import tomllib

    def _load_toml(path: Path) -> dict[str, Any]:
        with open(path, "rb") as f:
            return cast(dict[str, Any], tomllib.load(f))

except ImportError:
    import tomli

    def _load_toml(path: Path) -> dict[str, Any]:
        with open(path, "rb") as f:
            return cast(dict[str, Any], tomli.load(f))


LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class FSConfig:
    """Configuration for MemFS."""

    # === Batch Configuration ===

    batch_workers: int = 8
    """Max worker threads for batch create/write/delete"""

    # === Persistence Configuration ===

    lock_timeout: float = 30.0
    """Seconds to wait for the dump file lock before giving up"""

    default_dump_file: str = "memfs.dump"
    """Dump file used by save/load when no file is given"""

    # === Shell Configuration ===

    prompt_suffix: str = "> "
    """Appended to the current directory to form the shell prompt"""

    log_level: str = "WARNING"
    """Log level for memfs loggers, one of LOG_LEVELS"""

    def __init__(self, **kwargs: Any) -> None:
        """
        Initialize configuration.

        Args:
            **kwargs: Override any configuration option
        """
        # Load from environment first
        self._load_from_env()

        # Apply explicit overrides
        for key, value in kwargs.items():
            if hasattr(self, key):
                setattr(self, key, value)
            else:
                raise ValueError(f"Unknown configuration option: {key}")

        if self.batch_workers < 1:
            raise ValueError("batch_workers must be a positive integer")

        self.log_level = str(self.log_level).upper()
        if self.log_level not in LOG_LEVELS:
            raise ValueError(
                f"log_level must be one of {', '.join(LOG_LEVELS)}, got {self.log_level!r}"
            )

    def _load_from_env(self) -> None:
        """Load configuration from environment variables."""
        import os

        if workers := os.getenv("MEMFS_BATCH_WORKERS"):
            self.batch_workers = int(workers)
        if timeout := os.getenv("MEMFS_LOCK_TIMEOUT"):
            self.lock_timeout = float(timeout)
        if dump_file := os.getenv("MEMFS_DUMP_FILE"):
            self.default_dump_file = dump_file
        if level := os.getenv("MEMFS_LOG_LEVEL"):
            self.log_level = level.upper()

    @classmethod
    def from_file(cls, path: str | Path) -> "FSConfig":
        """
        Load configuration from TOML file.

        Nested sections are flattened: keys under [batch] gain a "batch_" prefix,
        [persistence] and [shell] none, and [logging] level becomes log_level.

        Example TOML:
            [batch]
            workers = 4

            [persistence]
            lock_timeout = 5.0
            default_dump_file = "session.dump"

            [logging]
            level = "INFO"

        Args:
            path: Path to TOML configuration file

        Returns:
            FSConfig instance with values from file

        Raises:
            FileNotFoundError: If config file doesn't exist
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")

        data = _load_toml(path)

        flat_config: dict[str, Any] = {}

        # Map section names to config key prefixes
        section_mapping = {
            "batch": "batch_",
            "persistence": "",
            "shell": "",
            "logging": "log_",
        }

        for section, prefix in section_mapping.items():
            if section in data:
                for key, value in data[section].items():
                    flat_config[f"{prefix}{key}"] = value

        # Also support flat top-level keys
        for key, value in data.items():
            if key not in section_mapping and not isinstance(value, dict):
                flat_config[key] = value

        return cls(**flat_config)

    @classmethod
    def from_env(cls) -> "FSConfig":
        """Load configuration from environment variables only."""
        return cls()

    def to_file(self, path: str | Path) -> None:
        """
        Save configuration to TOML file.

        Args:
            path: Path to write TOML configuration file
        """
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)

        sections: dict[str, dict[str, str | int | float]] = {
            "batch": {
                "workers": self.batch_workers,
            },
            "persistence": {
                "lock_timeout": self.lock_timeout,
                "default_dump_file": self.default_dump_file,
            },
            "shell": {
                "prompt_suffix": self.prompt_suffix,
            },
            "logging": {
                "level": self.log_level,
            },
        }

        # Build TOML string manually (avoids extra dependency)
        lines = ["# MemFS Configuration", ""]

        for section_name, section_values in sections.items():
            lines.append(f"[{section_name}]")
            for key, value in section_values.items():
                if isinstance(value, str):
                    lines.append(f'{key} = "{value}"')
                else:
                    lines.append(f"{key} = {value}")
            lines.append("")

        path.write_text("\n".join(lines))

    def with_overrides(self, **kwargs: Any) -> "FSConfig":
        """Return new config with specified overrides."""
        new_config = FSConfig.__new__(FSConfig)
        for key in dir(self):
            if not key.startswith("_") and not callable(getattr(self, key)):
                setattr(new_config, key, getattr(self, key))
        for key, value in kwargs.items():
            if not hasattr(new_config, key):
                raise ValueError(f"Unknown configuration option: {key}")
            setattr(new_config, key, value)
        return new_config
