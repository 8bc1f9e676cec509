"""
Configuration System

Manages configuration for MemFS with a layered approach.

Configuration Priority (highest to lowest):
    1. Programmatic (passed to FSConfig()) or config file
       (FSConfig.from_file, e.g. ./memfs.toml)
    2. Environment variables (MEMFS_* prefix)
    3. Built-in defaults

Modules:
    settings: FSConfig class
"""

from memfs.config.settings import FSConfig

__all__ = ["FSConfig"]
