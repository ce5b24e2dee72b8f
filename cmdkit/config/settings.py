"""
Configuration Module
Runtime flags for cmdkit, read from constructor arguments or environment variables.
"""

import os
from pathlib import Path
from typing import Any, Dict, Optional


def _env_flag(name: str, default: bool = False) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ('1', 'true', 'yes', 'on')


class Config:
    """
    Runtime configuration.
    Every value can be passed to the constructor; otherwise it is read from the
    matching CMDKIT_* environment variable, otherwise a default is used.
    """

    def __init__(
        self,
        verbose: Optional[bool] = None,
        debug: Optional[bool] = None,
        quiet: Optional[bool] = None,
        simulate: Optional[bool] = None,
        nocolor: Optional[bool] = None,
        columns: Optional[int] = None,
        log_dir: Optional[Path] = None
    ):
        self.DEBUG = debug if debug is not None else _env_flag('CMDKIT_DEBUG')
        # Debug output includes everything verbose shows
        self.VERBOSE = (verbose if verbose is not None else _env_flag('CMDKIT_VERBOSE')) or self.DEBUG
        self.QUIET = quiet if quiet is not None else _env_flag('CMDKIT_QUIET')
        self.SIMULATE = simulate if simulate is not None else _env_flag('CMDKIT_SIMULATE')
        self.NOCOLOR = nocolor if nocolor is not None else _env_flag('CMDKIT_NOCOLOR')
        self.COLUMNS = columns or int(os.getenv('CMDKIT_COLUMNS', '80'))
        self.LOG_DIR = Path(log_dir) if log_dir else Path(os.getenv('CMDKIT_LOG_DIR', 'logs'))

    def as_context(self) -> Dict[str, Any]:
        """Context store keys and values for these settings."""
        return {
            'VERBOSE': self.VERBOSE,
            'DEBUG': self.DEBUG,
            'QUIET': self.QUIET,
            'SIMULATE': self.SIMULATE,
            'NOCOLOR': self.NOCOLOR,
            'COLUMNS': self.COLUMNS,
            'LOG_DIR': self.LOG_DIR,
        }

    def apply(self, store) -> None:
        """Write the settings into a ContextStore."""
        for key, value in self.as_context().items():
            store.set(key, value)


# Global configuration instance
config: Optional[Config] = None


def get_default_config() -> Config:
    """Get or create default configuration instance."""
    global config
    if config is None:
        config = Config()
    return config


def reset_default_config():
    global config
    config = None
