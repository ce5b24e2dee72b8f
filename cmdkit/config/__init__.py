"""
Configuration module - Global option table and runtime settings
"""

from .options import (
    OptionSpec,
    get_global_options,
    get_option_spec,
    short_form_map,
    option_help_rows
)

from .settings import (
    Config,
    get_default_config,
    reset_default_config
)

__all__ = [
    'OptionSpec',
    'get_global_options',
    'get_option_spec',
    'short_form_map',
    'option_help_rows',
    'Config',
    'get_default_config',
    'reset_default_config',
]
