"""
Global option table - Options every command accepts
Static descriptive data; values are looked up through cmdkit.core.context.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


@dataclass(frozen=True)
class OptionSpec:
    name: str
    description: str
    short_form: Optional[str] = None
    example_value: Optional[str] = None
    # Context key the value is mirrored into (e.g. VERBOSE)
    context: Optional[str] = None
    never_propagate: bool = False
    propagate_cli_value: bool = False
    hidden: bool = False
    merge_pathlist: bool = False
    brief: bool = False

    @property
    def is_flag(self) -> bool:
        return self.example_value is None

    def flags(self) -> str:
        """Help-style flag string, e.g. '-r <path>, --root=<path>'."""
        parts = []
        if self.short_form:
            short = f"-{self.short_form}"
            if not self.is_flag:
                short += f" <{self.example_value}>"
            parts.append(short)
        long = f"--{self.name}"
        if not self.is_flag:
            long += f"=<{self.example_value}>"
        parts.append(long)
        return ", ".join(parts)


_GLOBAL_OPTIONS = [
    # Brief set
    OptionSpec('root', "Project root directory to operate in.", 'r', 'path',
               context='ROOT', propagate_cli_value=True, brief=True),
    OptionSpec('uri', "URI of the site to use.", 'l', 'http://example.com:8888',
               context='URI', propagate_cli_value=True, brief=True),
    OptionSpec('verbose', "Display extra information about the command.", 'v',
               context='VERBOSE', brief=True),
    OptionSpec('debug', "Display even more information, including timing and memory usage.", 'd',
               context='DEBUG', brief=True),
    OptionSpec('yes', "Assume 'yes' as answer to all prompts.", 'y',
               context='AFFIRMATIVE', brief=True),
    OptionSpec('no', "Assume 'no' as answer to all prompts.", 'n',
               context='NEGATIVE', brief=True),
    OptionSpec('simulate', "Simulate all relevant actions (don't actually change the system).", 's',
               context='SIMULATE', never_propagate=True, brief=True),
    OptionSpec('pipe', "Emit a compact representation of the command for scripting.", 'p',
               context='PIPE', brief=True),
    OptionSpec('help', "This help system.", 'h', brief=True),

    # Full set
    OptionSpec('version', "Show version and exit."),
    OptionSpec('quiet', "Suppress non-error messages.", 'q', context='QUIET'),
    OptionSpec('nocolor', "Suppress color highlighting on log messages.", context='NOCOLOR'),
    OptionSpec('columns', "Terminal width used to wrap log messages.", example_value='80',
               context='COLUMNS'),
    OptionSpec('interactive', "Force interactive mode for commands run on multiple targets."),
    OptionSpec('include', "A list of additional directory paths to search for commands.", 'i',
               '/path/dir', merge_pathlist=True),
    OptionSpec('config', "Specify an additional config file to load.", 'c', '/path/file',
               merge_pathlist=True),
    OptionSpec('user', "Specify a user to log in as. May be a name or a number.", 'u', 'name_or_number'),
    OptionSpec('backend', "Hide all output and return structured data.", 'b', hidden=True,
               never_propagate=True),
    OptionSpec('choice', "Provide an answer to a multiple-choice prompt.", example_value='number'),
    OptionSpec('search-depth', "Control the depth that commands search for configuration files.",
               example_value='number'),
    OptionSpec('no-label', "Remove the target label when executing on multiple targets."),
    OptionSpec('label-separator', "Specify the separator to use between the label and the output.",
               example_value=':'),
    OptionSpec('confirm-rollback', "Wait for confirmation before doing a rollback when something goes wrong."),
    OptionSpec('tty', "Create a tty for remote commands.", hidden=True),
    OptionSpec('haltonerror', "When used with the log, halts execution on errors of any severity.",
               hidden=True),
    OptionSpec('show-invoke', "Show all function names which could have been called for the current command."),
    OptionSpec('strict', "Return an error on unrecognized options.", example_value='0|1'),
    OptionSpec('alias-path', "Specifies the list of paths where alias files will be searched for.",
               example_value='/path/alias1:/path/alias2', merge_pathlist=True),
    OptionSpec('backup-location', "Specifies the directory where backups will be stored.",
               example_value='/path/to/dir'),
    OptionSpec('local', "Don't look in global locations for commandfiles, config, and aliases."),
    OptionSpec('log-dir', "Directory where log recordings are written.", example_value='/path/to/dir',
               context='LOG_DIR'),
]


def get_global_options(brief: bool = False) -> Dict[str, OptionSpec]:
    """
    Return the global option table.

    Args:
        brief: Only the core options

    Returns:
        Option name -> OptionSpec, in table order
    """
    return {spec.name: spec for spec in _GLOBAL_OPTIONS if spec.brief or not brief}


def short_form_map() -> Dict[str, str]:
    return {spec.short_form: spec.name for spec in _GLOBAL_OPTIONS if spec.short_form}


def get_option_spec(name: str) -> Optional[OptionSpec]:
    """Look up an option by long name or short form (leading dashes are ignored)."""
    key = name.lstrip('-')
    options = get_global_options()
    if key in options:
        return options[key]
    long_name = short_form_map().get(key)
    return options.get(long_name) if long_name else None


def option_help_rows(brief: bool = False) -> List[Tuple[str, str]]:
    return [(spec.flags(), spec.description)
            for spec in get_global_options(brief).values() if not spec.hidden]
