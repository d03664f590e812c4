"""Debug logging utility."""

import sys
from datetime import datetime

from cwwizard.utils.config import Config, get_wizard_dir

_config = None


def _get_config() -> Config:
    """Get cached config instance."""
    global _config
    if _config is None:
        _config = Config(get_wizard_dir())
    return _config


def reload_config():
    """Reload config (call after debug mode changes)."""
    global _config
    _config = None


def _log_to_file(line: str):
    """Append line to debug log file."""
    try:
        wizard_dir = get_wizard_dir()
        wizard_dir.mkdir(parents=True, exist_ok=True)
        log_path = wizard_dir / "debug.log"
        with open(log_path, "a") as f:
            f.write(line + "\n")
    except OSError:
        pass


def _emit(line: str):
    _log_to_file(line)
    try:
        print(line, file=sys.stderr)
    except BrokenPipeError:
        pass


def debug(category: str, message: str, **kwargs):
    """Log debug message if debug mode is enabled.

    Args:
        category: Category like 'prompt', 'aws', 'file'
        message: Debug message
        **kwargs: Additional key=value pairs to log
    """
    config = _get_config()
    if not config.debug:
        return

    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    extras = " ".join(f"{k}={v}" for k, v in kwargs.items()) if kwargs else ""
    line = f"[cwwizard:{category}] {timestamp} {message}"
    if extras:
        line += f" | {extras}"

    _emit(line)


def debug_prompt(message: str, **kwargs):
    """Log prompt-related debug message."""
    debug("prompt", message, **kwargs)


def debug_aws(message: str, **kwargs):
    """Log AWS lookup debug message."""
    debug("aws", message, **kwargs)


def debug_file(message: str, **kwargs):
    """Log config-file debug message."""
    debug("file", message, **kwargs)


def log_error(category: str, message: str, exc: Exception = None):
    """Log error message ALWAYS (even if debug mode is off).

    Args:
        category: Category like 'file', 'cli'
        message: Error message
        exc: Optional exception to include traceback
    """
    import traceback

    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S.%f")[:-3]
    line = f"[cwwizard:{category}] {timestamp} ERROR: {message}"

    if exc:
        tb = traceback.format_exception(type(exc), exc, exc.__traceback__)
        line += "\n" + "".join(tb)

    _emit(line)
