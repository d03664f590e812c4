"""Custom exceptions for cwwizard.

This module defines a hierarchy of exceptions for different error types:
- WizardError: Base exception for all cwwizard errors
- ConfigFileError: Reading/writing the output config file (with optional path)
- PromptError: Prompt engine errors
- InvalidDefaultOptionError: Default menu index outside the menu
- PromptAbortedError: Input stream closed while waiting for an answer
"""

from pathlib import Path
from typing import Optional


class WizardError(Exception):
    """Base exception for all cwwizard errors.

    All cwwizard-specific exceptions inherit from this class, allowing
    callers to catch all wizard errors with a single except clause.
    """

    pass


class ConfigFileError(WizardError):
    """Output config file errors.

    Attributes:
        path: File the failed operation was working on, if known
    """

    def __init__(self, message: str, path: Optional[Path] = None):
        super().__init__(message)
        self.path = path


class PromptError(WizardError):
    """Base exception for prompt engine errors."""

    pass


class InvalidDefaultOptionError(PromptError, ValueError):
    """Default option does not point into the menu.

    Attributes:
        default_option: The rejected 1-based index
        menu_size: Number of entries in the menu
    """

    def __init__(self, default_option: int, menu_size: int):
        super().__init__(
            f"default option {default_option} is outside the menu [0, {menu_size}]"
        )
        self.default_option = default_option
        self.menu_size = menu_size


class PromptAbortedError(PromptError, EOFError):
    """Input ended before an answer was read."""

    pass

