"""cwwizard - Interactive config wizard helpers for the metrics agent."""

from importlib.metadata import version

__version__ = version("cwwizard")

from cwwizard.prompts import Prompter, ask, ask_with_default, choice, no, yes

__all__ = [
    "Prompter",
    "ask",
    "ask_with_default",
    "choice",
    "no",
    "yes",
]
