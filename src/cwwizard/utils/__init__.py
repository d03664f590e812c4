"""Utilities for cwwizard."""

from cwwizard.utils.config import Config, get_wizard_dir
from cwwizard.utils.exceptions import WizardError

__all__ = ["Config", "WizardError", "get_wizard_dir"]
