"""Configuration management."""

import json
import os
from pathlib import Path
from typing import Optional

from cwwizard.utils.constants import (
    CONFIG_JSON_FILE_NAME,
    DEFAULT_IMDS_TIMEOUT,
    DEFAULT_METRICS_COLLECTION_INTERVAL,
    SETTINGS_FILE_NAME,
)


def get_wizard_dir() -> Path:
    """Get the cwwizard data directory (XDG-compliant)."""
    if env_dir := os.environ.get("CWWIZARD_DIR"):
        return Path(env_dir)
    return Path.home() / ".config" / "cwwizard"


class Config:
    """Wizard settings."""

    def __init__(self, wizard_dir: Optional[Path] = None):
        """Load settings from directory."""
        self.wizard_dir = wizard_dir or get_wizard_dir()
        self._settings_file = self.wizard_dir / SETTINGS_FILE_NAME
        self._load()

    def _load(self):
        """Load settings from file."""
        # Set defaults
        self.debug = False
        self.aws_profile: Optional[str] = None
        self.imds_timeout_seconds = DEFAULT_IMDS_TIMEOUT
        self.metrics_collection_interval = DEFAULT_METRICS_COLLECTION_INTERVAL
        # Env var overrides persisted in the settings file
        self.env: dict[str, str] = {}

        if self._settings_file.exists():
            try:
                data = json.loads(self._settings_file.read_text())
                self.debug = data.get("debug", False)
                self.aws_profile = data.get("aws_profile")
                self.imds_timeout_seconds = data.get(
                    "imds_timeout_seconds", DEFAULT_IMDS_TIMEOUT
                )
                self.metrics_collection_interval = data.get(
                    "metrics_collection_interval", DEFAULT_METRICS_COLLECTION_INTERVAL
                )
                self.env = data.get("env", {})
            except (json.JSONDecodeError, IOError):
                pass

        # Apply env section from settings, then shell env vars override
        self._apply_env_overrides()

    def _apply_env_overrides(self):
        """Apply env overrides: first from settings env, then from shell CWWIZARD_* vars."""
        prefix = "CWWIZARD_"

        def apply_env_dict(env_dict: dict[str, str]):
            for key, value in env_dict.items():
                if key.startswith(prefix):
                    attr_name = key[len(prefix) :].lower()
                else:
                    attr_name = key.lower()
                # CWWIZARD_DIR picks the directory, it is not a setting
                if attr_name in ("dir", "wizard_dir") or not hasattr(self, attr_name):
                    continue
                current = getattr(self, attr_name)
                if isinstance(current, bool):
                    setattr(self, attr_name, value.lower() in ("true", "1", "yes"))
                elif isinstance(current, int):
                    try:
                        setattr(self, attr_name, int(value))
                    except ValueError:
                        pass
                else:
                    setattr(self, attr_name, value)

        apply_env_dict(self.env)

        # Shell env vars have the highest priority
        shell_env = {k: v for k, v in os.environ.items() if k.startswith(prefix)}
        apply_env_dict(shell_env)

    def save(self):
        """Save settings to file."""
        self.wizard_dir.mkdir(parents=True, exist_ok=True)
        data = {
            "debug": self.debug,
            "aws_profile": self.aws_profile,
            "imds_timeout_seconds": self.imds_timeout_seconds,
            "metrics_collection_interval": self.metrics_collection_interval,
            "env": self.env,
        }
        self._settings_file.write_text(json.dumps(data, indent=2))

    def set_env(self, key: str, value: str):
        """Set an env var override in settings."""
        self.env[key] = value
        self.save()
        self._apply_env_overrides()

    def unset_env(self, key: str) -> bool:
        """Remove an env var override. Returns True if key existed."""
        if key in self.env:
            del self.env[key]
            self.save()
            return True
        return False

    def list_env(self) -> dict[str, str]:
        """List all env var overrides."""
        return self.env.copy()

    def set_debug(self, enabled: bool):
        """Enable or disable debug mode."""
        self.debug = enabled
        self.save()

    def get_debug(self) -> bool:
        """Get debug mode status."""
        return self.debug

    @property
    def config_file(self) -> Path:
        """Path to the config file the wizard writes."""
        return self.wizard_dir / CONFIG_JSON_FILE_NAME

    @property
    def log_file(self) -> Path:
        """Path to the debug log."""
        return self.wizard_dir / "debug.log"
