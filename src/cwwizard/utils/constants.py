"""Constants used throughout cwwizard."""

import sys
from pathlib import Path

# Output file written by the wizard
CONFIG_JSON_FILE_NAME = "config.json"

# Wizard settings file
SETTINGS_FILE_NAME = "settings.json"

# EC2 instance metadata lookups are single-shot
DEFAULT_IMDS_TIMEOUT = 1

DEFAULT_METRICS_COLLECTION_INTERVAL = 60
METRICS_COLLECTION_INTERVALS = ["1", "10", "30", "60"]

OS_TYPE_LINUX = "linux"
OS_TYPE_WINDOWS = "windows"
OS_TYPE_DARWIN = "darwin"
OS_TYPES = [OS_TYPE_LINUX, OS_TYPE_WINDOWS, OS_TYPE_DARWIN]

# Keys of the generated config map
MAP_KEY_METRICS_COLLECTION_INTERVAL = "metrics_collection_interval"
MAP_KEY_INSTANCES = "resources"
MAP_KEY_MEASUREMENT = "measurement"


def cur_os() -> str:
    """Current OS as one of the OS_TYPE_* names."""
    if sys.platform.startswith("win"):
        return OS_TYPE_WINDOWS
    if sys.platform == "darwin":
        return OS_TYPE_DARWIN
    return OS_TYPE_LINUX


def cur_path() -> Path:
    """Directory of the running program."""
    return Path(sys.argv[0]).resolve().parent
