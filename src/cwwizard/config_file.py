"""Reading and writing the config file produced by the wizard."""

import json
from pathlib import Path
from typing import Any, Optional, Protocol

from cwwizard.utils.config import get_wizard_dir
from cwwizard.utils.constants import CONFIG_JSON_FILE_NAME
from cwwizard.utils.debug import debug_file, log_error
from cwwizard.utils.exceptions import ConfigFileError


class ConvertibleToMap(Protocol):
    """A wizard section that renders itself as one key of the result map."""

    def to_map(self, ctx: Any) -> tuple[str, Any]:
        """Return (key, value). An empty key or None value is skipped."""
        ...


def config_file_path(config_dir: Optional[Path] = None) -> Path:
    """Path of the config file inside the wizard directory."""
    return (config_dir or get_wizard_dir()) / CONFIG_JSON_FILE_NAME


def permission_check(path: Optional[Path] = None) -> None:
    """Make sure the config file can be created and appended to.

    Raises:
        ConfigFileError: The file cannot be opened for writing.
    """
    path = path or config_file_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "a"):
            pass
    except OSError as e:
        log_error("file", f"permission check failed for {path}", e)
        raise ConfigFileError(
            f"Make sure that you have write permission to {path}", path
        ) from e


def read_config_from_json_file(path: Optional[Path] = None) -> str:
    """Return the raw text of the config file.

    Raises:
        ConfigFileError: The file cannot be read.
    """
    path = path or config_file_path()
    try:
        return path.read_text()
    except OSError as e:
        raise ConfigFileError(
            f"Error in reading config from file {path}: {e}", path
        ) from e


def serialize_result_map(result_map: dict[str, Any]) -> bytes:
    """Serialize the result map as tab-indented JSON with sorted keys.

    Raises:
        ConfigFileError: A value is not JSON serializable.
    """
    try:
        return json.dumps(result_map, indent="\t", sort_keys=True).encode()
    except (TypeError, ValueError) as e:
        raise ConfigFileError(
            f"Result map to byte array json marshal error: {e}"
        ) from e


def save_result_to_json_file(data: bytes, path: Optional[Path] = None) -> Path:
    """Write serialized config to disk.

    New files get mode 0755, existing files keep their mode.

    Returns:
        Path the config was written to.

    Raises:
        ConfigFileError: The file cannot be written.
    """
    path = path or config_file_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        created = not path.exists()
        path.write_bytes(data)
        if created:
            path.chmod(0o755)
    except OSError as e:
        log_error("file", f"failed to write {path}", e)
        raise ConfigFileError(
            f"Error in writing file to {path}: {e}\n"
            f"Make sure that you have write permission to {path}.",
            path,
        ) from e

    debug_file("config saved", path=path, size=len(data))
    print(f"Saved config file to {path} successfully.")
    return path


def add_to_map(ctx: Any, result_map: dict[str, Any], obj: ConvertibleToMap) -> None:
    """Store obj's section in result_map unless it renders empty."""
    key, value = obj.to_map(ctx)
    if key and value is not None:
        result_map[key] = value
