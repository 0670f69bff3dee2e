"""Load a local .env so NOTION_TOKEN does not have to be exported by hand."""

from __future__ import annotations

import os
from pathlib import Path

DEFAULT_ENV_PATH = Path(".env")


def load_env_file(path: Path = DEFAULT_ENV_PATH) -> dict[str, str]:
    """Populate os.environ from a simple KEY=VALUE .env file.

    Variables that are already set in the environment win over the file.

    Args:
        path: Location of the .env file. Missing files are ignored.

    Returns:
        dict[str, str]: The key/value pairs read from the file.
    """

    if not path.is_file():
        return {}

    loaded: dict[str, str] = {}
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue

        key, value = line.split("=", 1)
        key = key.strip().removeprefix("export ").strip()
        value = value.strip().strip('"').strip("'")
        loaded[key] = value
        os.environ.setdefault(key, value)
    return loaded


__all__ = ["load_env_file", "DEFAULT_ENV_PATH"]
