"""Application configuration defaults and helpers.

Configuration is optional: without a config file the built-in defaults apply.

The first JSON file found is overlaid onto ``DEFAULT_CONFIG``:
  - the path in the ``FITLOG2TCX_CONFIG`` environment variable, if set
    (a ``.env`` file is loaded by the CLI, so it can live there);
  - otherwise each entry of ``_FILE_PATHS`` in order.

Keys:
  * ``debug``: enable DEBUG logging.
  * ``include_creator``: append the fixed ``<Creator>`` device block to
    every written activity.
  * ``marker_indexing``: ``"legacy"`` (k-th distance marker goes to lap k,
    counting from 1) or ``"corrected"`` (lap k - 1).
  * ``tcx_namespace``: emit the Garmin TCX v2 namespace declarations on the
    root element.
  * ``indent``: indentation string for the written TCX; empty for none.
"""

import copy
import json
import os
from pathlib import Path
from typing import Any

from .activity import MARKER_INDEXING_MODES

# ---------------------------------------------------------------------------
# Defaults
# ---------------------------------------------------------------------------

DEFAULT_CONFIG: dict[str, Any] = {
    "debug": False,
    "include_creator": False,
    "marker_indexing": "legacy",
    "tcx_namespace": False,
    "indent": "  ",
}

CONFIG_ENV_VAR = "FITLOG2TCX_CONFIG"

# Candidate JSON config file locations (searched in order)
_FILE_PATHS: list[Path] = [
    Path("fitlog2tcx_config.json"),
    Path("../fitlog2tcx_config.json"),
]


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def _candidate_paths() -> list[Path]:
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        return [Path(env_path)]
    return list(_FILE_PATHS)


def _load_from_file() -> dict[str, Any] | None:
    """Try each candidate path; return parsed JSON or ``None``."""
    for path in _candidate_paths():
        if path.exists():
            with open(path, encoding="utf-8") as f:
                return json.load(f)
    return None


def validate_config(config: dict[str, Any]) -> dict[str, Any]:
    """Raise ValueError for settings the converter cannot honour."""
    if config.get("marker_indexing") not in MARKER_INDEXING_MODES:
        raise ValueError(
            f"marker_indexing must be one of {', '.join(MARKER_INDEXING_MODES)}, got {config.get('marker_indexing')!r}"
        )
    if not isinstance(config.get("indent"), str):
        raise ValueError("indent must be a string")
    return config


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def load_config() -> dict[str, Any]:
    """Return the defaults overlaid with the first config file found."""
    config = copy.deepcopy(DEFAULT_CONFIG)
    file_cfg = _load_from_file()
    if file_cfg is not None:
        config.update(file_cfg)
    return validate_config(config)


def save_config(config: dict[str, Any], path: Path | None = None) -> Path:
    """Write *config* as JSON, to *path* or the first candidate location."""
    target = path or _candidate_paths()[0]
    with open(target, "w", encoding="utf-8") as f:
        json.dump(config, f, indent=2)
        f.write("\n")
    return target
