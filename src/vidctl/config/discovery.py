"""Locating ``vidctl.toml`` and the workspace it belongs to.

A workspace is the directory that holds ``vidctl.toml``. The file is taken
from ``--config`` when given, else from ``VIDCTL_CONFIG``, else by walking
up from the start directory the way git looks for ``.git/``. Without any
config file the start directory is the workspace and defaults apply.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path

CONFIG_FILENAME = "vidctl.toml"
CONFIG_ENV_VAR = "VIDCTL_CONFIG"

logger = logging.getLogger(__name__)


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file in effect for *start* (default: cwd), if any.

    ``VIDCTL_CONFIG`` short-circuits the walk. When it names a missing
    file no config is used at all.
    """
    env_path = os.environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        if candidate.is_file():
            return candidate
        logger.warning("%s points to a missing file: %s", CONFIG_ENV_VAR, candidate)
        return None

    here = (start or Path.cwd()).resolve()
    for directory in (here, *here.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def resolve_workspace(
    *,
    config_path: str | Path | None = None,
    workspace_root: Path | None = None,
) -> tuple[Path | None, Path]:
    """Return ``(config_file, workspace_root)``.

    An explicit *workspace_root* always wins; otherwise the root is the
    directory of the config file, falling back to the cwd.

    Raises:
        FileNotFoundError: *config_path* was given but does not exist.
    """
    if config_path:
        toml_path: Path | None = Path(config_path)
        if not toml_path.is_file():
            msg = f"Config file not found: {toml_path}"
            raise FileNotFoundError(msg)
    else:
        toml_path = find_config(workspace_root)

    if workspace_root is not None:
        return toml_path, workspace_root
    if toml_path is not None:
        return toml_path, toml_path.parent
    return None, Path.cwd()
