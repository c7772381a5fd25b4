"""Low-level file I/O shared by the document store and catalog index.

INVARIANT: Writes are atomic. Content goes to a temporary file in the
target directory and is moved into place with ``os.replace``, so readers
only ever observe the previous or the new document.
"""

from __future__ import annotations

import os
import tempfile
from io import StringIO
from pathlib import Path
from typing import Any

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from vidctl.infrastructure.errors import CorruptError, NotFoundError, StorageIOError

# ---------------------------------------------------------------------------
# YAML
# ---------------------------------------------------------------------------


def _new_yaml() -> YAML:
    """Create a fresh YAML instance.

    ruamel.yaml's YAML object is stateful; a failed dump can leave a shared
    instance broken, so every call gets its own.
    """
    y = YAML()
    y.default_flow_style = False
    y.width = 4096
    return y


def dump_yaml(data: Any) -> str:
    """Serialize *data* to a YAML string."""
    buf = StringIO()
    _new_yaml().dump(data, buf)
    return buf.getvalue()


def read_yaml(path: Path) -> Any:
    """Load the YAML file at *path*.

    Raises:
        NotFoundError: The file does not exist.
        CorruptError: The file is not UTF-8 text or not valid YAML.
        StorageIOError: Any other read failure.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except FileNotFoundError as exc:
        raise NotFoundError(f"No file at {path}", path=path) from exc
    except UnicodeDecodeError as exc:
        raise CorruptError(f"Invalid UTF-8 in {path}: {exc}", path=path) from exc
    except OSError as exc:
        raise StorageIOError(f"Failed to read {path}: {exc}", path=path) from exc
    try:
        return _new_yaml().load(raw)
    except YAMLError as exc:
        raise CorruptError(f"Invalid YAML in {path}: {exc}", path=path) from exc


# ---------------------------------------------------------------------------
# Atomic write / remove / move
# ---------------------------------------------------------------------------


def atomic_write_text(path: Path, content: str) -> None:
    """Replace *path* with *content* atomically, creating parent directories.

    On failure the temporary file is cleaned up and the previous content of
    *path* is left untouched.
    """
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    except OSError as exc:
        raise StorageIOError(f"Failed to prepare write of {path}: {exc}", path=path) from exc

    try:
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(content)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_name, path)
    except OSError as exc:
        Path(tmp_name).unlink(missing_ok=True)
        raise StorageIOError(f"Failed to write {path}: {exc}", path=path) from exc


def write_text_if_absent(path: Path, content: str) -> bool:
    """Write *content* to *path* only if no file exists there.

    Returns True if the file was written.
    """
    if path.exists():
        return False
    atomic_write_text(path, content)
    return True


def remove_file(path: Path) -> bool:
    """Delete *path*. A missing file is not an error.

    Returns True if a file was removed.
    """
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        raise StorageIOError(f"Failed to delete {path}: {exc}", path=path) from exc
    return True


def move_file(source: Path, target: Path) -> None:
    """Move *source* to *target*, creating the target directory."""
    try:
        target.parent.mkdir(parents=True, exist_ok=True)
        os.replace(source, target)
    except FileNotFoundError as exc:
        raise NotFoundError(f"No file at {source}", path=source) from exc
    except OSError as exc:
        raise StorageIOError(f"Failed to move {source} to {target}: {exc}", path=source) from exc


# ---------------------------------------------------------------------------
# Discovery
# ---------------------------------------------------------------------------


def list_subdirectories(root: Path) -> list[Path]:
    """Return the immediate subdirectories of *root* (hidden ones skipped).

    A missing *root* yields an empty list.
    """
    if not root.is_dir():
        return []
    try:
        entries = list(root.iterdir())
    except OSError as exc:
        raise StorageIOError(f"Failed to scan {root}: {exc}", path=root) from exc
    return sorted(p for p in entries if p.is_dir() and not p.name.startswith("."))


def list_files(root: Path, suffix: str) -> list[Path]:
    """Return all files below *root* ending in *suffix*, sorted."""
    if not root.is_dir():
        return []
    return sorted(
        p
        for p in root.rglob(f"*{suffix}")
        if p.is_file() and not any(part.startswith(".") for part in p.relative_to(root).parts)
    )
