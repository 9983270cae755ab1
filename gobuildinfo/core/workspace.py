"""Temporary staging directories for ``go get`` collection.

Module cache contents are read-only, so staged copies are written without
the source permissions to keep them removable.
"""

from __future__ import annotations

import logging
import os
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

_TEMP_PREFIX = "gobuildinfo-"


def create_temp_dir() -> Path:
    """Create and return a fresh temporary directory."""
    return Path(tempfile.mkdtemp(prefix=_TEMP_PREFIX))


def remove_temp_dir(path: Path) -> None:
    """Remove a temporary directory and everything under it.

    A directory that is already gone is not an error.
    """
    path = Path(path)
    if path.exists():
        shutil.rmtree(path)


def copy_dir(src: Path, dst: Path) -> None:
    """Copy the tree under ``src`` into ``dst`` (created if needed).

    File contents are copied but not their mode bits.
    """
    src = Path(src)
    dst = Path(dst)
    if not src.is_dir():
        raise NotADirectoryError(f"Not a directory: {src}")
    dst.mkdir(parents=True, exist_ok=True)
    for root, dirs, files in os.walk(src):
        target_root = dst / Path(root).relative_to(src)
        for name in dirs:
            (target_root / name).mkdir(exist_ok=True)
        for name in files:
            shutil.copyfile(Path(root) / name, target_root / name)


@contextmanager
def staging_directory() -> Iterator[Path]:
    """Yield a temporary directory that is removed on every exit path.

    If the body raised, a failure while removing the directory is logged and
    the body's exception propagates. Otherwise the removal failure is raised.
    """
    path = create_temp_dir()
    try:
        yield path
    except BaseException:
        try:
            remove_temp_dir(path)
        except OSError as cleanup_exc:
            logger.warning("Could not remove staging directory %s: %s", path, cleanup_exc)
        raise
    remove_temp_dir(path)
