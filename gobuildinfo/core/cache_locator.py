"""Module cache lookup for dependency archives.

Layout: {cache_root}/{encoded_module_path}/@v/{version}.zip

A missing archive is not an error. Some toolchain versions leave modules
listed without a downloaded zip, and those dependencies are skipped. The
lookup checks ``cache_root`` first and then its parent directory, which
covers both cache layouts the go command has used.
"""

from __future__ import annotations

import logging
from pathlib import Path

_SEPARATOR = ":"


class CacheLookupError(OSError):
    """Raised when the filesystem fails while checking for an archive."""


def archive_path(cache_root: Path, name: str, version: str) -> Path:
    """Return where the cache stores the zip for ``name`` at ``version``."""
    return Path(cache_root) / name / "@v" / f"{version}.zip"


def package_path_if_exists(
    cache_root: Path, encoded_id: str, logger: logging.Logger
) -> Path | None:
    """Return the archive path for ``encoded_id`` ("name:version") if it exists.

    Malformed identifiers and missing archives return None.
    """
    module_info = encoded_id.split(_SEPARATOR)
    if len(module_info) != 2:
        logger.debug(
            "The encoded dependency id syntax should be 'name:version' but got: %s",
            encoded_id,
        )
        return None
    name, version = module_info
    zip_path = archive_path(cache_root, name, version)
    try:
        # Path.exists() swallows permission errors; stat() does not.
        zip_path.stat()
    except (FileNotFoundError, NotADirectoryError):
        logger.debug("The following file is missing: %s", zip_path)
        return None
    except OSError as exc:
        raise CacheLookupError(
            f"Could not find zip binary for dependency '{name}' at {zip_path}: {exc}"
        ) from exc
    if not zip_path.is_file():
        logger.debug("Expected a file but found a directory: %s", zip_path)
        return None
    return zip_path


def locate(
    cache_root: Path, encoded_id: str, logger: logging.Logger
) -> Path | None:
    """Find the archive under ``cache_root``, falling back once to its parent."""
    cache_root = Path(cache_root)
    zip_path = package_path_if_exists(cache_root, encoded_id, logger)
    if zip_path is not None:
        return zip_path
    return package_path_if_exists(cache_root.parent, encoded_id, logger)
