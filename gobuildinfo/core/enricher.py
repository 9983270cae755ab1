"""Attach archive checksums to dependency records."""

from __future__ import annotations

from pathlib import Path

from gobuildinfo.core.hasher import file_checksums
from gobuildinfo.models.dependencies import ZIP_DEPENDENCY_TYPE, Dependency


def populate_zip(package_id: str, zip_path: Path) -> Dependency:
    """Build the zip dependency for ``package_id`` from its cached archive.

    Read failures propagate as ``OSError``.
    """
    return Dependency(
        id=package_id,
        type=ZIP_DEPENDENCY_TYPE,
        checksum=file_checksums(zip_path),
    )
