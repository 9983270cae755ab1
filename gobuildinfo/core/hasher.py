"""Hashing helpers for archive checksums and canonical manifest bytes."""

from __future__ import annotations

import hashlib
import json
from pathlib import Path
from typing import Any

from gobuildinfo.models.dependencies import Checksum

_CHUNK_SIZE = 1024 * 1024


def canonical_json_bytes(obj: Any) -> bytes:
    """Serialize ``obj`` with sorted keys and no whitespace, as ASCII-safe UTF-8."""
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def file_checksums(path: Path | str) -> Checksum:
    """Compute MD5, SHA-1 and SHA-256 of a file in a single read pass.

    Raises ``OSError`` if the file cannot be read.
    """
    md5 = hashlib.md5()
    sha1 = hashlib.sha1()
    sha256 = hashlib.sha256()
    with open(path, "rb") as fh:
        for chunk in iter(lambda: fh.read(_CHUNK_SIZE), b""):
            md5.update(chunk)
            sha1.update(chunk)
            sha256.update(chunk)
    return Checksum(
        md5=md5.hexdigest(),
        sha1=sha1.hexdigest(),
        sha256=sha256.hexdigest(),
    )
