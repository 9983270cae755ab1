"""Tests for the BuildStore — layout, canonical bytes, partials."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from gobuildinfo.core.build_store import BUILD_INFO_FILE, BuildStore
from gobuildinfo.core.hasher import canonical_json_bytes
from gobuildinfo.models import Artifact, BuildInfo, Checksum, Dependency, Module, Partial


def _build_info() -> BuildInfo:
    dep = Dependency(
        id="github.com/!foo/bar:v1.0.0",
        checksum=Checksum(md5="m", sha1="s", sha256="t"),
        requested_by=[["example.com/app"]],
    )
    return BuildInfo(
        name="svc",
        number="12",
        started=datetime(2026, 1, 2, 3, 4, 5, tzinfo=timezone.utc),
        modules=[Module(id="example.com/app", dependencies=[dep])],
    )


class TestBuildStore:
    def test_save_and_load(self, store: BuildStore):
        bi = _build_info()
        path = store.save_build_info(bi)
        assert path == store.build_dir("svc", "12") / BUILD_INFO_FILE
        assert store.load_build_info("svc", "12") == bi

    def test_written_as_canonical_json(self, store: BuildStore):
        bi = _build_info()
        path = store.save_build_info(bi)
        assert path.read_bytes() == canonical_json_bytes(bi.model_dump(mode="json"))

    def test_save_replaces_previous(self, store: BuildStore):
        store.save_build_info(_build_info())
        updated = _build_info().model_copy(update={"project": "p"})
        store.save_build_info(updated)
        assert store.load_build_info("svc", "12").project == "p"

    def test_load_missing(self, store: BuildStore):
        with pytest.raises(FileNotFoundError):
            store.load_build_info("svc", "404")

    def test_unsafe_segments_sanitized(self, store: BuildStore):
        build_dir = store.build_dir("team/svc", "../1")
        assert build_dir.parent.parent == store.base_path

    def test_partials_in_write_order(self, store: BuildStore):
        first = datetime(2026, 1, 1, tzinfo=timezone.utc)
        for offset, name in enumerate(["a", "b"]):
            store.save_partial(
                "svc",
                "12",
                Partial(
                    module_id="example.com/app",
                    timestamp=first + timedelta(seconds=offset),
                    artifacts=[Artifact(name=name)],
                ),
            )
        partials = store.list_partials("svc", "12")
        assert [p.artifacts[0].name for p in partials] == ["a", "b"]

    def test_no_partials(self, store: BuildStore):
        assert store.list_partials("svc", "12") == []
