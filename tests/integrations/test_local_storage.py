"""Tests for local image storage."""

import io

import pytest

from korelium.integrations.storage import ImageRejected, LocalImageStorage


class DroppedStream:
    """Upload stream whose client disconnects after the first chunk."""

    def __init__(self):
        self.reads = 0

    def read(self, size=-1):
        self.reads += 1
        if self.reads > 1:
            raise OSError("connection reset")
        return b"x" * 512


@pytest.fixture
def local_storage(tmp_path):
    return LocalImageStorage(root=tmp_path / "uploads", url_prefix="uploads", max_size_bytes=1024)


class TestSave:
    def test_save_returns_public_path(self, local_storage):
        path = local_storage.save(io.BytesIO(b"png-bytes"), "cover.PNG")

        assert path.startswith("uploads/")
        assert path.endswith(".png")
        assert local_storage.resolve(path).is_file()
        assert local_storage.resolve(path).read_bytes() == b"png-bytes"

    def test_names_are_unique(self, local_storage):
        first = local_storage.save(io.BytesIO(b"a"), "same.jpg")
        second = local_storage.save(io.BytesIO(b"b"), "same.jpg")
        assert first != second

    def test_rejects_disallowed_extension(self, local_storage):
        with pytest.raises(ImageRejected) as exc:
            local_storage.save(io.BytesIO(b"#!/bin/sh"), "run.sh")
        assert exc.value.reason == "extension"
        assert list(local_storage.root.iterdir()) == []

    def test_rejects_missing_extension(self, local_storage):
        with pytest.raises(ImageRejected):
            local_storage.save(io.BytesIO(b"data"), "noext")

    def test_rejects_oversize_and_cleans_up(self, local_storage):
        with pytest.raises(ImageRejected) as exc:
            local_storage.save(io.BytesIO(b"x" * 2048), "big.png")
        assert exc.value.reason == "size"
        assert list(local_storage.root.iterdir()) == []

    def test_exactly_max_size_is_accepted(self, local_storage):
        path = local_storage.save(io.BytesIO(b"x" * 1024), "edge.png")
        assert local_storage.resolve(path).stat().st_size == 1024

    def test_oversize_upload_stops_reading_early(self, local_storage):
        stream = io.BytesIO(b"x" * 5_000_000)

        with pytest.raises(ImageRejected):
            local_storage.save(stream, "huge.png")

        assert stream.tell() < 5_000_000
        assert list(local_storage.root.iterdir()) == []

    def test_interrupted_upload_leaves_nothing(self, local_storage):
        with pytest.raises(OSError):
            local_storage.save(DroppedStream(), "cover.png")

        assert list(local_storage.root.iterdir()) == []


class TestResolveAndDelete:
    def test_delete_removes_file(self, local_storage):
        path = local_storage.save(io.BytesIO(b"data"), "cover.gif")
        assert local_storage.delete(path) is True
        assert not local_storage.resolve(path).is_file()

    def test_delete_missing_file_is_noop(self, local_storage):
        assert local_storage.delete("uploads/does-not-exist.png") is False

    @pytest.mark.parametrize(
        "public_path",
        [
            None,
            "",
            "https://images.example.com/cover.png",
            "uploads/../secret.txt",
            "uploads/nested/cover.png",
            "elsewhere/cover.png",
            "/etc/passwd",
        ],
    )
    def test_paths_outside_storage_are_ignored(self, local_storage, public_path):
        assert local_storage.resolve(public_path) is None
        assert local_storage.delete(public_path) is False

    def test_windows_separators_resolve(self, local_storage):
        path = local_storage.save(io.BytesIO(b"data"), "cover.jpg")
        assert local_storage.resolve(path.replace("/", "\\")) == local_storage.resolve(path)
