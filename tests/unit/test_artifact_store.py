"""Tests for ArtifactStore - timestamp-named file persistence."""

import pytest

from glasses_context import timestamps
from glasses_context.artifact_store import (
    ArtifactCategory,
    ArtifactStore,
    extension_for_media_type,
    media_type_for_extension,
)
from glasses_context.errors import PersistenceError


class TestMediaTypes:
    """Tests for extension <-> media type mapping."""

    @pytest.mark.parametrize(
        "ext,expected",
        [
            ("jpg", "image/jpeg"),
            ("jpeg", "image/jpeg"),
            (".JPG", "image/jpeg"),
            ("png", "image/png"),
            ("webp", "image/webp"),
            ("x", "image/x"),
        ],
    )
    def test_media_type_for_extension(self, ext, expected):
        assert media_type_for_extension(ext) == expected

    def test_extension_for_media_type_uses_subtype(self):
        assert extension_for_media_type("image/jpeg") == "jpeg"
        assert extension_for_media_type("image/png") == "png"

    def test_extension_for_invalid_media_type(self):
        with pytest.raises(ValueError):
            extension_for_media_type("png")


class TestWriteText:
    """Tests for ArtifactStore.write_text()."""

    def test_creates_missing_directories(self, tmp_path):
        """Intermediate directories are created on first write."""
        store = ArtifactStore(tmp_path / "deep" / "nested")
        ts = store.write_text(ArtifactCategory.TRANSCRIPT, "hello there", "2025-01-01-00-00-00")

        path = tmp_path / "deep" / "nested" / "transcripts" / f"{ts}.txt"
        assert path.read_text(encoding="utf-8") == "hello there"

    def test_allocates_timestamp_when_omitted(self, store):
        ts = store.write_text(ArtifactCategory.TRANSCRIPT, "hello")
        assert timestamps.is_canonical(ts)
        assert (store.category_dir(ArtifactCategory.TRANSCRIPT) / f"{ts}.txt").exists()

    def test_same_timestamp_overwrites(self, store):
        """Last write within the same second wins."""
        store.write_text(ArtifactCategory.TRANSCRIPT, "first", "2025-01-01-00-00-00")
        store.write_text(ArtifactCategory.TRANSCRIPT, "second", "2025-01-01-00-00-00")

        artifacts = store.list_text(ArtifactCategory.TRANSCRIPT)
        assert [a.text for a in artifacts] == ["second"]

    def test_unicode_roundtrip(self, store):
        store.write_text(ArtifactCategory.TRANSCRIPT, "café ☕ 東京", "2025-01-01-00-00-00")
        assert store.list_text(ArtifactCategory.TRANSCRIPT)[0].text == "café ☕ 東京"

    def test_write_failure_raises_persistence_error(self, tmp_path):
        """A file where the category directory should be makes the write fail."""
        root = tmp_path / "data"
        root.mkdir()
        (root / "transcripts").write_text("not a directory")
        store = ArtifactStore(root)

        with pytest.raises(PersistenceError) as exc_info:
            store.write_text(ArtifactCategory.TRANSCRIPT, "hello", "2025-01-01-00-00-00")
        assert "transcripts" in exc_info.value.path


class TestWriteImage:
    """Tests for ArtifactStore.write_image()."""

    def test_extension_from_media_type(self, store):
        path = store.write_image("2025-01-01-00-00-00", b"jpegbytes", "image/jpeg")
        assert path.name == "2025-01-01-00-00-00.jpeg"
        assert path.parent == store.images_dir
        assert path.read_bytes() == b"jpegbytes"

    def test_defaults_to_png(self, store):
        path = store.write_image("2025-01-01-00-00-00", b"pngbytes")
        assert path.suffix == ".png"


class TestListText:
    """Tests for ArtifactStore.list_text()."""

    def test_missing_directory_is_empty(self, store):
        """No captures yet is a normal state, not an error."""
        assert store.list_text(ArtifactCategory.TRANSCRIPT) == []
        assert store.list_text(ArtifactCategory.IMAGE_DESCRIPTION) == []

    def test_sorted_by_timestamp(self, store):
        for ts in ("2025-03-01-00-00-00", "2024-12-31-23-59-59", "2025-01-15-08-30-00"):
            store.write_text(ArtifactCategory.TRANSCRIPT, f"at {ts}", ts)

        artifacts = store.list_text(ArtifactCategory.TRANSCRIPT)
        assert [a.timestamp for a in artifacts] == [
            "2024-12-31-23-59-59",
            "2025-01-15-08-30-00",
            "2025-03-01-00-00-00",
        ]
        assert all(a.category is ArtifactCategory.TRANSCRIPT for a in artifacts)

    def test_ignores_image_files(self, populated_store):
        """Only .txt files are text artifacts."""
        artifacts = populated_store.list_text(ArtifactCategory.IMAGE_DESCRIPTION)
        assert len(artifacts) == 1
        assert artifacts[0].text == "A red bicycle by a fence."

    def test_idempotent(self, populated_store):
        """Two listings without writes in between are identical."""
        first = populated_store.list_text(ArtifactCategory.TRANSCRIPT)
        second = populated_store.list_text(ArtifactCategory.TRANSCRIPT)
        assert first == second

    def test_undecodable_file_does_not_hide_others(self, populated_store):
        """Invalid UTF-8 is replaced; neighbouring artifacts still load."""
        directory = populated_store.category_dir(ArtifactCategory.TRANSCRIPT)
        (directory / "2025-01-01-13-00-00.txt").write_bytes(b"caf\xe9 truncated")

        artifacts = populated_store.list_text(ArtifactCategory.TRANSCRIPT)

        assert [a.timestamp for a in artifacts] == [
            "2025-01-01-09-00-00",
            "2025-01-01-12-00-00",
            "2025-01-01-13-00-00",
        ]
        assert artifacts[0].text == "Meeting about the budget."
        assert artifacts[2].text == "caf\ufffd truncated"


class TestFindImageByTimestamp:
    """Tests for ArtifactStore.find_image_by_timestamp()."""

    def test_finds_paired_image(self, populated_store):
        image = populated_store.find_image_by_timestamp("2025-01-01-00-00-00")
        assert image is not None
        assert image.data == b"\x89PNG fake bytes"
        assert image.media_type == "image/png"

    def test_missing_timestamp(self, populated_store):
        assert populated_store.find_image_by_timestamp("2030-01-01-00-00-00") is None

    def test_missing_directory(self, store):
        assert store.find_image_by_timestamp("2025-01-01-00-00-00") is None

    def test_description_only_is_absent(self, store):
        """A description without image bytes resolves to no image."""
        store.write_text(ArtifactCategory.IMAGE_DESCRIPTION, "desc", "2025-01-01-00-00-00")
        assert store.find_image_by_timestamp("2025-01-01-00-00-00") is None

    def test_prefix_does_not_match(self, populated_store):
        """A truncated timestamp does not select a longer-named image."""
        assert populated_store.find_image_by_timestamp("2025-01-01-00-00") is None

    def test_citation_with_extension(self, populated_store):
        image = populated_store.find_image_by_timestamp("2025-01-01-00-00-00.png")
        assert image is not None
        assert image.timestamp == "2025-01-01-00-00-00"
        assert image.data == b"\x89PNG fake bytes"

    def test_jpg_extension_maps_to_jpeg(self, store):
        store.images_dir.mkdir(parents=True)
        (store.images_dir / "2025-01-01-00-00-00.jpg").write_bytes(b"jpg")

        image = store.find_image_by_timestamp("2025-01-01-00-00-00")
        assert image.media_type == "image/jpeg"

    def test_multiple_matches_first_sorted_wins(self, store):
        store.images_dir.mkdir(parents=True)
        (store.images_dir / "2025-01-01-00-00-00.png").write_bytes(b"png")
        (store.images_dir / "2025-01-01-00-00-00.jpeg").write_bytes(b"jpeg")

        image = store.find_image_by_timestamp("2025-01-01-00-00-00")
        assert image.data == b"jpeg"
