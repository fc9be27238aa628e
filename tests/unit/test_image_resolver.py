"""Tests for ImageResolver."""

import base64
from unittest.mock import MagicMock

import pytest

from glasses_context.artifact_store import ArtifactStore
from glasses_context.image_resolver import ImageResolver


class TestImageResolver:
    """Test suite for ImageResolver.resolve()."""

    def test_none_skips_lookup(self):
        """No citation -> no directory scan at all."""
        store = MagicMock(spec=ArtifactStore)
        assert ImageResolver(store).resolve(None) is None
        store.find_image_by_timestamp.assert_not_called()

    def test_unknown_timestamp(self, populated_store):
        assert ImageResolver(populated_store).resolve("2031-01-01-00-00-00") is None

    def test_hit_is_base64(self, populated_store):
        part = ImageResolver(populated_store).resolve("2025-01-01-00-00-00")

        assert part is not None
        assert base64.b64decode(part.data) == b"\x89PNG fake bytes"
        assert part.mime_type == "image/png"
        assert part.timestamp == "2025-01-01-00-00-00"

    @pytest.mark.parametrize(
        "ext,expected",
        [("jpg", "image/jpeg"), ("jpeg", "image/jpeg"), ("png", "image/png"), ("x", "image/x")],
    )
    def test_media_type_from_extension(self, store, ext, expected):
        store.images_dir.mkdir(parents=True)
        (store.images_dir / f"2025-01-01-00-00-00.{ext}").write_bytes(b"data")

        part = ImageResolver(store).resolve("2025-01-01-00-00-00")
        assert part.mime_type == expected

    def test_write_then_resolve_roundtrip(self, store):
        """Bytes and media type survive write_image -> resolve unchanged."""
        payload = bytes(range(256))
        store.write_image("2025-06-01-12-00-00", payload, "image/png")

        part = ImageResolver(store).resolve("2025-06-01-12-00-00")

        assert base64.b64decode(part.data) == payload
        assert part.mime_type == "image/png"

    @pytest.mark.asyncio
    async def test_resolve_async(self, populated_store):
        resolver = ImageResolver(populated_store)
        assert await resolver.resolve_async(None) is None
        part = await resolver.resolve_async("2025-01-01-00-00-00")
        assert part.mime_type == "image/png"
