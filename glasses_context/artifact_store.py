"""ArtifactStore - flat, timestamp-named file persistence for captured artifacts.

Layout under the store root::

    transcripts/<timestamp>.txt
    images/<timestamp>.txt        # image description
    images/<timestamp>.<ext>      # image bytes
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from . import timestamps
from .errors import PersistenceError

DEFAULT_MEDIA_TYPE = "image/png"


class ArtifactCategory(Enum):
    """Text stream an artifact belongs to. Values are directory names."""

    TRANSCRIPT = "transcripts"
    IMAGE_DESCRIPTION = "images"


@dataclass
class Artifact:
    """One persisted transcript or image description."""

    category: ArtifactCategory
    timestamp: str
    text: str


@dataclass
class StoredImage:
    """Binary sibling of an image description."""

    timestamp: str
    data: bytes
    media_type: str
    path: Path


def media_type_for_extension(ext: str) -> str:
    """Map a file extension (with or without dot) to an image media type."""
    ext = ext.lower().lstrip(".")
    if ext in ("jpg", "jpeg"):
        return "image/jpeg"
    if ext == "png":
        return "image/png"
    return f"image/{ext}"


def extension_for_media_type(media_type: str) -> str:
    """``image/jpeg`` -> ``jpeg``. The subtype is used verbatim."""
    _, _, subtype = media_type.partition("/")
    if not subtype:
        raise ValueError(f"Invalid media type: {media_type!r}")
    return subtype.lower()


class ArtifactStore:
    """
    File-backed store for transcripts, image descriptions and images.

    Zero indexing: ordering comes from sorting canonical timestamp filenames.
    Single writer per category is assumed; the store performs no locking.
    """

    def __init__(self, root: Path | str, logger: logging.Logger | None = None):
        """
        Initialize ArtifactStore.

        Args:
            root: Directory containing the category directories
            logger: Logger for store events (defaults to the module logger)
        """
        self.root = Path(root)
        self.logger = logger or logging.getLogger(__name__)

    def category_dir(self, category: ArtifactCategory) -> Path:
        return self.root / category.value

    @property
    def images_dir(self) -> Path:
        return self.category_dir(ArtifactCategory.IMAGE_DESCRIPTION)

    def write_text(
        self,
        category: ArtifactCategory,
        text: str,
        timestamp: str | None = None,
    ) -> str:
        """
        Persist a text artifact.

        Args:
            category: Which stream the text belongs to
            text: UTF-8 content
            timestamp: Explicit timestamp (used to pair a description with
                its image); a fresh one is allocated when omitted

        Returns:
            The timestamp the artifact was stored under

        Raises:
            PersistenceError: If the directory or file cannot be written
        """
        if timestamp is None:
            timestamp = timestamps.encode()

        directory = self.category_dir(category)
        path = directory / f"{timestamp}{timestamps.TEXT_EXTENSION}"
        try:
            directory.mkdir(parents=True, exist_ok=True)
            path.write_text(text, encoding="utf-8")
        except OSError as e:
            raise PersistenceError(f"Failed to write {path}: {e}", path=str(path)) from e

        self.logger.debug(f"Saved {category.value} artifact {path.name}")
        return timestamp

    def write_image(
        self,
        timestamp: str,
        data: bytes,
        media_type: str = DEFAULT_MEDIA_TYPE,
    ) -> Path:
        """
        Persist image bytes next to their description.

        Args:
            timestamp: Same timestamp as the paired description
            data: Raw image bytes
            media_type: e.g. ``image/jpeg``; determines the extension

        Returns:
            Path of the written image file

        Raises:
            PersistenceError: If the directory or file cannot be written
        """
        directory = self.images_dir
        path = directory / f"{timestamp}.{extension_for_media_type(media_type)}"
        try:
            directory.mkdir(parents=True, exist_ok=True)
            path.write_bytes(data)
        except OSError as e:
            raise PersistenceError(f"Failed to write {path}: {e}", path=str(path)) from e

        self.logger.debug(f"Saved image {path.name} ({len(data)} bytes)")
        return path

    def list_text(self, category: ArtifactCategory) -> list[Artifact]:
        """
        List all text artifacts of a category, oldest first.

        A missing directory means nothing has been captured yet and yields
        an empty list.

        Undecodable bytes are replaced with U+FFFD; only OS-level read
        failures raise.

        Raises:
            PersistenceError: If an existing file cannot be read
        """
        directory = self.category_dir(category)
        if not directory.is_dir():
            return []

        try:
            filenames = sorted(
                entry.name
                for entry in directory.iterdir()
                if entry.is_file() and timestamps.is_text_filename(entry.name)
            )
        except OSError as e:
            raise PersistenceError(f"Failed to list {directory}: {e}", path=str(directory)) from e

        artifacts = []
        for filename in filenames:
            path = directory / filename
            try:
                text = path.read_text(encoding="utf-8", errors="replace")
            except OSError as e:
                raise PersistenceError(f"Failed to read {path}: {e}", path=str(path)) from e
            artifacts.append(
                Artifact(
                    category=category,
                    timestamp=timestamps.strip_extension(filename),
                    text=text,
                )
            )

        return artifacts

    def find_image_by_timestamp(self, timestamp: str) -> StoredImage | None:
        """
        Find the image stored under ``timestamp``.

        Scans the images directory in sorted order and returns the first
        non-text file whose base name equals the timestamp. A trailing file
        extension on ``timestamp`` (``2025-01-01-00-00-00.jpg``) is ignored.

        Returns:
            StoredImage if found, None otherwise

        Raises:
            PersistenceError: If the matching file cannot be read
        """
        directory = self.images_dir
        if not directory.is_dir():
            return None

        timestamp = Path(timestamp).stem
        try:
            candidates = sorted(directory.iterdir())
        except OSError as e:
            raise PersistenceError(f"Failed to list {directory}: {e}", path=str(directory)) from e

        for path in candidates:
            if path.stem != timestamp or timestamps.is_text_filename(path.name):
                continue
            if not path.suffix or not path.is_file():
                continue
            try:
                data = path.read_bytes()
            except OSError as e:
                raise PersistenceError(f"Failed to read {path}: {e}", path=str(path)) from e
            return StoredImage(
                timestamp=timestamp,
                data=data,
                media_type=media_type_for_extension(path.suffix),
                path=path,
            )

        return None


__all__ = [
    "Artifact",
    "ArtifactCategory",
    "ArtifactStore",
    "DEFAULT_MEDIA_TYPE",
    "StoredImage",
    "extension_for_media_type",
    "media_type_for_extension",
]
