"""Resolution of manifest-relative media names against a base directory."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, NamedTuple

from endodcm.manifest import ManifestContents

__all__ = ["MediaFiles", "resolve_paths", "resolve_media"]


class MediaFiles(NamedTuple):
    """Absolute media paths of one manifest, grouped by kind."""

    videos: tuple[Path, ...]
    pictures: tuple[Path, ...]
    sounds: tuple[Path, ...]


def resolve_paths(
    base_directory: str | Path, relative_names: Iterable[str]
) -> tuple[Path, ...]:
    """
    Join every name onto ``base_directory``, keeping order and duplicates.

    This is path algebra only: nothing is checked on disk and names are not
    validated, so an empty name yields the base directory itself and ``..``
    segments are kept as written.

    Examples
    --------
    >>> resolve_paths("/data/study7", ["clip1.mp4", "clip2.mp4"])
    (PosixPath('/data/study7/clip1.mp4'), PosixPath('/data/study7/clip2.mp4'))
    """
    base = Path(base_directory)
    return tuple(base / name for name in relative_names)


def resolve_media(
    base_directory: str | Path, contents: ManifestContents
) -> MediaFiles:
    return MediaFiles(
        videos=resolve_paths(base_directory, contents.videos),
        pictures=resolve_paths(base_directory, contents.pictures),
        sounds=resolve_paths(base_directory, contents.sounds),
    )
