"""
Conversion of one endoscopic capture manifest.

``convert_manifest`` reads the manifest, maps its fields to DICOM attributes
and resolves its media references. It either returns every product or raises;
nothing partially converted is ever handed back.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from endodcm.dicom import AttributeRecord, map_fields
from endodcm.loggers import logger
from endodcm.manifest import ManifestContents, read_manifest
from endodcm.paths import resolve_media

__all__ = [
    "EndoscopicConversion",
    "EndoscopicFileProcessor",
    "convert_manifest",
]


@dataclass(frozen=True)
class EndoscopicConversion:
    """
    Result of converting one manifest.

    Attributes
    ----------
    manifest : ManifestContents
        The manifest as read.
    attributes : AttributeRecord
        DICOM attributes derived from the manifest fields.
    video_files, picture_files, sound_files : tuple[Path, ...]
        Media paths resolved against the base directory, in manifest order.
    """

    manifest: ManifestContents
    attributes: AttributeRecord
    video_files: tuple[Path, ...]
    picture_files: tuple[Path, ...]
    sound_files: tuple[Path, ...]


def convert_manifest(
    manifest_path: str | Path,
    base_directory: str | Path | None = None,
) -> EndoscopicConversion:
    """
    Convert a manifest into DICOM attributes and absolute media paths.

    Parameters
    ----------
    manifest_path : str | Path
        The XML manifest.
    base_directory : str | Path | None, optional
        Directory media names are resolved against. Defaults to the directory
        containing the manifest. A relative directory is taken from the
        current working directory.

    Returns
    -------
    EndoscopicConversion
        Attribute record and the three media path lists.

    Raises
    ------
    ManifestUnreadableError
        If the manifest cannot be read or parsed.
    MalformedDateError
        If a date-bearing field does not match its format.
    """
    manifest_path = Path(manifest_path)
    contents = read_manifest(manifest_path)
    attributes = map_fields(contents.fields)

    base = (
        Path(base_directory)
        if base_directory is not None
        else manifest_path.parent
    ).absolute()
    media = resolve_media(base, contents)

    logger.info(
        "Converted manifest",
        path=manifest_path,
        attributes=len(attributes),
        videos=len(media.videos),
        pictures=len(media.pictures),
        sounds=len(media.sounds),
    )
    return EndoscopicConversion(
        manifest=contents,
        attributes=attributes,
        video_files=media.videos,
        picture_files=media.pictures,
        sound_files=media.sounds,
    )


class EndoscopicFileProcessor:
    """
    Accessor-style wrapper around ``convert_manifest``.

    The conversion runs in the constructor; a failing manifest raises there
    and no processor object is created.

    Examples
    --------
    >>> processor = EndoscopicFileProcessor("/data/study7/capture.xml")
    >>> processor.video_file_names
    (PosixPath('/data/study7/clip1.mp4'), PosixPath('/data/study7/clip2.mp4'))
    """

    def __init__(
        self,
        manifest_path: str | Path,
        base_directory: str | Path | None = None,
    ) -> None:
        self._conversion = convert_manifest(manifest_path, base_directory)

    @property
    def conversion(self) -> EndoscopicConversion:
        return self._conversion

    @property
    def dicom_attributes(self) -> AttributeRecord:
        return self._conversion.attributes

    @property
    def video_file_names(self) -> tuple[Path, ...]:
        return self._conversion.video_files

    @property
    def picture_file_names(self) -> tuple[Path, ...]:
        return self._conversion.picture_files

    @property
    def sound_file_names(self) -> tuple[Path, ...]:
        return self._conversion.sound_files
