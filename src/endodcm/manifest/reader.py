"""
Reading endoscopic capture manifests.

A manifest is an XML document written by the capture station next to the
media it recorded::

    <Procedure>
      <PatID>P001</PatID>
      <PatName>Doe^Jane</PatName>
      <PatBirth>01/01/1980</PatBirth>
      <ORDate>03/11/2021 14:05:30</ORDate>
      <Media>
        <VideoFile>clip1.mp4</VideoFile>
        <PictureFile>still1.jpg</PictureFile>
        <SoundFile>note1.wav</SoundFile>
      </Media>
    </Procedure>

Every leaf element that is not a media reference becomes a field. Nesting
is ignored; only the element name is used as the field name.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Mapping
from xml.etree.ElementTree import Element

from defusedxml import DefusedXmlException
from defusedxml.ElementTree import ParseError
from defusedxml.ElementTree import parse as safe_parse

from endodcm.exceptions import ManifestUnreadableError
from endodcm.loggers import logger

__all__ = [
    "MEDIA_ELEMENTS",
    "ManifestContents",
    "read_manifest",
]

MEDIA_ELEMENTS: Mapping[str, str] = MappingProxyType(
    {
        "videofile": "videos",
        "picturefile": "pictures",
        "soundfile": "sounds",
    }
)
"""Lower-cased media element name to the ``ManifestContents`` list it feeds."""


@dataclass(frozen=True)
class ManifestContents:
    """
    Everything a manifest declares, before any interpretation.

    Attributes
    ----------
    path : Path
        The manifest file that was read.
    fields : Mapping[str, str]
        Field name to text, read-only. A repeated field keeps its last value.
    videos, pictures, sounds : tuple[str, ...]
        Media file names relative to the manifest, in document order.
    """

    path: Path
    fields: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )
    videos: tuple[str, ...] = ()
    pictures: tuple[str, ...] = ()
    sounds: tuple[str, ...] = ()


def _local_name(tag: str) -> str:
    # strip "{namespace}" prefix
    return tag.rsplit("}", 1)[-1]


def read_manifest(manifest_path: str | Path) -> ManifestContents:
    """
    Parse a manifest file.

    Parameters
    ----------
    manifest_path : str | Path
        Path to the XML manifest.

    Returns
    -------
    ManifestContents
        Fields and relative media names.

    Raises
    ------
    ManifestUnreadableError
        If the file is missing, unreadable, not well-formed, or uses XML
        constructs rejected by defusedxml (entity expansion, external
        references).
    """
    path = Path(manifest_path)
    try:
        root: Element = safe_parse(path).getroot()
    except OSError as e:
        raise ManifestUnreadableError(path, e.strerror or str(e)) from e
    except ParseError as e:
        raise ManifestUnreadableError(path, f"malformed XML ({e})") from e
    except DefusedXmlException as e:
        raise ManifestUnreadableError(path, f"rejected XML ({e})") from e

    fields: dict[str, str] = {}
    media: dict[str, list[str]] = {name: [] for name in MEDIA_ELEMENTS.values()}

    for element in root.iter():
        if element is root or len(element):
            continue
        name = _local_name(element.tag)
        text = (element.text or "").strip()
        bucket = MEDIA_ELEMENTS.get(name.lower())
        if bucket is not None:
            if text:
                media[bucket].append(text)
            continue
        if name in fields:
            logger.debug(
                "Manifest field repeated, keeping last value",
                field=name,
                path=path,
            )
        fields[name] = text

    contents = ManifestContents(
        path=path,
        fields=MappingProxyType(fields),
        videos=tuple(media["videos"]),
        pictures=tuple(media["pictures"]),
        sounds=tuple(media["sounds"]),
    )
    logger.debug(
        "Read manifest",
        path=path,
        fields=len(fields),
        videos=len(contents.videos),
        pictures=len(contents.pictures),
        sounds=len(contents.sounds),
    )
    return contents
