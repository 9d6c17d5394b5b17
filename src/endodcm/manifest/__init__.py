# ruff: noqa
from .manifest_find import find_manifests
from .reader import MEDIA_ELEMENTS, ManifestContents, read_manifest

__all__ = [
    "find_manifests",
    "MEDIA_ELEMENTS",
    "ManifestContents",
    "read_manifest",
]
