__version__ = "0.1.0"

from .dicom import Attribute, AttributeRecord, map_fields
from .exceptions import EndoDcmError, MalformedDateError, ManifestUnreadableError
from .loggers import logger
from .manifest import ManifestContents, find_manifests, read_manifest
from .paths import MediaFiles, resolve_media, resolve_paths
from .processor import (
    EndoscopicConversion,
    EndoscopicFileProcessor,
    convert_manifest,
)

__all__ = [
    "logger",
    ## conversion
    "convert_manifest",
    "EndoscopicConversion",
    "EndoscopicFileProcessor",
    ## attributes
    "Attribute",
    "AttributeRecord",
    "map_fields",
    ## manifests and media
    "ManifestContents",
    "find_manifests",
    "read_manifest",
    "MediaFiles",
    "resolve_media",
    "resolve_paths",
    ## errors
    "EndoDcmError",
    "MalformedDateError",
    "ManifestUnreadableError",
]
