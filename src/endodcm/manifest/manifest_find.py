from itertools import islice
from pathlib import Path
from typing import Generator, List

from endodcm.loggers import logger


def find_manifests(
    directory: Path,
    recursive: bool = True,
    extension: str = "xml",
    case_sensitive: bool = False,
    limit: int | None = None,
) -> List[Path]:
    """Locate manifest files in a directory.

    Parameters
    ----------
    directory : Path
        The directory in which to search.
    recursive : bool
        Whether to include subdirectories in the search.
    extension : str, default="xml"
        File extension to search for. If empty, every file is returned.
    case_sensitive : bool, default=False
        Whether the extension must match case exactly.
    limit : int, optional
        Maximum number of files to return.

    Returns
    -------
    List[Path]
        Absolute manifest paths, sorted.

    Examples
    --------
    >>> find_manifests(Path("/data"))
    [PosixPath('/data/case01/capture.xml'), PosixPath('/data/case02/capture.XML')]
    """
    files = sorted(
        _iter_manifests(directory, recursive, extension or "", case_sensitive)
    )
    return list(islice(files, limit)) if limit else files


def _iter_manifests(
    directory: Path,
    recursive: bool,
    extension: str,
    case_sensitive: bool,
) -> Generator[Path, None, None]:
    if not case_sensitive:
        extension = convert_to_case_insensitive(extension)
    pattern = f"*.{extension}" if extension else "*"

    logger.debug(
        "Searching for manifests",
        directory=directory,
        pattern=pattern,
        recursive=recursive,
    )

    glob_method = directory.rglob if recursive else directory.glob
    return (
        file.absolute() for file in glob_method(pattern) if file.is_file()
    )


def convert_to_case_insensitive(extension: str) -> str:
    """Turn an extension into a glob character-set pattern, 'xml' -> '[xX][mM][lL]'."""
    if not extension:
        return ""

    return "".join(
        f"[{char.lower()}{char.upper()}]" for char in extension.lower()
    )
