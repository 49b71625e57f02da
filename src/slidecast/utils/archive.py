"""Archive extraction collaborator."""

import logging
import tarfile
from pathlib import Path

from slidecast.utils.diagnostics import list_directory
from slidecast.utils.errors import ExternalToolError, UnexpectedArchiveLayout

ARCHIVE_SUFFIXES = (".tar.gz", ".tgz")

logger = logging.getLogger(__name__)


def archive_stem(archive_path: Path) -> str:
    """Name of the archive without its compression suffix."""
    name = archive_path.name
    for suffix in ARCHIVE_SUFFIXES:
        if name.endswith(suffix) and len(name) > len(suffix):
            return name[:-len(suffix)]
    raise ValueError(f"expected path to lead to a .tar.gz archive: {archive_path}")


def extract_archive(archive_path: Path, destination: Path) -> Path:
    """
    Unpack a gzipped tarball and return its single top-level directory.

    Raises:
        ExternalToolError: If the archive cannot be read.
        UnexpectedArchiveLayout: If it does not unpack to exactly one directory.
    """
    logger.info(f"Extracting {archive_path.name}...")
    destination.mkdir(parents=True, exist_ok=True)
    try:
        with tarfile.open(archive_path, "r:gz") as tar:
            tar.extractall(destination, filter="data")
    except (tarfile.TarError, EOFError, OSError) as e:
        raise ExternalToolError(f"could not extract {archive_path.name}: {e}")

    entries = list_directory(destination)
    if len(entries) != 1 or not entries[0].is_dir:
        raise UnexpectedArchiveLayout(
            f"can't find tarball output: expected a single top-level directory, found {len(entries)} entries"
        )
    return destination / entries[0].name
