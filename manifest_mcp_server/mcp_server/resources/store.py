"""Read-only access to text resources below the resource root."""

import logging
from pathlib import Path, PurePosixPath
from typing import List, Optional, Tuple, Union

logger = logging.getLogger(__name__)


def mime_type_for(name: str) -> str:
    """Classify a resource by its file name suffix."""
    return "text/markdown" if name.endswith(".md") else "text/plain"


class ResourceStore:
    """Reads resources from a directory tree.

    Resource names are paths relative to the root. Missing files are reported
    as ``None`` or an empty list, never raised, because callers treat absence
    as "nothing to attach". Content is decoded as UTF-8 with undecodable bytes
    replaced by U+FFFD, so a binary file never fails a request.
    """

    def __init__(self, resource_root: Union[str, Path]):
        self.root = Path(resource_root)

    def _locate(self, name: str) -> Optional[Path]:
        """Map a resource name to a path, refusing names that leave the root."""
        if not name:
            return None
        candidate = self.root / name
        try:
            candidate.resolve().relative_to(self.root.resolve())
        except ValueError:
            logger.warning(f"Rejected resource name outside resource root: {name!r}")
            return None
        return candidate

    def read_resource(self, name: str) -> Optional[str]:
        """Return the content of a single resource, or None if it does not exist."""
        path = self._locate(name)
        if path is None or not path.is_file():
            logger.debug(f"Resource not found: {name!r}")
            return None
        return path.read_text(encoding="utf-8", errors="replace")

    def read_resource_directory(self, subpath: str) -> List[Tuple[str, str]]:
        """Read the immediate files of a resource subdirectory.

        Files are returned in name order and nested directories are skipped.
        Each entry is ``(name, content)`` where name is ``subpath/filename`` so
        attribution headers keep the logical path.
        """
        directory = self._locate(subpath)
        if directory is None or not directory.is_dir():
            return []

        entries = []
        for entry in sorted(directory.iterdir()):
            if entry.is_dir():
                continue
            name = str(PurePosixPath(subpath) / entry.name)
            entries.append((name, entry.read_text(encoding="utf-8", errors="replace")))

        logger.debug(f"Loaded {len(entries)} resources from {subpath!r}")
        return entries

    def list_resources(self) -> List[str]:
        """Names of the files directly under the resource root."""
        if not self.root.is_dir():
            return []
        return [entry.name for entry in sorted(self.root.iterdir()) if not entry.is_dir()]
