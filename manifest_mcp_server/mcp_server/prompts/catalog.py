"""Prompt catalog backed by a directory tree of prompt files."""

import logging
from dataclasses import dataclass
from pathlib import Path, PurePosixPath
from typing import Iterator, List, Optional, Tuple, Union

from ...exceptions import MalformedManifestError
from .definitions import PromptDefinition

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResolvedPrompt:
    """A prompt definition together with where it was found."""

    definition: PromptDefinition
    relative_path: PurePosixPath

    @property
    def prompt_directory(self) -> str:
        """Parent directory of the prompt file, empty at the prompt root."""
        parent = self.relative_path.parent
        return "" if str(parent) == "." else str(parent)


class PromptCatalog:
    """Scans and resolves prompt definitions.

    Storage is re-read on every call. Directories are walked depth-first in
    name order and files that fail to parse are logged and skipped.
    """

    def __init__(self, prompt_root: Union[str, Path], suffix: str = ".json"):
        self.root = Path(prompt_root)
        self.suffix = suffix

    def iter_prompt_files(self) -> Iterator[Tuple[PurePosixPath, Path]]:
        """Yield ``(relative_path, path)`` for every prompt file, depth-first."""
        if not self.root.is_dir():
            return
        yield from self._walk(self.root, PurePosixPath())

    def _walk(self, directory: Path, relative: PurePosixPath) -> Iterator[Tuple[PurePosixPath, Path]]:
        for entry in sorted(directory.iterdir()):
            if entry.is_dir():
                yield from self._walk(entry, relative / entry.name)
            elif entry.name.endswith(self.suffix):
                yield relative / entry.name, entry

    def _load(self, path: Path, relative_path: PurePosixPath) -> Optional[PromptDefinition]:
        try:
            return PromptDefinition.from_file(path, relative_path)
        except MalformedManifestError as e:
            logger.warning(f"Skipping prompt file: {e}")
            return None

    def list_all(self) -> List[PromptDefinition]:
        """Return every parseable prompt definition in walk order."""
        prompts = []
        for relative_path, path in self.iter_prompt_files():
            definition = self._load(path, relative_path)
            if definition is not None:
                prompts.append(definition)
        logger.debug(f"Loaded {len(prompts)} prompts from {self.root.name}/")
        return prompts

    def resolve_by_id(self, prompt_id: Optional[str]) -> Optional[ResolvedPrompt]:
        """Find a prompt by identifier.

        A file named ``<id><suffix>`` directly under the root is used as-is.
        Otherwise the first file in walk order whose ``id`` matches wins.

        Returns:
            ResolvedPrompt or None if no prompt declares the identifier
        """
        if not prompt_id:
            return None

        direct = self._direct_match(prompt_id)
        if direct is not None:
            return direct

        for relative_path, path in self.iter_prompt_files():
            definition = self._load(path, relative_path)
            if definition is not None and definition.id == prompt_id:
                logger.debug(f"Resolved prompt {prompt_id!r} at {relative_path}")
                return ResolvedPrompt(definition, relative_path)

        logger.info(f"Prompt not found: {prompt_id!r}")
        return None

    def _direct_match(self, prompt_id: str) -> Optional[ResolvedPrompt]:
        file_name = prompt_id + self.suffix
        relative_path = PurePosixPath(file_name)
        # Identifiers with separators are not file names at the root
        if len(relative_path.parts) != 1 or relative_path.name in (".", ".."):
            return None

        path = self.root / file_name
        if not path.is_file():
            return None

        definition = self._load(path, relative_path)
        if definition is None:
            return None
        return ResolvedPrompt(definition, relative_path)
